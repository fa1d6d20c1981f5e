"""AI meal analysis routes"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_optional_user
from app.config import settings
from app.exceptions import UnauthorizedError
from domain.models import AppUser
from domain.schemas.analysis_schemas import (
    MealAnalysisResponse,
    PhotoAnalysisRequest,
    TextAnalysisRequest,
)
from services.analysis_service import AnalysisService

router = APIRouter(prefix="/analysis", tags=["Analysis"])
logger = logging.getLogger("mealscan.api.analysis")


def _caller(user: Optional[AppUser] = Depends(get_optional_user)) -> Optional[AppUser]:
    if user is None and not settings.allow_anonymous_analysis:
        raise UnauthorizedError("Sign in to analyze meals", code="MISSING_TOKEN")
    return user


@router.post("/photo", response_model=MealAnalysisResponse)
def analyze_photo(
    data: PhotoAnalysisRequest,
    user: Optional[AppUser] = Depends(_caller),
    db: Session = Depends(get_db),
):
    """Estimate nutrition from a meal photo. Counts one scan for signed-in users."""
    return AnalysisService.analyze_photo(db, user, data.image_data, data.notes)


@router.post("/text", response_model=MealAnalysisResponse)
def analyze_text(
    data: TextAnalysisRequest,
    user: Optional[AppUser] = Depends(_caller),
    db: Session = Depends(get_db),
):
    """Estimate nutrition from a free text description."""
    return AnalysisService.analyze_text(db, user, data.description)
