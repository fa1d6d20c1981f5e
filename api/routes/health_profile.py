"""Health profile and nutrition target routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user
from domain.mappers import UserMapper
from domain.models import AppUser
from domain.schemas.health_schemas import (
    HealthProfileResponse,
    HealthProfileUpdate,
    SuggestedTargetsResponse,
    TargetInputs,
    TargetsUpdate,
)
from services.health_service import HealthService, is_complete
from services.nutrition_targets import calculate_suggested_targets

router = APIRouter(prefix="/health-profile", tags=["Health Profile"])


@router.get("", response_model=HealthProfileResponse)
def get_profile(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = HealthService.get_profile(db, user.user_id)
    return UserMapper.to_health_response(profile, is_complete(profile))


@router.put("", response_model=HealthProfileResponse)
def update_profile(
    data: HealthProfileUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Merge the provided body metrics into the stored profile."""
    profile = HealthService.upsert_profile(db, user.user_id, data)
    return UserMapper.to_health_response(profile, is_complete(profile))


@router.post("/suggested-targets", response_model=SuggestedTargetsResponse)
def suggested_targets(data: TargetInputs, user: AppUser = Depends(get_current_user)):
    """Mifflin-St Jeor based calorie and macro suggestion."""
    return calculate_suggested_targets(data)


@router.put("/targets", response_model=HealthProfileResponse)
def save_targets(
    data: TargetsUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = HealthService.save_targets(db, user.user_id, data)
    return UserMapper.to_health_response(profile, is_complete(profile))
