"""Meal journal routes"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from domain.enums import FilterPeriod, MealType, NutritionScore
from domain.mappers import MealMapper
from domain.models import AppUser
from domain.schemas.meal_schemas import (
    MealCreate,
    MealListResponse,
    MealResponse,
    MealUpdate,
)
from services import meal_filters
from services.meal_service import MealService, export_filename, meals_to_csv

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("mealscan.api.meals")


class MealFilterParams:
    """Journal filter query parameters"""

    def __init__(
        self,
        period: Optional[FilterPeriod] = Query(None, description="day, week or custom"),
        on_date: Optional[date] = Query(
            None, alias="date", description="Single day, used when no period is set"
        ),
        start: Optional[date] = Query(None, description="Custom range start"),
        end: Optional[date] = Query(None, description="Custom range end"),
        meal_type: Optional[MealType] = Query(None),
        nutrition_score: Optional[NutritionScore] = Query(None),
        search: Optional[str] = Query(None, max_length=200),
        tz: Optional[str] = Query(None, description="IANA timezone for calendar math"),
    ):
        self.period = period
        self.on_date = on_date
        self.start = start
        self.end = end
        self.meal_type = meal_type
        self.nutrition_score = nutrition_score
        self.search = search
        self.tz = tz

    def apply(self, db: Session, user_id: UUID):
        return MealService.list_meals(
            db,
            user_id,
            period=self.period,
            on_date=self.on_date,
            start=self.start,
            end=self.end,
            meal_type=self.meal_type,
            nutrition_score=self.nutrition_score,
            search=self.search,
            timezone=self.tz,
        )


@router.get("", response_model=MealListResponse)
def list_meals(
    filters: MealFilterParams = Depends(),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Newest-first meals matching the filters, with calorie and macro totals."""
    meals, _ = filters.apply(db, user.user_id)
    totals = meal_filters.summarize(meals)
    return MealListResponse(
        meals=[MealMapper.to_response(m) for m in meals],
        count=len(meals),
        total_calories=meal_filters.calculate_total_calories(meals),
        totals=totals,
    )


@router.get("/export")
def export_meals(
    filters: MealFilterParams = Depends(),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Download the filtered journal as CSV."""
    meals, tz = filters.apply(db, user.user_id)
    filename = export_filename()
    logger.info(f"meals_exported user_id={user.user_id} rows={len(meals)}")
    return Response(
        content=meals_to_csv(meals, tz),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    data: MealCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    meal = MealService.create_meal(db, user.user_id, data)
    return MealMapper.to_response(meal)


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealMapper.to_response(MealService.get_meal(db, user.user_id, meal_id))


@router.patch("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: UUID,
    data: MealUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partial update; omitted fields are left unchanged."""
    meal = MealService.update_meal(db, user.user_id, meal_id, data)
    return MealMapper.to_response(meal)


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MealService.delete_meal(db, user.user_id, meal_id)
    return {"status": "ok", "deleted": str(meal_id)}
