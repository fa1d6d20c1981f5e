"""
Meal journal: CRUD scoped to the owning user, filtered listing, CSV export.
"""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo
import csv
import io
import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from app.timeutils import as_utc, utcnow
from domain.enums import FilterPeriod, MealType, NutritionScore
from domain.models import Meal
from domain.schemas.meal_schemas import MealCreate, MealUpdate
from repositories import MealRepository
from services import meal_filters

logger = logging.getLogger("mealscan.meals")

CSV_HEADERS = [
    "Date",
    "Time",
    "Title",
    "Meal Type",
    "Description",
    "Food Items",
    "Calories",
    "Protein (g)",
    "Fat (g)",
    "Carbs (g)",
    "Nutrition Score",
    "Notes",
]


def _format_number(value) -> str:
    value = float(value or 0)
    return str(int(value)) if value.is_integer() else str(value)


def meals_to_csv(meals: List[Meal], tz: ZoneInfo) -> str:
    """Journal rows as CSV; fields with commas, quotes or newlines are quoted"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADERS)
    for meal in meals:
        local = as_utc(meal.created_at).astimezone(tz)
        writer.writerow(
            [
                local.strftime("%Y-%m-%d"),
                local.strftime("%H:%M"),
                meal.title,
                MealType(meal.meal_type).value,
                meal.description or "",
                "; ".join(meal.food_items or []),
                _format_number(meal.calories),
                _format_number(meal.protein),
                _format_number(meal.fat),
                _format_number(meal.carbs),
                NutritionScore(meal.nutrition_score).value,
                meal.notes or "",
            ]
        )
    return buffer.getvalue()


def export_filename(now=None) -> str:
    stamp = (now or utcnow()).strftime("%Y-%m-%dT%H-%M-%S-%f")[:-3] + "Z"
    return f"meal-journal-export-{stamp}.csv"


class MealService:
    """Business logic for the meal journal"""

    @staticmethod
    def create_meal(db: Session, user_id: UUID, data: MealCreate) -> Meal:
        meal = Meal(
            user_id=user_id,
            title=data.title.strip(),
            description=data.description,
            meal_type=data.meal_type,
            food_items=list(data.food_items),
            calories=data.nutrition.calories,
            protein=data.nutrition.protein,
            fat=data.nutrition.fat,
            carbs=data.nutrition.carbs,
            nutrition_score=data.nutrition_score,
            image_url=data.image_url,
            notes=data.notes,
            created_at=as_utc(data.created_at) if data.created_at else utcnow(),
        )
        meal = MealRepository(db).create(meal)
        logger.info(f"meal_created user_id={user_id} meal_id={meal.meal_id}")
        return meal

    @staticmethod
    def get_meal(db: Session, user_id: UUID, meal_id: UUID) -> Meal:
        meal = MealRepository(db).get_for_user(meal_id, user_id)
        if not meal:
            logger.warning(f"meal_not_found user_id={user_id} meal_id={meal_id}")
            raise NotFoundError(f"Meal {meal_id} not found")
        return meal

    @staticmethod
    def update_meal(
        db: Session, user_id: UUID, meal_id: UUID, data: MealUpdate
    ) -> Meal:
        """Partial update; fields left out of the request keep their values"""
        meal = MealService.get_meal(db, user_id, meal_id)
        changes = data.model_dump(exclude_unset=True)

        nutrition = changes.pop("nutrition", None)
        if nutrition is not None:
            for key, value in nutrition.items():
                setattr(meal, key, value)
        if "created_at" in changes:
            changes["created_at"] = as_utc(changes["created_at"]) or meal.created_at
        if "food_items" in changes and changes["food_items"] is None:
            changes["food_items"] = []
        # Required columns ignore explicit nulls
        for key in ("title", "description", "meal_type", "nutrition_score"):
            if key in changes and changes[key] is None:
                changes.pop(key)

        for key, value in changes.items():
            setattr(meal, key, value)

        meal = MealRepository(db).update(meal)
        logger.info(
            f"meal_updated user_id={user_id} meal_id={meal_id} "
            f"fields={sorted(data.model_fields_set)}"
        )
        return meal

    @staticmethod
    def delete_meal(db: Session, user_id: UUID, meal_id: UUID) -> None:
        meal = MealService.get_meal(db, user_id, meal_id)
        repo = MealRepository(db)
        repo.remove(meal)
        db.commit()
        logger.info(f"meal_deleted user_id={user_id} meal_id={meal_id}")

    @staticmethod
    def list_meals(
        db: Session,
        user_id: UUID,
        period: Optional[FilterPeriod] = None,
        on_date: Optional[date] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        meal_type: Optional[MealType] = None,
        nutrition_score: Optional[NutritionScore] = None,
        search: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> Tuple[List[Meal], ZoneInfo]:
        """Newest-first meals of the user after applying the journal filters"""
        tz = meal_filters.resolve_timezone(timezone)
        meals = MealRepository(db).list_for_user(user_id)
        filtered = meal_filters.filter_meals(
            meals,
            period=period,
            on_date=on_date,
            start=start,
            end=end,
            meal_type=meal_type,
            nutrition_score=nutrition_score,
            search=search,
            tz=tz,
        )
        logger.info(
            f"meals_listed user_id={user_id} total={len(meals)} "
            f"matched={len(filtered)} period={period}"
        )
        return filtered, tz
