"""
Meal domain mappers.
Handles transformation between Meal ORM rows and journal DTOs.
"""

from domain.models import Meal
from domain.schemas.meal_schemas import MealResponse, NutritionFacts
from app.timeutils import as_utc


class MealMapper:
    """Mapper for meal-related transformations."""

    @staticmethod
    def nutrition_of(meal: Meal) -> NutritionFacts:
        return NutritionFacts(
            calories=meal.calories or 0,
            protein=meal.protein or 0,
            fat=meal.fat or 0,
            carbs=meal.carbs or 0,
        )

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        """
        Convert Meal ORM model to MealResponse DTO.

        Args:
            meal: Meal ORM instance

        Returns:
            MealResponse with nutrition grouped and timestamps in UTC
        """
        return MealResponse(
            meal_id=meal.meal_id,
            user_id=meal.user_id,
            title=meal.title,
            description=meal.description or "",
            meal_type=meal.meal_type,
            food_items=list(meal.food_items or []),
            nutrition=MealMapper.nutrition_of(meal),
            nutrition_score=meal.nutrition_score,
            image_url=meal.image_url,
            notes=meal.notes,
            created_at=as_utc(meal.created_at),
            updated_at=as_utc(meal.updated_at),
        )
