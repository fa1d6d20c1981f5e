from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import MealType, NutritionScore


class NutritionFacts(BaseModel):
    """Macro breakdown for one meal"""

    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0, description="grams")
    fat: float = Field(0, ge=0, description="grams")
    carbs: float = Field(0, ge=0, description="grams")


class MealCreate(BaseModel):
    """Schema for logging a meal in the journal"""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=4000)
    meal_type: MealType = MealType.RANDOM
    food_items: List[str] = Field(default_factory=list)
    nutrition: NutritionFacts = Field(default_factory=NutritionFacts)
    nutrition_score: NutritionScore = NutritionScore.MODERATE
    image_url: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=4000)
    created_at: Optional[datetime] = Field(
        None, description="When the meal was eaten; defaults to now"
    )


class MealUpdate(BaseModel):
    """Partial update; only provided fields change"""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=4000)
    meal_type: Optional[MealType] = None
    food_items: Optional[List[str]] = None
    nutrition: Optional[NutritionFacts] = None
    nutrition_score: Optional[NutritionScore] = None
    image_url: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=4000)
    created_at: Optional[datetime] = None


class MealResponse(BaseModel):
    meal_id: UUID
    user_id: UUID
    title: str
    description: str
    meal_type: MealType
    food_items: List[str]
    nutrition: NutritionFacts
    nutrition_score: NutritionScore
    image_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class MealListResponse(BaseModel):
    """Filtered journal page with running totals"""

    meals: List[MealResponse]
    count: int
    total_calories: float
    totals: NutritionFacts
