from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import Gender, ActivityLevel, HealthGoal


class HealthProfileUpdate(BaseModel):
    """Partial profile update"""

    height_cm: Optional[float] = Field(None, gt=0, le=300)
    weight_kg: Optional[float] = Field(None, gt=0, le=700)
    age: Optional[int] = Field(None, gt=0, le=130)
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[HealthGoal] = None


class TargetInputs(BaseModel):
    """Inputs for suggested daily targets; missing values give zero targets"""

    height_cm: Optional[float] = Field(None, gt=0)
    weight_kg: Optional[float] = Field(None, gt=0)
    age: Optional[int] = Field(None, gt=0)
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[HealthGoal] = None


class MacroTargets(BaseModel):
    protein: int = Field(..., ge=0)
    carbs: int = Field(..., ge=0)
    fat: int = Field(..., ge=0)


class SuggestedTargetsResponse(BaseModel):
    calories: int
    macros: MacroTargets


class TargetsUpdate(BaseModel):
    """Daily targets chosen by the user"""

    calories: int = Field(..., ge=0)
    macros: MacroTargets
    is_custom: bool = False


class HealthProfileResponse(BaseModel):
    user_id: UUID
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    age: Optional[int] = None
    gender: Optional[Gender] = None
    activity_level: Optional[ActivityLevel] = None
    goal: Optional[HealthGoal] = None
    calorie_target: Optional[int] = None
    protein_target_g: Optional[int] = None
    carbs_target_g: Optional[int] = None
    fat_target_g: Optional[int] = None
    is_custom_plan: bool = False
    is_complete: bool = False
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
