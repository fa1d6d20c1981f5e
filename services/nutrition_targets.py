"""
Daily calorie and macro target suggestions.

BMR follows Mifflin-St Jeor, scaled by activity level and goal.
"""

from typing import Optional

from domain.enums import ActivityLevel, Gender, HealthGoal
from domain.schemas.health_schemas import (
    MacroTargets,
    SuggestedTargetsResponse,
    TargetInputs,
)

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

GOAL_FACTORS = {
    HealthGoal.WEIGHT_LOSS: 0.8,
    HealthGoal.MAINTENANCE: 1.0,
    HealthGoal.MUSCLE_GAIN: 1.1,
}

# grams per kg of body weight: (protein, fat)
MACRO_RATIOS = {
    HealthGoal.WEIGHT_LOSS: (2.2, 1.0),
    HealthGoal.MUSCLE_GAIN: (2.0, 0.8),
    HealthGoal.MAINTENANCE: (1.8, 0.8),
}


def _js_round(value: float) -> int:
    # half-up, not banker's rounding
    return int((value + 0.5) // 1)


def bmr(weight_kg: float, height_cm: float, age: int, gender: Optional[Gender]) -> float:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == Gender.MALE else base - 161


def zero_targets() -> SuggestedTargetsResponse:
    return SuggestedTargetsResponse(
        calories=0, macros=MacroTargets(protein=0, carbs=0, fat=0)
    )


def calculate_suggested_targets(data: TargetInputs) -> SuggestedTargetsResponse:
    """Suggested daily calories (nearest 50) and macros; zeros if any input is missing"""
    if not all(
        [
            data.height_cm,
            data.weight_kg,
            data.age,
            data.gender,
            data.activity_level,
            data.goal,
        ]
    ):
        return zero_targets()

    tdee = bmr(data.weight_kg, data.height_cm, data.age, data.gender)
    tdee *= ACTIVITY_MULTIPLIERS[ActivityLevel(data.activity_level)]
    goal = HealthGoal(data.goal)
    calories = _js_round(tdee * GOAL_FACTORS[goal] / 50) * 50

    protein_per_kg, fat_per_kg = MACRO_RATIOS[goal]
    protein = data.weight_kg * protein_per_kg
    fat = data.weight_kg * fat_per_kg
    carbs = (calories - protein * 4 - fat * 9) / 4

    return SuggestedTargetsResponse(
        calories=calories,
        macros=MacroTargets(
            protein=_js_round(protein),
            carbs=max(_js_round(carbs), 0),
            fat=_js_round(fat),
        ),
    )
