"""
Tests for health profiles and suggested daily targets.

Suggested targets
=================
BMR (Mifflin-St Jeor) x activity multiplier x goal factor, rounded to the
nearest 50 kcal. Protein and fat come from grams per kg of body weight and
carbs fill the remaining calories.
"""

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_user, auth_headers
from domain.enums import ActivityLevel, Gender, HealthGoal
from domain.schemas.health_schemas import TargetInputs
from services.nutrition_targets import _js_round, bmr, calculate_suggested_targets


# =============================================================================
# CALCULATION
# =============================================================================


def test_weight_loss_targets_for_lightly_active_woman():
    result = calculate_suggested_targets(
        TargetInputs(
            height_cm=165,
            weight_kg=65,
            age=28,
            gender=Gender.FEMALE,
            activity_level=ActivityLevel.LIGHT,
            goal=HealthGoal.WEIGHT_LOSS,
        )
    )

    assert result.calories == 1500
    assert result.macros.protein == 143
    assert result.macros.fat == 65
    assert result.macros.carbs == 86


def test_maintenance_targets_for_moderately_active_man():
    result = calculate_suggested_targets(
        TargetInputs(
            height_cm=180,
            weight_kg=75,
            age=30,
            gender=Gender.MALE,
            activity_level=ActivityLevel.MODERATE,
            goal=HealthGoal.MAINTENANCE,
        )
    )

    assert result.calories == 2700
    assert result.macros.protein == 135
    assert result.macros.fat == 60
    assert result.macros.carbs == 405


def test_muscle_gain_uses_higher_factor():
    inputs = dict(height_cm=180, weight_kg=75, age=30, gender=Gender.MALE, activity_level=ActivityLevel.MODERATE)

    gain = calculate_suggested_targets(TargetInputs(goal=HealthGoal.MUSCLE_GAIN, **inputs))
    keep = calculate_suggested_targets(TargetInputs(goal=HealthGoal.MAINTENANCE, **inputs))

    assert gain.calories > keep.calories
    assert gain.calories % 50 == 0
    assert gain.macros.protein == 150


@pytest.mark.parametrize(
    "missing", ["height_cm", "weight_kg", "age", "gender", "activity_level", "goal"]
)
def test_any_missing_input_gives_zero_targets(missing):
    inputs = dict(
        height_cm=170,
        weight_kg=70,
        age=40,
        gender=Gender.OTHER,
        activity_level=ActivityLevel.ACTIVE,
        goal=HealthGoal.MAINTENANCE,
    )
    inputs[missing] = None

    result = calculate_suggested_targets(TargetInputs(**inputs))

    assert result.calories == 0
    assert result.macros.model_dump() == {"protein": 0, "carbs": 0, "fat": 0}


def test_non_male_gender_uses_female_offset():
    assert bmr(70, 170, 40, Gender.MALE) - bmr(70, 170, 40, Gender.OTHER) == 166


@pytest.mark.parametrize("value,expected", [(2.5, 3), (3.5, 4), (85.75, 86), (30.49, 30)])
def test_rounding_is_half_up(value, expected):
    assert _js_round(value) == expected


# =============================================================================
# API
# =============================================================================


def test_empty_profile_for_new_user(db_session: Session):
    user = make_user(db_session)

    resp = client.get("/health-profile", headers=auth_headers(user))

    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == str(user.user_id)
    assert body["height_cm"] is None
    assert body["is_complete"] is False


def test_profile_update_merges_fields(db_session: Session):
    user = make_user(db_session, profile_type="athlete")
    headers = auth_headers(user)

    client.put("/health-profile", json={"height_cm": 182, "weight_kg": 80}, headers=headers)
    resp = client.put(
        "/health-profile",
        json={"age": 34, "gender": "male", "activity_level": "active", "goal": "muscle_gain"},
        headers=headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["height_cm"] == 182
    assert body["weight_kg"] == 80
    assert body["goal"] == "muscle_gain"
    assert body["is_complete"] is False


def test_profile_update_validates_ranges(db_session: Session):
    user = make_user(db_session)

    resp = client.put("/health-profile", json={"age": -3}, headers=auth_headers(user))

    assert resp.status_code == 422


def test_suggested_targets_endpoint(db_session: Session):
    user = make_user(db_session)

    resp = client.post(
        "/health-profile/suggested-targets",
        json={
            "height_cm": 165,
            "weight_kg": 65,
            "age": 28,
            "gender": "female",
            "activity_level": "light",
            "goal": "weight_loss",
        },
        headers=auth_headers(user),
    )

    assert resp.status_code == 200
    assert resp.json() == {"calories": 1500, "macros": {"protein": 143, "carbs": 86, "fat": 65}}


def test_saving_targets_completes_profile(db_session: Session):
    user = make_user(db_session)
    headers = auth_headers(user)
    client.put(
        "/health-profile",
        json={
            "height_cm": 165,
            "weight_kg": 65,
            "age": 28,
            "gender": "female",
            "activity_level": "light",
            "goal": "weight_loss",
        },
        headers=headers,
    )

    resp = client.put(
        "/health-profile/targets",
        json={"calories": 1600, "macros": {"protein": 140, "carbs": 110, "fat": 60}, "is_custom": True},
        headers=headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["calorie_target"] == 1600
    assert body["protein_target_g"] == 140
    assert body["carbs_target_g"] == 110
    assert body["fat_target_g"] == 60
    assert body["is_custom_plan"] is True
    assert body["is_complete"] is True

    again = client.get("/health-profile", headers=headers).json()
    assert again["is_complete"] is True
    assert again["weight_kg"] == 65


def test_health_profile_requires_token(db_session: Session):
    assert client.get("/health-profile").status_code == 401
