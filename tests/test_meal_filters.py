"""
Tests for journal filtering (pure functions).

Covers:
- day / week / custom / single-date windows
- timezone-aware "today"
- meal type, nutrition score and free text search
- calorie and macro totals with non-numeric values
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from app.exceptions import ServiceValidationError
from domain.enums import FilterPeriod, MealType, NutritionScore
from services.meal_filters import (
    calculate_total_calories,
    filter_meals,
    resolve_timezone,
    summarize,
    week_bounds,
)

UTC = ZoneInfo("UTC")
# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def meal(
    created_at,
    title="Oatmeal",
    description="Rolled oats with milk",
    meal_type=MealType.BREAKFAST,
    food_items=("oats", "milk"),
    nutrition_score=NutritionScore.HEALTHY,
    notes=None,
    calories=350,
    protein=12,
    fat=8,
    carbs=55,
):
    return SimpleNamespace(
        created_at=created_at,
        title=title,
        description=description,
        meal_type=meal_type,
        food_items=list(food_items),
        nutrition_score=nutrition_score,
        notes=notes,
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
    )


def at(*args):
    return datetime(*args, tzinfo=timezone.utc)


# =============================================================================
# DATE WINDOWS
# =============================================================================


def test_day_period_keeps_only_today():
    today = meal(at(2024, 5, 15, 7, 30))
    yesterday = meal(at(2024, 5, 14, 23, 59))

    result = filter_meals([today, yesterday], period=FilterPeriod.DAY, tz=UTC, now=NOW)

    assert result == [today]


def test_week_period_is_monday_to_sunday_inclusive():
    monday_start = meal(at(2024, 5, 13, 0, 0))
    sunday_end = meal(at(2024, 5, 19, 23, 59, 59))
    previous_sunday = meal(at(2024, 5, 12, 23, 59))
    next_monday = meal(at(2024, 5, 20, 0, 0))

    result = filter_meals(
        [monday_start, sunday_end, previous_sunday, next_monday],
        period=FilterPeriod.WEEK,
        tz=UTC,
        now=NOW,
    )

    assert result == [monday_start, sunday_end]


def test_week_bounds_when_today_is_sunday():
    sunday = datetime(2024, 5, 19, 18, 0, tzinfo=timezone.utc)
    start, end = week_bounds(sunday, UTC)

    assert start.date() == date(2024, 5, 13)
    assert end.date() == date(2024, 5, 19)


def test_custom_period_covers_whole_days():
    first = meal(at(2024, 5, 1, 0, 0))
    last = meal(at(2024, 5, 3, 23, 59))
    outside = meal(at(2024, 5, 4, 0, 1))

    result = filter_meals(
        [first, last, outside],
        period=FilterPeriod.CUSTOM,
        start=date(2024, 5, 1),
        end=date(2024, 5, 3),
        tz=UTC,
        now=NOW,
    )

    assert result == [first, last]


def test_custom_period_without_both_bounds_applies_no_date_filter():
    meals = [meal(at(2023, 1, 1, 9, 0)), meal(at(2024, 5, 15, 9, 0))]

    result = filter_meals(
        meals, period=FilterPeriod.CUSTOM, start=date(2024, 5, 1), tz=UTC, now=NOW
    )

    assert result == meals


def test_single_date_used_only_without_period():
    target = meal(at(2024, 4, 2, 13, 0))
    other = meal(at(2024, 4, 3, 13, 0))

    assert filter_meals([target, other], on_date=date(2024, 4, 2), tz=UTC, now=NOW) == [
        target
    ]
    # period wins over the single date
    assert (
        filter_meals(
            [target, other],
            period=FilterPeriod.DAY,
            on_date=date(2024, 4, 2),
            tz=UTC,
            now=NOW,
        )
        == []
    )


def test_naive_timestamps_are_treated_as_utc():
    naive = meal(datetime(2024, 5, 15, 8, 0))

    assert filter_meals([naive], period=FilterPeriod.DAY, tz=UTC, now=NOW) == [naive]


def test_today_follows_the_callers_timezone():
    # 02:00 UTC on the 15th is still the 14th in New York
    late_dinner = meal(at(2024, 5, 15, 2, 0))

    in_utc = filter_meals([late_dinner], period=FilterPeriod.DAY, tz=UTC, now=NOW)
    in_new_york = filter_meals(
        [late_dinner],
        period=FilterPeriod.DAY,
        tz=ZoneInfo("America/New_York"),
        now=NOW,
    )

    assert in_utc == [late_dinner]
    assert in_new_york == []


def test_unknown_timezone_is_rejected():
    with pytest.raises(ServiceValidationError):
        resolve_timezone("Mars/Olympus_Mons")


# =============================================================================
# ATTRIBUTE FILTERS
# =============================================================================


def test_meal_type_and_score_match_exactly():
    breakfast = meal(at(2024, 5, 15, 8, 0))
    dinner = meal(
        at(2024, 5, 15, 19, 0),
        meal_type=MealType.DINNER,
        nutrition_score=NutritionScore.UNHEALTHY,
    )

    assert filter_meals([breakfast, dinner], meal_type=MealType.DINNER, now=NOW) == [dinner]
    assert filter_meals([breakfast, dinner], meal_type="breakfast", now=NOW) == [breakfast]
    assert filter_meals(
        [breakfast, dinner], nutrition_score=NutritionScore.UNHEALTHY, now=NOW
    ) == [dinner]


@pytest.mark.parametrize(
    "term",
    ["OATMEAL", "rolled", "Milk", "after gym"],
)
def test_search_matches_title_description_items_or_notes(term):
    target = meal(at(2024, 5, 15, 8, 0), notes="Ate this after gym")
    other = meal(
        at(2024, 5, 15, 12, 0),
        title="Burger",
        description="Beef patty",
        food_items=("bun", "beef"),
    )

    assert filter_meals([target, other], search=term, now=NOW) == [target]


def test_search_without_notes_does_not_fail():
    plain = meal(at(2024, 5, 15, 8, 0), notes=None)

    assert filter_meals([plain], search="nothing here", now=NOW) == []


def test_filters_combine():
    match = meal(at(2024, 5, 15, 8, 0))
    wrong_day = meal(at(2024, 5, 10, 8, 0))
    wrong_type = meal(at(2024, 5, 15, 9, 0), meal_type=MealType.SNACK)

    result = filter_meals(
        [match, wrong_day, wrong_type],
        period=FilterPeriod.WEEK,
        meal_type=MealType.BREAKFAST,
        search="oats",
        tz=UTC,
        now=NOW,
    )

    assert result == [match]


# =============================================================================
# TOTALS
# =============================================================================


def test_total_calories_ignores_non_numeric_values():
    meals = [
        meal(NOW, calories=400),
        meal(NOW, calories=250.5),
        meal(NOW, calories="lots"),
        meal(NOW, calories=None),
    ]

    assert calculate_total_calories(meals) == 650.5


def test_total_calories_of_empty_list_is_zero():
    assert calculate_total_calories([]) == 0


def test_summarize_sums_macros():
    totals = summarize(
        [
            meal(NOW, calories=300, protein=20, fat=10, carbs=30),
            meal(NOW, calories=500, protein=35, fat=22, carbs=40),
        ]
    )

    assert totals.calories == 800
    assert totals.protein == 55
    assert totals.fat == 32
    assert totals.carbs == 70
