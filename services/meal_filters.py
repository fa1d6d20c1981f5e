"""
Journal filtering helpers.

Pure functions over already-loaded meals. Calendar math (today, this week,
custom ranges) runs in the caller's timezone so "today" is the user's today.
"""

from datetime import date, datetime, time, timedelta
from numbers import Number
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import settings
from app.exceptions import ServiceValidationError
from app.timeutils import as_utc, utcnow
from domain.enums import FilterPeriod
from domain.schemas.meal_schemas import NutritionFacts


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    """IANA timezone by name, defaulting to the configured zone"""
    try:
        return ZoneInfo(name or settings.default_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ServiceValidationError(f"Unknown timezone: {name}")


def _local_date(value: datetime, tz: ZoneInfo) -> date:
    return as_utc(value).astimezone(tz).date()


def _day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return start, end


def week_bounds(now: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Monday 00:00 to Sunday 23:59:59.999999 of the week containing ``now``"""
    today = _local_date(now, tz)
    monday = today - timedelta(days=today.weekday())
    start, _ = _day_bounds(monday, tz)
    _, end = _day_bounds(monday + timedelta(days=6), tz)
    return start, end


def _matches_search(meal, term: str) -> bool:
    term = term.lower()
    if term in (meal.title or "").lower():
        return True
    if term in (meal.description or "").lower():
        return True
    if any(term in str(item).lower() for item in (meal.food_items or [])):
        return True
    return bool(meal.notes) and term in meal.notes.lower()


def filter_meals(
    meals: Iterable,
    period: Optional[FilterPeriod] = None,
    on_date: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    meal_type: Optional[str] = None,
    nutrition_score: Optional[str] = None,
    search: Optional[str] = None,
    tz: Optional[ZoneInfo] = None,
    now: Optional[datetime] = None,
) -> List:
    """
    Filter meals by date window, meal type, nutrition score and search text.

    Args:
        meals: objects exposing created_at, meal_type, nutrition_score,
            title, description, food_items and notes
        period: day, week or custom; a custom period without both bounds
            applies no date filter
        on_date: single-day filter, only used when period is None
        start, end: inclusive custom range (whole days)
        tz: timezone for calendar math
        now: reference time, defaults to the current time

    Returns:
        Matching meals in their original order
    """
    tz = tz or resolve_timezone(None)
    now = now or utcnow()
    period = FilterPeriod(period) if period else None

    window = None
    if period == FilterPeriod.DAY:
        window = _day_bounds(_local_date(now, tz), tz)
    elif period == FilterPeriod.WEEK:
        window = week_bounds(now, tz)
    elif period == FilterPeriod.CUSTOM and start and end:
        window = (_day_bounds(start, tz)[0], _day_bounds(end, tz)[1])
    elif period is None and on_date:
        window = _day_bounds(on_date, tz)

    meal_type = getattr(meal_type, "value", meal_type)
    nutrition_score = getattr(nutrition_score, "value", nutrition_score)

    result = []
    for meal in meals:
        if window is not None:
            created = as_utc(meal.created_at)
            if not (window[0] <= created <= window[1]):
                continue
        if meal_type and getattr(meal.meal_type, "value", meal.meal_type) != meal_type:
            continue
        if nutrition_score and (
            getattr(meal.nutrition_score, "value", meal.nutrition_score)
            != nutrition_score
        ):
            continue
        if search and not _matches_search(meal, search):
            continue
        result.append(meal)
    return result


def _numeric(value) -> float:
    # bool is a Number subclass but never a valid calorie value
    if isinstance(value, Number) and not isinstance(value, bool):
        return float(value)
    return 0.0


def calculate_total_calories(meals: Sequence) -> float:
    """Sum of calories; non-numeric values count as 0"""
    return sum(_numeric(meal.calories) for meal in meals)


def summarize(meals: Sequence) -> NutritionFacts:
    """Totals of calories and macros across meals"""
    return NutritionFacts(
        calories=calculate_total_calories(meals),
        protein=sum(_numeric(m.protein) for m in meals),
        fat=sum(_numeric(m.fat) for m in meals),
        carbs=sum(_numeric(m.carbs) for m in meals),
    )
