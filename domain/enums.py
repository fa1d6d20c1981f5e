"""
Domain enums for MealScan application.
Contains all enumeration types used across the domain models.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    USER = "user"
    ADMIN = "admin"


class MealType(str, enum.Enum):
    """Meal slot a journal entry belongs to"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    RANDOM = "random"


class NutritionScore(str, enum.Enum):
    """Overall healthiness rating returned by the analysis model"""

    VERY_HEALTHY = "very healthy"
    HEALTHY = "healthy"
    MODERATE = "moderate"
    UNHEALTHY = "unhealthy"
    NOT_HEALTHY = "not healthy"


class FilterPeriod(str, enum.Enum):
    """Journal date filter presets"""

    DAY = "day"
    WEEK = "week"
    CUSTOM = "custom"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class HealthGoal(str, enum.Enum):
    """Dietary goal types"""

    WEIGHT_LOSS = "weight_loss"
    MAINTENANCE = "maintenance"
    MUSCLE_GAIN = "muscle_gain"


class BillingCycle(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class AnalysisType(str, enum.Enum):
    PHOTO = "photo"
    TEXT = "text"
