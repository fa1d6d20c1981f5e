"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository, HealthProfileRepository
from repositories.meal_repository import MealRepository
from repositories.subscription_repository import (
    SubscriptionRepository,
    AppSettingsRepository,
    InviteCodeRepository,
    BetaSignupRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "HealthProfileRepository",
    "MealRepository",
    "SubscriptionRepository",
    "AppSettingsRepository",
    "InviteCodeRepository",
    "BetaSignupRepository",
]
