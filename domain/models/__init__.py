"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser, HealthProfile
from domain.models.meal import Meal
from domain.models.subscription import (
    UserSubscription,
    AppSettings,
    InviteCode,
    BetaSignup,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    "HealthProfile",
    # Journal models
    "Meal",
    # Subscription / admin models
    "UserSubscription",
    "AppSettings",
    "InviteCode",
    "BetaSignup",
]
