"""
Shared test fixtures and utilities for the MealScan test suite.

Provides the TestClient, a fresh SQLite schema per test, and factories for
users, meals and auth headers.
"""

import uuid
from datetime import timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from main import app
from api.dependencies import get_db
from app.timeutils import utcnow
from domain.enums import MealType, NutritionScore, UserRole
from domain.models import Base, SessionLocal, engine, AppUser, Meal, UserSubscription
from services import settings_service
from services.auth_service import create_access_token, hash_password

# Lifespan is not entered: the schema is managed by the db_session fixture
client = TestClient(app)

DEFAULT_PASSWORD = "correct-horse-battery"

# Hash once; argon2 is deliberately slow
_PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)

REALISTIC_USERS = {
    "default": {"full_name": "Sarah Martinez", "email_prefix": "sarah.martinez"},
    "athlete": {"full_name": "Michael Chen", "email_prefix": "michael.chen"},
    "admin": {"full_name": "Raj Patel", "email_prefix": "raj.patel"},
}


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4().hex[:12]}@example.com"


@pytest.fixture
def db_session():
    """Fresh schema and session; routes use the same session via get_db."""
    Base.metadata.create_all(bind=engine)
    settings_service.invalidate_cache()
    session = SessionLocal()
    app.dependency_overrides[get_db] = lambda: session
    try:
        yield session
    finally:
        session.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)
        settings_service.invalidate_cache()


def make_user(
    db,
    email: Optional[str] = None,
    full_name: Optional[str] = None,
    role: UserRole = UserRole.USER,
    scan_count: int = 0,
    is_subscribed: bool = False,
    subscription_end=None,
    profile_type: str = "default",
) -> AppUser:
    """
    Persist a user with its subscription record.

    Example:
        >>> user = make_user(db_session, scan_count=9)
        >>> user.subscription.scan_count
        9
    """
    profile = REALISTIC_USERS.get(profile_type, REALISTIC_USERS["default"])
    user = AppUser(
        email=email or unique_email(profile["email_prefix"]),
        password_hash=_PASSWORD_HASH,
        full_name=full_name or profile["full_name"],
        role=role,
    )
    db.add(user)
    db.flush()
    db.add(
        UserSubscription(
            user_id=user.user_id,
            scan_count=scan_count,
            is_subscribed=is_subscribed,
            subscription_start=utcnow() if is_subscribed else None,
            subscription_end=subscription_end,
        )
    )
    db.commit()
    db.refresh(user)
    return user


def make_admin(db, **kwargs) -> AppUser:
    return make_user(db, role=UserRole.ADMIN, profile_type="admin", **kwargs)


def auth_headers(user: AppUser) -> dict:
    token, _ = create_access_token(user)
    return {"Authorization": f"Bearer {token}"}


def make_meal(
    db,
    user: AppUser,
    title: str = "Grilled chicken salad",
    description: str = "Chicken breast over mixed greens",
    meal_type: MealType = MealType.LUNCH,
    food_items=None,
    calories: float = 450,
    protein: float = 38,
    fat: float = 18,
    carbs: float = 22,
    nutrition_score: NutritionScore = NutritionScore.HEALTHY,
    notes: Optional[str] = None,
    created_at=None,
    days_ago: int = 0,
) -> Meal:
    meal = Meal(
        user_id=user.user_id,
        title=title,
        description=description,
        meal_type=meal_type,
        food_items=food_items if food_items is not None else ["chicken", "lettuce"],
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        nutrition_score=nutrition_score,
        notes=notes,
        created_at=created_at or (utcnow() - timedelta(days=days_ago)),
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return meal
