"""
Tests for the repository layer against a real SQLite session.

- UserRepository: case-insensitive email lookup, staged creation, listing
- HealthProfileRepository: upsert
- MealRepository: owner scoping and ordering
- SubscriptionRepository: get_or_create, atomic scan counter
- AppSettingsRepository / InviteCodeRepository / BetaSignupRepository
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from test_fixtures import db_session, make_meal, make_user, unique_email
from app.timeutils import utcnow
from domain.enums import Gender
from domain.models import AppSettings, AppUser, BetaSignup, InviteCode, Meal
from repositories import (
    AppSettingsRepository,
    BetaSignupRepository,
    HealthProfileRepository,
    InviteCodeRepository,
    MealRepository,
    SubscriptionRepository,
    UserRepository,
)


# =============================================================================
# USERS
# =============================================================================


def test_get_by_email_ignores_case(db_session: Session):
    user = make_user(db_session)

    found = UserRepository(db_session).get_by_email(f"  {user.email.upper()} ")

    assert found.user_id == user.user_id


def test_new_user_is_staged_until_commit(db_session: Session):
    repo = UserRepository(db_session)
    email = unique_email("staged")

    user = repo.new_user(email.upper(), "hash", "Staged User")
    assert user.user_id is not None
    assert user.email == email
    db_session.rollback()

    assert repo.get_by_email(email) is None


def test_duplicate_email_violates_constraint(db_session: Session):
    user = make_user(db_session)

    with pytest.raises(IntegrityError):
        UserRepository(db_session).create(AppUser(email=user.email, password_hash="x"))
    db_session.rollback()


def test_list_with_subscriptions(db_session: Session):
    first = make_user(db_session, scan_count=1)
    second = make_user(db_session, scan_count=2)

    users = UserRepository(db_session).list_with_subscriptions()

    assert {u.user_id for u in users} == {first.user_id, second.user_id}
    assert sorted(u.subscription.scan_count for u in users) == [1, 2]


def test_health_profile_upsert(db_session: Session):
    user = make_user(db_session)
    repo = HealthProfileRepository(db_session)

    repo.upsert(user.user_id, height_cm=170, gender=Gender.FEMALE)
    profile = repo.upsert(user.user_id, weight_kg=62, not_a_column=1)
    db_session.commit()

    assert profile.height_cm == 170
    assert profile.weight_kg == 62
    assert repo.get_by_user_id(user.user_id) is profile


# =============================================================================
# MEALS
# =============================================================================


def test_meals_are_scoped_to_owner(db_session: Session):
    owner = make_user(db_session)
    other = make_user(db_session)
    meal = make_meal(db_session, owner)
    repo = MealRepository(db_session)

    assert repo.get_for_user(meal.meal_id, owner.user_id) is meal
    assert repo.get_for_user(meal.meal_id, other.user_id) is None
    assert len(repo.list_for_user(owner.user_id)) == 1
    assert repo.list_for_user(other.user_id) == []


def test_meals_listed_newest_first(db_session: Session):
    user = make_user(db_session)
    old = make_meal(db_session, user, title="Old", days_ago=3)
    new = make_meal(db_session, user, title="New")
    middle = make_meal(db_session, user, title="Middle", days_ago=1)

    meals = MealRepository(db_session).list_for_user(user.user_id)

    assert [m.title for m in meals] == [new.title, middle.title, old.title]


def test_deleting_user_removes_meals(db_session: Session):
    user = make_user(db_session)
    make_meal(db_session, user)

    UserRepository(db_session).remove(user)
    db_session.commit()

    assert db_session.query(Meal).count() == 0


# =============================================================================
# SUBSCRIPTIONS AND SETTINGS
# =============================================================================


def test_increment_scan_count(db_session: Session):
    user = make_user(db_session, scan_count=4)
    repo = SubscriptionRepository(db_session)

    assert repo.increment_scan_count(user.user_id) == 5
    assert repo.increment_scan_count(user.user_id) == 6
    db_session.commit()
    assert repo.get_by_user_id(user.user_id).scan_count == 6


def test_get_or_create_reuses_existing(db_session: Session):
    user = make_user(db_session, scan_count=2)
    repo = SubscriptionRepository(db_session)

    assert repo.get_or_create(user.user_id).scan_count == 2


def test_settings_latest_row(db_session: Session):
    repo = AppSettingsRepository(db_session)
    assert repo.get_latest() is None

    repo.create(AppSettings(free_tier_limit=5, created_at=utcnow() - timedelta(days=1)))
    repo.create(AppSettings(free_tier_limit=25))

    assert repo.get_latest().free_tier_limit == 25


# =============================================================================
# INVITES AND BETA SIGNUPS
# =============================================================================


def test_invite_lookup(db_session: Session):
    repo = InviteCodeRepository(db_session)
    repo.create(InviteCode(code="ABCD2345"))

    assert repo.code_exists("ABCD2345")
    assert not repo.code_exists("abcd2345")
    assert repo.get_by_code("ABCD2345").used is False


def test_beta_signup_lookup_ignores_case(db_session: Session):
    repo = BetaSignupRepository(db_session)
    repo.create(BetaSignup(email="tester@example.com"))

    assert repo.get_by_email("Tester@Example.com ") is not None
    assert [s.email for s in repo.list_newest_first()] == ["tester@example.com"]
