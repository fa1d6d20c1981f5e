"""
Admin console: user lookup, scan resets, roles, beta signups.
"""

from typing import List
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import UserRole
from domain.models import AppUser, BetaSignup
from repositories import BetaSignupRepository, UserRepository
from services import settings_service
from services.subscription_service import SubscriptionService

logger = logging.getLogger("mealscan.admin")


class AdminService:
    """Business logic for admin user management"""

    @staticmethod
    def list_users(db: Session) -> List[AppUser]:
        return UserRepository(db).list_with_subscriptions()

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> AppUser:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def find_user_by_email(db: Session, email: str) -> AppUser:
        user = UserRepository(db).get_by_email(email)
        if not user:
            raise NotFoundError(f"User with email {email} not found")
        return user

    @staticmethod
    def reset_scans(db: Session, user_id: UUID) -> AppUser:
        user = AdminService.get_user(db, user_id)
        SubscriptionService.reset_scans(db, user.user_id)
        settings_service.invalidate_cache()
        db.refresh(user)
        return user

    @staticmethod
    def set_role(db: Session, acting_admin: AppUser, user_id: UUID, role: UserRole) -> AppUser:
        user = AdminService.get_user(db, user_id)
        if user.user_id == acting_admin.user_id and role != UserRole.ADMIN:
            raise ServiceValidationError("Admins cannot remove their own admin role")
        user.role = role
        db.commit()
        db.refresh(user)
        logger.info(f"role_changed user_id={user_id} role={role.value} by={acting_admin.user_id}")
        return user


class BetaService:
    """Landing page beta signups"""

    @staticmethod
    def signup(db: Session, email: str) -> BetaSignup:
        """Idempotent; a repeated email returns the existing signup"""
        repo = BetaSignupRepository(db)
        existing = repo.get_by_email(email)
        if existing:
            return existing
        try:
            signup = repo.create(BetaSignup(email=email.strip().lower()))
        except IntegrityError:
            db.rollback()
            return repo.get_by_email(email)
        logger.info(f"beta_signup signup_id={signup.signup_id}")
        return signup

    @staticmethod
    def list_signups(db: Session) -> List[BetaSignup]:
        return BetaSignupRepository(db).list_newest_first()
