"""
User Repository - Data access layer for accounts and health profiles
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import AppUser, HealthProfile
from domain.enums import UserRole


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_id(self, user_id: UUID) -> Optional[AppUser]:
        return self.db.query(AppUser).filter(AppUser.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email, ignoring case"""
        return (
            self.db.query(AppUser)
            .filter(func.lower(AppUser.email) == email.strip().lower())
            .first()
        )

    def new_user(
        self,
        email: str,
        password_hash: str,
        full_name: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> AppUser:
        """Stage a user without committing"""
        user = AppUser(
            email=email.strip().lower(),
            password_hash=password_hash,
            full_name=full_name,
            role=role,
        )
        return self.add(user)

    def list_with_subscriptions(self) -> List[AppUser]:
        """All users, newest first, with subscription rows preloaded"""
        return (
            self.db.query(AppUser)
            .options(selectinload(AppUser.subscription))
            .order_by(AppUser.created_at.desc(), AppUser.email)
            .all()
        )


class HealthProfileRepository(BaseRepository[HealthProfile]):
    """Repository for health profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, HealthProfile)

    def get_by_user_id(self, user_id: UUID) -> Optional[HealthProfile]:
        return (
            self.db.query(HealthProfile)
            .filter(HealthProfile.user_id == user_id)
            .first()
        )

    def upsert(self, user_id: UUID, **kwargs) -> HealthProfile:
        """Create or update a health profile"""
        profile = self.get_by_user_id(user_id)
        if profile:
            for key, value in kwargs.items():
                if hasattr(profile, key):
                    setattr(profile, key, value)
        else:
            profile = HealthProfile(user_id=user_id, **kwargs)
            self.db.add(profile)
        self.db.flush()
        return profile
