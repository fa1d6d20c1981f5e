"""
Subscription, settings, invite and beta signup repositories
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import UserSubscription, AppSettings, InviteCode, BetaSignup


class SubscriptionRepository(BaseRepository[UserSubscription]):
    """Repository for per-user subscription records"""

    def __init__(self, db: Session):
        super().__init__(db, UserSubscription)

    def get_by_id(self, subscription_id: UUID) -> Optional[UserSubscription]:
        return (
            self.db.query(UserSubscription)
            .filter(UserSubscription.subscription_id == subscription_id)
            .first()
        )

    def get_by_user_id(self, user_id: UUID) -> Optional[UserSubscription]:
        return (
            self.db.query(UserSubscription)
            .filter(UserSubscription.user_id == user_id)
            .first()
        )

    def get_or_create(self, user_id: UUID) -> UserSubscription:
        """Return the user's record, staging an empty one when missing"""
        subscription = self.get_by_user_id(user_id)
        if subscription is None:
            subscription = self.add(
                UserSubscription(user_id=user_id, scan_count=0, is_subscribed=False)
            )
        return subscription

    def increment_scan_count(self, user_id: UUID) -> int:
        """Atomically bump the counter in SQL and return the new value"""
        self.get_or_create(user_id)
        self.db.query(UserSubscription).filter(
            UserSubscription.user_id == user_id
        ).update(
            {UserSubscription.scan_count: UserSubscription.scan_count + 1},
            synchronize_session="fetch",
        )
        self.db.flush()
        return self.get_by_user_id(user_id).scan_count


class AppSettingsRepository(BaseRepository[AppSettings]):
    """Repository for app-wide settings rows"""

    def __init__(self, db: Session):
        super().__init__(db, AppSettings)

    def get_by_id(self, settings_id: UUID) -> Optional[AppSettings]:
        return (
            self.db.query(AppSettings)
            .filter(AppSettings.settings_id == settings_id)
            .first()
        )

    def get_latest(self) -> Optional[AppSettings]:
        """The effective settings row (most recently created)"""
        return (
            self.db.query(AppSettings)
            .order_by(AppSettings.created_at.desc())
            .first()
        )


class InviteCodeRepository(BaseRepository[InviteCode]):
    """Repository for invite codes"""

    def __init__(self, db: Session):
        super().__init__(db, InviteCode)

    def get_by_id(self, invite_id: UUID) -> Optional[InviteCode]:
        return self.db.query(InviteCode).filter(InviteCode.invite_id == invite_id).first()

    def get_by_code(self, code: str) -> Optional[InviteCode]:
        return self.db.query(InviteCode).filter(InviteCode.code == code).first()

    def code_exists(self, code: str) -> bool:
        return self.get_by_code(code) is not None

    def list_newest_first(self) -> List[InviteCode]:
        return self.db.query(InviteCode).order_by(InviteCode.created_at.desc()).all()

    def claim(self, code: str, email: str, now: datetime) -> bool:
        """Atomically mark an unused, unexpired code as used by the email"""
        claimed = (
            self.db.query(InviteCode)
            .filter(
                InviteCode.code == code,
                InviteCode.used.is_(False),
                or_(InviteCode.expires_at.is_(None), InviteCode.expires_at > now),
                or_(
                    InviteCode.email.is_(None),
                    InviteCode.email == "",
                    func.lower(InviteCode.email) == email,
                ),
            )
            .update(
                {
                    InviteCode.used: True,
                    InviteCode.used_at: now,
                    InviteCode.used_by_email: email,
                },
                synchronize_session="fetch",
            )
        )
        self.db.flush()
        return claimed == 1


class BetaSignupRepository(BaseRepository[BetaSignup]):
    """Repository for landing page beta signups"""

    def __init__(self, db: Session):
        super().__init__(db, BetaSignup)

    def get_by_id(self, signup_id: UUID) -> Optional[BetaSignup]:
        return self.db.query(BetaSignup).filter(BetaSignup.signup_id == signup_id).first()

    def get_by_email(self, email: str) -> Optional[BetaSignup]:
        return (
            self.db.query(BetaSignup)
            .filter(func.lower(BetaSignup.email) == email.strip().lower())
            .first()
        )

    def list_newest_first(self) -> List[BetaSignup]:
        return self.db.query(BetaSignup).order_by(BetaSignup.created_at.desc()).all()
