"""
Scan counting and paywall gating.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import ScanLimitExceededError
from app.timeutils import as_utc, utcnow
from domain.models import AppSettings, AppUser, UserSubscription
from domain.schemas.subscription_schemas import ScanStatusResponse
from repositories import SubscriptionRepository
from services.settings_service import SettingsService

logger = logging.getLogger("mealscan.subscription")

LOW_SCANS_WARNING_THRESHOLD = 5


@dataclass
class ScanStatus:
    can_scan: bool
    scan_count: int
    is_subscribed: bool
    paywall_enabled: bool
    free_tier_limit: int
    remaining_scans: Optional[int] = None

    def to_response(self, message: Optional[str] = None) -> ScanStatusResponse:
        return ScanStatusResponse(message=message, **self.__dict__)


def limit_message(limit: int) -> str:
    return (
        f"You've reached your free scan limit of {limit}. "
        "Please subscribe to continue."
    )


def remaining_warning(remaining: Optional[int]) -> Optional[str]:
    """Warning shown when only a few free scans are left"""
    if remaining is not None and 0 < remaining <= LOW_SCANS_WARNING_THRESHOLD:
        return f"You have {remaining} free scans remaining."
    return None


def is_active(subscription: Optional[UserSubscription], now: Optional[datetime] = None) -> bool:
    """Subscribed with no end date, or an end date still in the future"""
    if subscription is None or not subscription.is_subscribed:
        return False
    end = as_utc(subscription.subscription_end)
    return end is None or end > (now or utcnow())


def evaluate(
    subscription: Optional[UserSubscription],
    app_settings: AppSettings,
    now: Optional[datetime] = None,
) -> ScanStatus:
    """Decide whether one more scan is allowed"""
    count = subscription.scan_count if subscription else 0
    subscribed = is_active(subscription, now)
    paywall = bool(app_settings.paywall_enabled)
    limit = app_settings.free_tier_limit

    if not paywall or subscribed:
        return ScanStatus(True, count, subscribed, paywall, limit, None)

    return ScanStatus(
        can_scan=count < limit,
        scan_count=count,
        is_subscribed=subscribed,
        paywall_enabled=paywall,
        free_tier_limit=limit,
        remaining_scans=max(limit - count, 0),
    )


class SubscriptionService:
    """Business logic for subscriptions and scan limits"""

    @staticmethod
    def get_or_create_subscription(db: Session, user_id) -> UserSubscription:
        repo = SubscriptionRepository(db)
        subscription = repo.get_by_user_id(user_id)
        if subscription is None:
            subscription = repo.get_or_create(user_id)
            db.commit()
            logger.info(f"subscription_created user_id={user_id}")
        return subscription

    @staticmethod
    def get_status(db: Session, user: AppUser) -> ScanStatus:
        subscription = SubscriptionService.get_or_create_subscription(db, user.user_id)
        return evaluate(subscription, SettingsService.get_settings(db))

    @staticmethod
    def verify_scan_limit(db: Session, user: AppUser) -> ScanStatusResponse:
        """Read-only check; settings load failures allow the scan"""
        try:
            status = SubscriptionService.get_status(db, user)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"scan_check_failed user_id={user.user_id} error={e}")
            return ScanStatusResponse(
                can_scan=True,
                scan_count=0,
                is_subscribed=False,
                paywall_enabled=False,
                free_tier_limit=0,
                message="Unable to verify scan limit; scan allowed",
            )
        if not status.can_scan:
            return status.to_response(limit_message(status.free_tier_limit))
        return status.to_response(remaining_warning(status.remaining_scans))

    @staticmethod
    def consume_scan(db: Session, user: AppUser) -> ScanStatus:
        """
        Check the limit and count one scan.

        Subscribed and paywall-off users are counted too. A failed counter
        update is logged and the scan still goes through.

        Raises:
            ScanLimitExceededError: paywall on, not subscribed, limit used up
        """
        try:
            status = SubscriptionService.get_status(db, user)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"scan_check_failed user_id={user.user_id} error={e}")
            return ScanStatus(True, 0, False, False, 0, None)

        if not status.can_scan:
            logger.info(
                f"scan_refused user_id={user.user_id} count={status.scan_count} "
                f"limit={status.free_tier_limit}"
            )
            raise ScanLimitExceededError(
                limit_message(status.free_tier_limit),
                details={
                    "scan_count": status.scan_count,
                    "free_tier_limit": status.free_tier_limit,
                },
            )

        try:
            status.scan_count = SubscriptionRepository(db).increment_scan_count(
                user.user_id
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"scan_count_update_failed user_id={user.user_id} error={e}")
            return status

        if status.remaining_scans is not None:
            status.remaining_scans = max(status.free_tier_limit - status.scan_count, 0)
        logger.info(
            f"scan_counted user_id={user.user_id} count={status.scan_count} "
            f"remaining={status.remaining_scans}"
        )
        return status

    @staticmethod
    def reset_scans(db: Session, user_id) -> UserSubscription:
        subscription = SubscriptionService.get_or_create_subscription(db, user_id)
        subscription.scan_count = 0
        db.commit()
        logger.info(f"scans_reset user_id={user_id}")
        return subscription
