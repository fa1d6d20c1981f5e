"""
Stripe checkout and webhook handling.
"""

from datetime import timedelta
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from adapters import stripe_adapter
from app.config import settings
from app.exceptions import ServiceValidationError
from app.timeutils import utcnow
from domain.enums import BillingCycle
from domain.models import AppUser
from repositories import SubscriptionRepository, UserRepository

logger = logging.getLogger("mealscan.payments")

PERIOD_DAYS = {BillingCycle.MONTHLY: 30, BillingCycle.YEARLY: 365}


def configured_price_id(billing_cycle: BillingCycle) -> Optional[str]:
    if billing_cycle == BillingCycle.MONTHLY:
        return settings.stripe_monthly_price_id
    return settings.stripe_yearly_price_id


def _as_dict(obj: Any) -> Dict[str, Any]:
    return obj if isinstance(obj, dict) else {}


def _parse_user_id(value: Any) -> Optional[UUID]:
    try:
        return UUID(str(value)) if value else None
    except ValueError:
        return None


def _billing_cycle(value: Any) -> BillingCycle:
    try:
        return BillingCycle(value)
    except ValueError:
        return BillingCycle.YEARLY


class PaymentService:
    """Business logic for subscription payments"""

    @staticmethod
    def create_checkout_session(
        user: AppUser,
        billing_cycle: BillingCycle,
        success_url: str,
        cancel_url: str,
        price_id: Optional[str] = None,
    ) -> Dict[str, str]:
        price_id = price_id or configured_price_id(billing_cycle)
        if not price_id or not success_url or not cancel_url:
            raise ServiceValidationError("Missing required parameters")

        metadata = {"user_id": str(user.user_id), "billing_cycle": billing_cycle.value}
        result = stripe_adapter.create_checkout_session(
            price_id=price_id,
            customer_email=user.email,
            client_reference_id=str(user.user_id),
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
        )
        logger.info(
            f"checkout_created user_id={user.user_id} cycle={billing_cycle.value} "
            f"session_id={result['session_id']}"
        )
        return result

    @staticmethod
    def handle_webhook(db: Session, payload: bytes, signature: Optional[str]) -> Dict[str, bool]:
        event = _as_dict(stripe_adapter.construct_event(payload, signature))
        event_type = event.get("type")
        obj = _as_dict(_as_dict(event.get("data")).get("object"))

        if event_type == "checkout.session.completed":
            PaymentService._activate(db, obj)
        elif event_type == "customer.subscription.deleted":
            PaymentService._cancel(db, obj)
        else:
            logger.info(f"stripe_event_ignored type={event_type}")
        return {"received": True}

    @staticmethod
    def _activate(db: Session, session: Dict[str, Any]) -> None:
        metadata = _as_dict(session.get("metadata"))
        user_id = _parse_user_id(session.get("client_reference_id") or metadata.get("user_id"))
        if user_id is None or UserRepository(db).get_by_id(user_id) is None:
            logger.warning(f"checkout_completed_unknown_user user_id={user_id}")
            return

        cycle = _billing_cycle(metadata.get("billing_cycle"))
        now = utcnow()
        subscription = SubscriptionRepository(db).get_or_create(user_id)
        subscription.is_subscribed = True
        subscription.subscription_start = now
        subscription.subscription_end = now + timedelta(days=PERIOD_DAYS[cycle])
        if session.get("customer"):
            subscription.stripe_customer_id = str(session["customer"])
        db.commit()
        logger.info(
            f"subscription_activated user_id={user_id} cycle={cycle.value} "
            f"end={subscription.subscription_end.isoformat()}"
        )

    @staticmethod
    def _cancel(db: Session, stripe_subscription: Dict[str, Any]) -> None:
        metadata = _as_dict(stripe_subscription.get("metadata"))
        user_id = _parse_user_id(metadata.get("user_id") or metadata.get("userId"))
        if user_id is None:
            logger.warning("subscription_deleted_without_user")
            return

        subscription = SubscriptionRepository(db).get_by_user_id(user_id)
        if subscription is None:
            logger.warning(f"subscription_deleted_unknown_user user_id={user_id}")
            return
        subscription.is_subscribed = False
        subscription.subscription_end = utcnow()
        db.commit()
        logger.info(f"subscription_cancelled user_id={user_id}")
