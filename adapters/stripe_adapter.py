"""Stripe adapter for subscription checkout and webhook verification.
"""

from typing import Any, Dict, Optional
import json
import logging

import stripe

from app.config import settings
from app.exceptions import ExternalServiceError, ServiceValidationError

logger = logging.getLogger("mealscan.stripe")


def _require_key() -> str:
    if not settings.stripe_secret_key:
        raise ExternalServiceError("Stripe is not configured")
    return settings.stripe_secret_key


def create_checkout_session(
    *,
    price_id: str,
    customer_email: str,
    client_reference_id: str,
    success_url: str,
    cancel_url: str,
    metadata: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Create a subscription-mode Checkout session and return its url and id."""
    stripe.api_key = _require_key()
    try:
        session = stripe.checkout.Session.create(
            mode="subscription",
            line_items=[{"price": price_id, "quantity": 1}],
            customer_email=customer_email,
            client_reference_id=client_reference_id,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata or {},
            subscription_data={"metadata": metadata or {}},
        )
    except stripe.StripeError as exc:
        logger.error(f"stripe_checkout_failed email={customer_email} error={exc}")
        raise ExternalServiceError(
            f"Stripe error: {exc.user_message or exc}",
            code="STRIPE_ERROR",
            http_status=502,
        ) from exc
    return {"url": session.url, "session_id": session.id}


def construct_event(payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
    """Verify the webhook signature and return the event as a plain dict."""
    if not settings.stripe_webhook_secret:
        raise ExternalServiceError("Stripe webhook secret is not configured")
    if not signature:
        raise ServiceValidationError("Missing Stripe-Signature header")
    stripe.api_key = _require_key()
    try:
        stripe.Webhook.construct_event(
            payload, signature, settings.stripe_webhook_secret
        )
        event = json.loads(payload)
    except (ValueError, stripe.SignatureVerificationError) as exc:
        logger.warning(f"stripe_webhook_rejected error={exc}")
        raise ServiceValidationError(
            f"Webhook Error: {exc}", code="INVALID_WEBHOOK"
        ) from exc
    return event
