"""Stripe checkout and webhook routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.schemas.subscription_schemas import (
    CheckoutRequest,
    CheckoutResponse,
    WebhookAck,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])
logger = logging.getLogger("mealscan.api.payments")


@router.post("/checkout", response_model=CheckoutResponse)
def create_checkout(data: CheckoutRequest, user: AppUser = Depends(get_current_user)):
    result = PaymentService.create_checkout_session(
        user, data.billing_cycle, data.success_url, data.cancel_url, data.price_id
    )
    return CheckoutResponse(**result)


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    db: Session = Depends(get_db),
):
    """Stripe event receiver; the raw body is needed for signature checks."""
    payload = await request.body()
    return PaymentService.handle_webhook(db, payload, stripe_signature)
