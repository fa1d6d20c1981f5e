from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from domain.enums import BillingCycle


class ScanStatusResponse(BaseModel):
    """Result of a scan-limit check"""

    can_scan: bool
    scan_count: int
    is_subscribed: bool
    paywall_enabled: bool
    free_tier_limit: int
    remaining_scans: Optional[int] = None
    message: Optional[str] = None


class PricingResponse(BaseModel):
    monthly_price: float
    yearly_price: float
    yearly_discount_percent: int


class SubscriptionStatusResponse(ScanStatusResponse):
    subscription_start: Optional[datetime] = None
    subscription_end: Optional[datetime] = None
    pricing: PricingResponse


class CheckoutRequest(BaseModel):
    """Stripe checkout session request"""

    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    success_url: str = Field(..., min_length=1)
    cancel_url: str = Field(..., min_length=1)
    price_id: Optional[str] = Field(
        None, description="Overrides the configured price for the billing cycle"
    )


class CheckoutResponse(BaseModel):
    url: str
    session_id: str


class WebhookAck(BaseModel):
    received: bool = True
