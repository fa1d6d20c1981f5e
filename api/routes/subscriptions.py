"""Subscription status and scan-limit routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_current_user
from app.timeutils import as_utc
from domain.models import AppUser
from domain.schemas.subscription_schemas import (
    PricingResponse,
    ScanStatusResponse,
    SubscriptionStatusResponse,
)
from services.settings_service import SettingsService
from services.subscription_service import (
    SubscriptionService,
    evaluate,
    remaining_warning,
)

router = APIRouter(prefix="/subscription", tags=["Subscription"])


@router.get("", response_model=SubscriptionStatusResponse)
def get_subscription(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    app_settings = SettingsService.get_settings(db)
    subscription = SubscriptionService.get_or_create_subscription(db, user.user_id)
    status = evaluate(subscription, app_settings)
    return SubscriptionStatusResponse(
        **status.__dict__,
        message=remaining_warning(status.remaining_scans),
        subscription_start=as_utc(subscription.subscription_start),
        subscription_end=as_utc(subscription.subscription_end),
        pricing=PricingResponse(
            monthly_price=app_settings.monthly_price,
            yearly_price=app_settings.yearly_price,
            yearly_discount_percent=app_settings.yearly_discount_percent,
        ),
    )


@router.post("/verify", response_model=ScanStatusResponse)
def verify_scan_limit(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Check whether one more scan is allowed without counting it."""
    return SubscriptionService.verify_scan_limit(db, user)
