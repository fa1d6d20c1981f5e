"""Public app settings and beta signup routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import get_db
from domain.schemas.admin_schemas import (
    BetaSignupRequest,
    BetaSignupResponse,
    PublicSettingsResponse,
)
from domain.schemas.subscription_schemas import PricingResponse
from services.admin_service import BetaService
from services.settings_service import SettingsService

router = APIRouter(tags=["Settings"])


@router.get("/settings/public", response_model=PublicSettingsResponse)
def public_settings(db: Session = Depends(get_db)):
    """Paywall, invite-only flag and pricing for signed-out pages."""
    app_settings = SettingsService.get_settings(db)
    return PublicSettingsResponse(
        paywall_enabled=app_settings.paywall_enabled,
        free_tier_limit=app_settings.free_tier_limit,
        invite_only_registration=app_settings.invite_only_registration,
        pricing=PricingResponse(
            monthly_price=app_settings.monthly_price,
            yearly_price=app_settings.yearly_price,
            yearly_discount_percent=app_settings.yearly_discount_percent,
        ),
    )


@router.post(
    "/beta-signups",
    response_model=BetaSignupResponse,
    status_code=status.HTTP_201_CREATED,
)
def beta_signup(data: BetaSignupRequest, db: Session = Depends(get_db)):
    return BetaService.signup(db, data.email)
