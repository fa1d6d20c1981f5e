from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import UserRole
from domain.schemas.subscription_schemas import PricingResponse


class InviteGenerateRequest(BaseModel):
    email: Optional[EmailStr] = Field(
        None, description="Bind the code to a single email address"
    )
    expires_in_days: Optional[int] = Field(None, gt=0, le=365)


class InviteCodeResponse(BaseModel):
    invite_id: UUID
    code: str
    email: Optional[str] = None
    created_by: Optional[UUID] = None
    used: bool
    used_at: Optional[datetime] = None
    used_by_email: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class InviteValidateRequest(BaseModel):
    code: str = Field(..., min_length=1)


class InviteUseRequest(BaseModel):
    code: str = Field(..., min_length=1)


class InviteCheckResponse(BaseModel):
    code: str
    valid: bool


class PaywallUpdate(BaseModel):
    enabled: bool
    free_tier_limit: Optional[int] = Field(None, ge=0)


class InviteOnlyUpdate(BaseModel):
    enabled: bool


class PricingUpdate(BaseModel):
    monthly_price: Optional[float] = Field(None, ge=0)
    yearly_price: Optional[float] = Field(None, ge=0)
    yearly_discount_percent: Optional[int] = Field(None, ge=0, le=100)


class AppSettingsResponse(BaseModel):
    paywall_enabled: bool
    free_tier_limit: int
    invite_only_registration: bool
    monthly_price: float
    yearly_price: float
    yearly_discount_percent: int
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicSettingsResponse(BaseModel):
    paywall_enabled: bool
    free_tier_limit: int
    invite_only_registration: bool
    pricing: PricingResponse


class AdminUserResponse(BaseModel):
    """Account row in the admin console"""

    user_id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    scan_count: int = 0
    is_subscribed: bool = False
    subscription_start: Optional[datetime] = None
    subscription_end: Optional[datetime] = None


class RoleUpdate(BaseModel):
    role: UserRole


class BetaSignupRequest(BaseModel):
    email: EmailStr


class BetaSignupResponse(BaseModel):
    signup_id: UUID
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
