from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import UserRole


class RegisterRequest(BaseModel):
    """Schema for creating an account"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: Optional[str] = Field(None, max_length=200)
    invite_code: Optional[str] = Field(
        None, description="Required while invite-only registration is enabled"
    )


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token issued on login"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Lifetime in seconds")
    user_id: UUID
    role: UserRole


class UserResponse(BaseModel):
    """Public view of an account"""

    user_id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CurrentUserResponse(UserResponse):
    """Account plus a scan/subscription summary"""

    scan_count: int = 0
    is_subscribed: bool = False
    subscription_end: Optional[datetime] = None
