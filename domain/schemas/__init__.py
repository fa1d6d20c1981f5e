"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserResponse,
    CurrentUserResponse,
)
from domain.schemas.meal_schemas import (
    NutritionFacts,
    MealCreate,
    MealUpdate,
    MealResponse,
    MealListResponse,
)
from domain.schemas.analysis_schemas import (
    PhotoAnalysisRequest,
    TextAnalysisRequest,
    MealAnalysisResponse,
)
from domain.schemas.health_schemas import (
    HealthProfileUpdate,
    TargetInputs,
    MacroTargets,
    SuggestedTargetsResponse,
    TargetsUpdate,
    HealthProfileResponse,
)
from domain.schemas.subscription_schemas import (
    ScanStatusResponse,
    PricingResponse,
    SubscriptionStatusResponse,
    CheckoutRequest,
    CheckoutResponse,
    WebhookAck,
)
from domain.schemas.admin_schemas import (
    InviteGenerateRequest,
    InviteCodeResponse,
    InviteValidateRequest,
    InviteUseRequest,
    InviteCheckResponse,
    PaywallUpdate,
    InviteOnlyUpdate,
    PricingUpdate,
    AppSettingsResponse,
    PublicSettingsResponse,
    AdminUserResponse,
    RoleUpdate,
    BetaSignupRequest,
    BetaSignupResponse,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "CurrentUserResponse",
    # Meal schemas
    "NutritionFacts",
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealListResponse",
    # Analysis schemas
    "PhotoAnalysisRequest",
    "TextAnalysisRequest",
    "MealAnalysisResponse",
    # Health schemas
    "HealthProfileUpdate",
    "TargetInputs",
    "MacroTargets",
    "SuggestedTargetsResponse",
    "TargetsUpdate",
    "HealthProfileResponse",
    # Subscription schemas
    "ScanStatusResponse",
    "PricingResponse",
    "SubscriptionStatusResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "WebhookAck",
    # Admin schemas
    "InviteGenerateRequest",
    "InviteCodeResponse",
    "InviteValidateRequest",
    "InviteUseRequest",
    "InviteCheckResponse",
    "PaywallUpdate",
    "InviteOnlyUpdate",
    "PricingUpdate",
    "AppSettingsResponse",
    "PublicSettingsResponse",
    "AdminUserResponse",
    "RoleUpdate",
    "BetaSignupRequest",
    "BetaSignupResponse",
]
