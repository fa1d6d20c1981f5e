"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.meal_service import MealService
from services.analysis_service import AnalysisService
from services.subscription_service import SubscriptionService
from services.payment_service import PaymentService
from services.health_service import HealthService
from services.invite_service import InviteService
from services.settings_service import SettingsService
from services.admin_service import AdminService, BetaService

# Note: meal_filters and nutrition_targets contain pure functions, not classes

__all__ = [
    "AuthService",
    "MealService",
    "AnalysisService",
    "SubscriptionService",
    "PaymentService",
    "HealthService",
    "InviteService",
    "SettingsService",
    "AdminService",
    "BetaService",
]
