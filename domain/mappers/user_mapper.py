"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import AppUser, HealthProfile
from domain.schemas.auth_schemas import CurrentUserResponse
from domain.schemas.admin_schemas import AdminUserResponse
from domain.schemas.health_schemas import HealthProfileResponse
from app.timeutils import as_utc


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_current_user(user: AppUser) -> CurrentUserResponse:
        sub = user.subscription
        return CurrentUserResponse(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
            scan_count=sub.scan_count if sub else 0,
            is_subscribed=bool(sub and sub.is_subscribed),
            subscription_end=as_utc(sub.subscription_end) if sub else None,
        )

    @staticmethod
    def to_admin_response(user: AppUser) -> AdminUserResponse:
        """
        Convert AppUser ORM model to the admin console row.

        Args:
            user: AppUser ORM instance; subscription may be missing

        Returns:
            AdminUserResponse with subscription fields flattened
        """
        sub = user.subscription
        return AdminUserResponse(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            created_at=user.created_at,
            scan_count=sub.scan_count if sub else 0,
            is_subscribed=bool(sub and sub.is_subscribed),
            subscription_start=as_utc(sub.subscription_start) if sub else None,
            subscription_end=as_utc(sub.subscription_end) if sub else None,
        )

    @staticmethod
    def to_health_response(
        profile: HealthProfile, is_complete: bool
    ) -> HealthProfileResponse:
        response = HealthProfileResponse.model_validate(profile)
        response.is_complete = is_complete
        return response
