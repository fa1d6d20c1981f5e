"""API routes package"""

from . import (
    auth,
    meals,
    analysis,
    health_profile,
    subscriptions,
    payments,
    invites,
    admin,
    settings,
    health,
)

__all__ = [
    "auth",
    "meals",
    "analysis",
    "health_profile",
    "subscriptions",
    "payments",
    "invites",
    "admin",
    "settings",
    "health",
]
