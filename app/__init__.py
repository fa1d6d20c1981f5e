"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    MealScanError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    ForbiddenError,
    ScanLimitExceededError,
    AnalysisError,
    ExternalServiceError,
)

__all__ = [
    "settings",
    "MealScanError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "ScanLimitExceededError",
    "AnalysisError",
    "ExternalServiceError",
]
