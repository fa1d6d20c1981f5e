from typing import Any, Mapping, Optional


class MealScanError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"
    default_code = "INTERNAL_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(MealScanError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(MealScanError):
    """Raised when authentication fails (missing, invalid or expired token)."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(MealScanError):
    """Raised when an authenticated user lacks the required role."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


class ScanLimitExceededError(ForbiddenError):
    """Raised when a non-subscribed user has used up the free scans while the paywall is on."""

    default_message = "Free scan limit reached"
    default_code = "SCAN_LIMIT_REACHED"


class NotFoundError(MealScanError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(MealScanError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class AnalysisError(MealScanError):
    """Raised when the AI model reply cannot be parsed or lacks required fields.

    ``details`` may carry the raw model content for debugging.
    """

    http_status = 502
    default_message = "Invalid response format from the analysis model"
    default_code = "ANALYSIS_ERROR"


class ExternalServiceError(MealScanError):
    """Raised when a third-party service (OpenAI, Stripe) is unconfigured or fails."""

    http_status = 503
    default_message = "External service unavailable"
    default_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None, http_status: Optional[int] = None):
        super().__init__(message, details, code)
        if http_status is not None:
            self.http_status = http_status
