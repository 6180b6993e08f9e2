"""
Application error taxonomy.

Every error raised by guards, services and repositories carries an
``ErrorKind``; the HTTP layer picks the status code from the kind.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of error categories exposed over the API."""

    VALIDATION_ERROR = "validation_error"
    AUTHENTICATION_REQUIRED = "authentication_required"
    AUTHORIZATION_DENIED = "authorization_denied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    INTERNAL_ERROR = "internal_error"


HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.AUTHENTICATION_REQUIRED: 401,
    ErrorKind.AUTHORIZATION_DENIED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL_ERROR: 500,
}


class AppError(Exception):
    """Base class for errors that map onto an API response."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Invalid request"


class AuthenticationRequired(AppError):
    kind = ErrorKind.AUTHENTICATION_REQUIRED
    default_message = "Authentication required"


class AuthorizationDenied(AppError):
    kind = ErrorKind.AUTHORIZATION_DENIED
    default_message = "Access denied"


class AdminRequired(AuthorizationDenied):
    default_message = "Admin access required"


class ProSubscriptionRequired(AuthorizationDenied):
    default_message = "Pro subscription required for this feature"


class PlanLimitExceeded(AuthorizationDenied):
    default_message = "Subscription plan limit reached"


class NotFound(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class Conflict(AppError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class RateLimitExceeded(AppError):
    kind = ErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded"


class InternalError(AppError):
    kind = ErrorKind.INTERNAL_ERROR
