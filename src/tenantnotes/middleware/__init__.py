"""Middleware for authentication and other cross-cutting concerns."""

from .auth import (
    JWTBearer,
    authenticate,
    require_admin,
    require_auth,
    require_pro_subscription,
)
from .rate_limit import enforce_rate_limit

__all__ = [
    "JWTBearer",
    "authenticate",
    "require_auth",
    "require_admin",
    "require_pro_subscription",
    "enforce_rate_limit",
]
