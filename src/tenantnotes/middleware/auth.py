"""Authentication and authorization guards.

Each guard is a FastAPI dependency. Endpoints depend on exactly one of
``require_auth`` / ``require_admin``; services call
``require_pro_subscription`` with claims refreshed from the live tenant.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer

from ..core.errors import AdminRequired, AuthenticationRequired, ProSubscriptionRequired
from ..core.logging import get_logger
from ..core.schemas.auth import TokenClaims
from ..core.subscription import SubscriptionTier
from ..security import decode_access_token, extract_bearer_token
from .rate_limit import enforce_rate_limit

logger = get_logger("auth")


class JWTBearer(HTTPBearer):
    """Bearer token scheme resolving to the caller's claims (or None).

    Subclassing HTTPBearer keeps the security scheme in the OpenAPI docs;
    header parsing is strict ("Bearer " prefix, case sensitive).
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[TokenClaims]:
        return await authenticate(request)


bearer_scheme = JWTBearer()


async def authenticate(request: Request) -> Optional[TokenClaims]:
    """Return the caller's claims, or None for a missing/invalid/revoked token."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        return None
    return await decode_access_token(token)


async def require_auth(claims: Optional[TokenClaims] = Depends(bearer_scheme)) -> TokenClaims:
    """Authenticated caller, rate limited per tenant plan."""
    if claims is None:
        raise AuthenticationRequired()
    await enforce_rate_limit(claims)
    return claims


async def require_admin(claims: TokenClaims = Depends(require_auth)) -> TokenClaims:
    """Authenticated caller with the admin role."""
    if not claims.is_admin:
        logger.warning(
            "Admin access denied",
            extra={"user_id": str(claims.user_id), "tenant_id": str(claims.tenant_id)},
        )
        raise AdminRequired()
    return claims


def require_pro_subscription(claims: TokenClaims) -> None:
    """Fail unless the claims carry the pro plan."""
    if claims.subscription != SubscriptionTier.PRO:
        raise ProSubscriptionRequired()
