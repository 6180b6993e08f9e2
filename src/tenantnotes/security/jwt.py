"""JWT token utilities.

Tokens are HS256 signed JWTs carrying the caller's identity and tenant
claims, an expiry and a JTI used for revocation on logout.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..config import get_settings
from ..core.redis_client import get_redis_client
from ..core.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
TOKEN_TYPE = "access"


def issue_token(claims: TokenClaims, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a claim set into an access token."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode = {
        "sub": str(claims.user_id),
        "email": claims.email,
        "role": claims.role.value,
        "tenant_id": str(claims.tenant_id),
        "subscription": claims.subscription.value,
        "type": TOKEN_TYPE,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str) -> Optional[TokenClaims]:
    """Verify signature and expiry and return the claims, or None if invalid."""
    if not isinstance(token, str) or token.count(".") != 2:
        return None

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        if payload.get("type") != TOKEN_TYPE:
            return None
        return TokenClaims(
            user_id=payload.get("sub"),
            email=payload.get("email"),
            role=payload.get("role"),
            tenant_id=payload.get("tenant_id"),
            subscription=payload.get("subscription"),
            jti=payload.get("jti"),
            expires_at=payload.get("exp"),
        )
    except (JWTError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        logger.debug(f"Token rejected: {type(e).__name__}")
        return None


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from an 'Authorization: Bearer <token>' header value."""
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        return None
    token = auth_header[len(BEARER_PREFIX):].strip()
    return token or None


async def is_token_revoked(jti: Optional[str]) -> bool:
    """Check the Redis revocation list; an unreachable Redis means not revoked."""
    if not jti:
        return False
    redis_client = get_redis_client()
    try:
        await redis_client.ensure_connected()
        return await redis_client.is_token_blacklisted(jti)
    except Exception as e:
        logger.warning(f"Token revocation check skipped, Redis unavailable: {e}")
        return False


async def decode_access_token(token: str) -> Optional[TokenClaims]:
    """Verify a token and make sure it has not been revoked."""
    claims = verify_token(token)
    if claims is None:
        return None
    if await is_token_revoked(claims.jti):
        return None
    return claims


async def revoke_token(claims: TokenClaims) -> bool:
    """Add the token's JTI to the revocation list until it would expire anyway."""
    if not claims.jti or not claims.expires_at:
        return False

    remaining_seconds = int((claims.expires_at - datetime.now(timezone.utc)).total_seconds())
    if remaining_seconds <= 0:
        return False

    redis_client = get_redis_client()
    try:
        await redis_client.ensure_connected()
        return await redis_client.add_to_blacklist(claims.jti, remaining_seconds)
    except Exception as e:
        logger.error(f"Blacklist token error: {e}")
        return False
