"""Per-tenant API rate limiting driven by the subscription plan."""

from ..config import get_settings
from ..core.errors import RateLimitExceeded
from ..core.logging import get_logger
from ..core.redis_client import get_redis_client
from ..core.schemas.auth import TokenClaims
from ..core.subscription import get_limits

logger = get_logger("rate_limit")


async def enforce_rate_limit(claims: TokenClaims) -> None:
    """Count the request against the tenant's window; raise when over the plan limit.

    Requests are let through when Redis is unreachable.
    """
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return

    redis_client = get_redis_client()
    try:
        await redis_client.ensure_connected()
    except Exception as e:
        logger.debug(f"Rate limiting skipped, Redis unavailable: {e}")
        return

    count = await redis_client.increment_rate_limit(
        claims.tenant_id, settings.rate_limit_window_seconds
    )
    limit = get_limits(claims.subscription).api_rate_limit
    if count > limit:
        logger.warning(
            "Rate limit exceeded",
            extra={"tenant_id": str(claims.tenant_id), "count": count, "limit": limit},
        )
        raise RateLimitExceeded(
            f"Rate limit of {limit} requests per minute exceeded",
            details={"limit": limit},
        )
