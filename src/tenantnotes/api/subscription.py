"""Subscription API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import TokenClaims
from ..core.schemas.subscription import (
    PlanChangeRequest,
    PlanChangeResponse,
    SubscriptionResponse,
    UsageResponse,
)
from ..core.services import SubscriptionService
from ..database import get_db_session
from ..middleware.auth import require_admin, require_auth

router = APIRouter(prefix="/subscription", tags=["subscription"])


@router.get("", response_model=SubscriptionResponse)
async def get_subscription(
    claims: TokenClaims = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Current plan, its features and tenant usage."""
    subscription_service = SubscriptionService(session)
    return await subscription_service.get_subscription(claims)


@router.post("", response_model=PlanChangeResponse)
async def change_plan(
    request: PlanChangeRequest,
    claims: TokenClaims = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    """Upgrade or downgrade the tenant plan."""
    subscription_service = SubscriptionService(session)
    return await subscription_service.change_plan(claims, request.plan)


@router.get("/usage", response_model=UsageResponse)
async def get_usage(
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Detailed usage statistics against the plan limits."""
    subscription_service = SubscriptionService(session)
    return await subscription_service.get_usage(claims)
