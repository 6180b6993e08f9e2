"""Subscription service implementation."""

from collections import Counter

from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFound
from ..locks import get_tenant_locks
from ..logging import get_logger
from ..models.tenant import Tenant
from ..repositories.note_repository import NoteRepository
from ..repositories.tenant_repository import TenantRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import TokenClaims
from ..schemas.subscription import (
    PlanChangeResponse,
    SubscriptionResponse,
    TagCount,
    TagUsage,
    TenantSummary,
    TenantUsage,
    TenantUsageBreakdown,
    UsageCounter,
    UsageDetails,
    UsageResponse,
    UsageWarnings,
    UserUsageBreakdown,
)
from ..subscription import UNLIMITED, SubscriptionTier, describe_features, get_limits
from .interfaces import ISubscriptionService

logger = get_logger("subscription_service")

# share of a limit from which usage counts as "near"
NEAR_LIMIT_RATIO = 0.8
POPULAR_TAG_COUNT = 10


def is_near_limit(current: int, limit: int) -> bool:
    return limit > 0 and current >= limit * NEAR_LIMIT_RATIO


class SubscriptionService(ISubscriptionService):
    """Subscription service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tenant_repo = TenantRepository(session)
        self.user_repo = UserRepository(session)
        self.note_repo = NoteRepository(session)

    async def get_subscription(self, claims: TokenClaims) -> SubscriptionResponse:
        """Plan features of the tenant plus its current usage."""
        tenant = await self._get_tenant(claims)

        usage = TenantUsage(
            users=await self.user_repo.count_by_tenant(tenant.id),
            notes=await self.note_repo.count_by_tenant(tenant.id),
            private_notes=await self.note_repo.count_by_tenant(tenant.id, private_only=True),
        )
        return SubscriptionResponse(
            **describe_features(tenant.subscription),
            usage=usage,
            tenant=TenantSummary.model_validate(tenant),
        )

    async def change_plan(self, claims: TokenClaims, plan: SubscriptionTier) -> PlanChangeResponse:
        """Move the tenant to ``plan`` and copy it onto every user in one transaction."""
        async with get_tenant_locks().hold(claims.tenant_id):
            tenant = await self._get_tenant(claims)
            previous = tenant.subscription

            await self.tenant_repo.set_subscription(tenant, plan)
            synced = await self.user_repo.sync_subscription(tenant.id, plan)
            await self.session.commit()

        logger.info(
            "Subscription changed",
            extra={
                "tenant_id": str(tenant.id),
                "from": previous.value,
                "to": plan.value,
                "users_synced": synced,
                "changed_by": str(claims.user_id),
            },
        )
        direction = "upgraded to" if plan == SubscriptionTier.PRO else "downgraded to"
        return PlanChangeResponse(
            message=f"Successfully {direction} {plan.value} plan",
            **describe_features(plan),
        )

    async def get_usage(self, claims: TokenClaims) -> UsageResponse:
        """Tenant and caller usage against the live plan limits."""
        tenant = await self._get_tenant(claims)
        limits = get_limits(tenant.subscription)

        user_count = await self.user_repo.count_by_tenant(tenant.id)
        tenant_notes = await self.note_repo.list_tenant_notes(tenant.id)
        user_notes = [note for note in tenant_notes if note.is_owned_by(claims.user_id)]
        private_count = sum(1 for note in tenant_notes if note.is_private)
        user_private_count = sum(1 for note in user_notes if note.is_private)

        tag_counts = Counter(tag for note in tenant_notes for tag in note.tags or [])

        return UsageResponse(
            subscription=tenant.subscription,
            limits=limits.to_dict(),
            usage=UsageDetails(
                tenant=TenantUsageBreakdown(
                    users=UsageCounter(
                        current=user_count,
                        limit=UNLIMITED if limits.can_invite_users else 1,
                    ),
                    notes=UsageCounter(current=len(tenant_notes), limit=limits.max_notes),
                    private_notes=UsageCounter(
                        current=private_count, limit=limits.max_private_notes
                    ),
                ),
                user=UserUsageBreakdown(
                    notes=UsageCounter(current=len(user_notes), limit=limits.max_notes),
                    private_notes=UsageCounter(
                        current=user_private_count, limit=limits.max_private_notes
                    ),
                ),
                tags=TagUsage(
                    unique=len(tag_counts),
                    total=sum(tag_counts.values()),
                    popular=[
                        TagCount(tag=tag, count=count)
                        for tag, count in tag_counts.most_common(POPULAR_TAG_COUNT)
                    ],
                ),
            ),
            warnings=UsageWarnings(
                near_note_limit=is_near_limit(len(tenant_notes), limits.max_notes),
                near_private_note_limit=is_near_limit(private_count, limits.max_private_notes),
            ),
        )

    async def _get_tenant(self, claims: TokenClaims) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(claims.tenant_id)
        if not tenant:
            raise NotFound("Tenant not found")
        return tenant
