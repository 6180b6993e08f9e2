"""Tenant repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tenant import Tenant
from ..subscription import SubscriptionTier


class TenantRepository:
    """Repository for tenant database operations.

    Like the other repositories it only flushes; the calling service owns
    the transaction and commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_tenant(self, tenant_data: dict) -> Tenant:
        """Create new tenant."""
        tenant = Tenant(**tenant_data)
        self.session.add(tenant)
        await self.session.flush()
        return tenant

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID."""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_subscription(self, tenant_id: UUID) -> Optional[SubscriptionTier]:
        """Live plan of a tenant, None if the tenant is gone."""
        stmt = select(Tenant.subscription).where(Tenant.id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_subscription(self, tenant: Tenant, tier: SubscriptionTier) -> Tenant:
        """Change the tenant plan (caller syncs users and commits)."""
        tenant.subscription = tier
        await self.session.flush()
        return tenant
