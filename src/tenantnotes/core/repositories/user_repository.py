"""User repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.user import User
from ..subscription import SubscriptionTier


class UserRepository:
    """Repository for user database operations.

    Lookups by id always take the caller's tenant. Only the email lookups
    used before authentication (login, uniqueness) are global, since
    emails are unique across tenants.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, user_data: dict) -> User:
        """Create new user."""
        user = User(**user_data)
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_email_taken(self, email: str) -> bool:
        """Check if email exists in any tenant."""
        return await self.get_by_email(email) is not None

    async def get_in_tenant(self, user_id: UUID, tenant_id: UUID) -> Optional[User]:
        """Get user by ID within a tenant."""
        stmt = select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_tenant(self, tenant_id: UUID) -> List[User]:
        """All users of a tenant, oldest first."""
        stmt = select(User).where(User.tenant_id == tenant_id).order_by(User.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_by_tenant(self, tenant_id: UUID) -> int:
        stmt = select(func.count(User.id)).where(User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def sync_subscription(self, tenant_id: UUID, tier: SubscriptionTier) -> int:
        """Copy the tenant plan onto every user row of the tenant."""
        stmt = (
            update(User)
            .where(User.tenant_id == tenant_id)
            .values(subscription=tier, updated_at=utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
