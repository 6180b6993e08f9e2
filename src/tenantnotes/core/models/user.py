"""
User model for authentication.
"""

import enum

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ..subscription import SubscriptionTier
from .base import BaseModel, TenantScopedMixin
from .types import enum_column_type


class UserRole(str, enum.Enum):
    """Role of a user inside their tenant."""

    ADMIN = "admin"
    MEMBER = "member"


class User(TenantScopedMixin, BaseModel):
    """User account, always bound to one tenant."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        enum_column_type(UserRole, "user_role"), default=UserRole.MEMBER, nullable=False
    )
    # denormalized copy of the tenant plan, kept in sync on plan changes
    subscription: Mapped[SubscriptionTier] = mapped_column(
        enum_column_type(SubscriptionTier, "subscription_tier"),
        default=SubscriptionTier.FREE,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
        Index("idx_users_tenant_role", "tenant_id", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role={self.role.value})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
