"""
Tenant (organization) model.
"""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from ..subscription import SubscriptionTier
from .base import BaseModel
from .types import enum_column_type


class Tenant(BaseModel):
    """Organization owning users and notes. Its plan is the source of truth."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    subscription: Mapped[SubscriptionTier] = mapped_column(
        enum_column_type(SubscriptionTier, "subscription_tier"),
        default=SubscriptionTier.FREE,
        nullable=False,
    )

    __table_args__ = (CheckConstraint("length(name) <= 100", name="ck_tenants_name_len"),)

    def __repr__(self) -> str:
        return f"<Tenant(name='{self.name}', subscription={self.subscription.value})>"

    @property
    def is_pro(self) -> bool:
        return self.subscription == SubscriptionTier.PRO
