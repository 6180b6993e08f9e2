# Note model for user content
import uuid
from typing import List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TenantScopedMixin
from .types import GUID, StringListType


class Note(TenantScopedMixin, BaseModel):
    """Text note with ordered tags and a private flag."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[List[str]] = mapped_column(StringListType(50), default=lambda: [], nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("idx_notes_tenant_user", "tenant_id", "user_id"),
        Index("idx_notes_tenant_updated", "tenant_id", "updated_at"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.user_id == user_id

    def is_visible_to(self, user_id: uuid.UUID) -> bool:
        """Private notes are only visible to their owner."""
        return not self.is_private or self.is_owned_by(user_id)

    def has_any_tag(self, tags: List[str]) -> bool:
        return any(tag in (self.tags or []) for tag in tags)
