"""Note service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...middleware.auth import require_pro_subscription
from ..errors import AuthorizationDenied, NotFound, PlanLimitExceeded
from ..locks import get_tenant_locks
from ..logging import get_logger
from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..repositories.tenant_repository import TenantRepository
from ..schemas.auth import TokenClaims
from ..schemas.common import MessageResponse, PaginationInfo
from ..schemas.notes import (
    BulkDeleteResponse,
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from ..subscription import LimitField, SubscriptionTier, check_limit, get_limits
from .interfaces import INoteService

logger = get_logger("note_service")


class NoteService(INoteService):
    """Note service implementation.

    Entitlement checks always use the tenant's live plan, so a token issued
    before an upgrade or downgrade is judged by the current plan.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.tenant_repo = TenantRepository(session)
        self.settings = get_settings()

    async def list_notes(
        self,
        claims: TokenClaims,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> NoteListResponse:
        """List the caller's own notes, newest first."""
        page = max(page, 1)
        limit = min(max(limit or self.settings.default_page_size, 1), self.settings.max_page_size)
        search = search.strip() if search else None
        tag_filter = [t.strip() for t in tags or [] if t.strip()]

        notes, total = await self.note_repo.list_user_notes(
            claims.tenant_id,
            claims.user_id,
            page=page,
            per_page=limit,
            search=search or None,
            tag_filter=tag_filter or None,
        )
        return NoteListResponse(
            notes=[NoteResponse.model_validate(note) for note in notes],
            pagination=PaginationInfo.create(page, limit, total),
        )

    async def create_note(self, claims: TokenClaims, request: NoteCreate) -> NoteEnvelope:
        """Create a note after checking the plan's note, tag and private limits."""
        async with get_tenant_locks().hold(claims.tenant_id):
            tier = await self._live_tier(claims)

            note_count = await self.note_repo.count_by_tenant(claims.tenant_id)
            if not check_limit(tier, LimitField.MAX_NOTES, note_count):
                limit = get_limits(tier).max_notes
                raise PlanLimitExceeded(
                    f"Note limit reached. {tier.value.capitalize()} plan allows {limit} notes.",
                    details={"limit": limit, "current": note_count},
                )

            self._check_tag_limit(tier, request.tags)
            if request.is_private:
                await self._check_private_allowed(claims, tier)

            note = await self.note_repo.create_note(
                {
                    "title": request.title,
                    "content": request.content,
                    "tags": request.tags,
                    "is_private": request.is_private,
                    "user_id": claims.user_id,
                    "tenant_id": claims.tenant_id,
                }
            )
            await self.session.commit()

        logger.info(
            "Note created",
            extra={"note_id": str(note.id), "tenant_id": str(claims.tenant_id)},
        )
        return NoteEnvelope(message="Note created successfully", note=NoteResponse.model_validate(note))

    async def get_note(self, claims: TokenClaims, note_id: UUID) -> NoteEnvelope:
        """Get a tenant note; other users' private notes are refused."""
        note = await self._get_tenant_note(claims, note_id)
        if not note.is_visible_to(claims.user_id):
            raise AuthorizationDenied("Access denied to private note")
        return NoteEnvelope(note=NoteResponse.model_validate(note))

    async def update_note(
        self, claims: TokenClaims, note_id: UUID, request: NoteUpdate
    ) -> NoteEnvelope:
        """Partial update by the owner."""
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)

        async with get_tenant_locks().hold(claims.tenant_id):
            note = await self._get_tenant_note(claims, note_id)
            if not note.is_owned_by(claims.user_id):
                raise AuthorizationDenied("You can only update your own notes")

            if "tags" in update_data or update_data.get("is_private"):
                tier = await self._live_tier(claims)
                if "tags" in update_data:
                    self._check_tag_limit(tier, update_data["tags"])
                if update_data.get("is_private") and not note.is_private:
                    await self._check_private_allowed(claims, tier)

            if update_data:
                note = await self.note_repo.update_note(note, update_data)
                await self.session.commit()

        return NoteEnvelope(message="Note updated successfully", note=NoteResponse.model_validate(note))

    async def delete_note(self, claims: TokenClaims, note_id: UUID) -> MessageResponse:
        """Delete a note owned by the caller."""
        note = await self._get_tenant_note(claims, note_id)
        if not note.is_owned_by(claims.user_id):
            raise AuthorizationDenied("You can only delete your own notes")

        await self.note_repo.delete_owned([note.id], claims.tenant_id, claims.user_id)
        await self.session.commit()
        return MessageResponse(message="Note deleted successfully")

    async def bulk_delete(self, claims: TokenClaims, note_ids: List[UUID]) -> BulkDeleteResponse:
        """Delete the subset of ``note_ids`` the caller owns; ids of others are ignored."""
        deleted = await self.note_repo.delete_owned(note_ids, claims.tenant_id, claims.user_id)
        if deleted == 0:
            raise NotFound("No notes found to delete")
        await self.session.commit()

        logger.info(
            "Notes bulk deleted",
            extra={
                "tenant_id": str(claims.tenant_id),
                "requested": len(note_ids),
                "deleted": deleted,
            },
        )
        return BulkDeleteResponse(
            message=f"{deleted} notes deleted successfully", deleted_count=deleted
        )

    async def _live_tier(self, claims: TokenClaims) -> SubscriptionTier:
        tier = await self.tenant_repo.get_subscription(claims.tenant_id)
        if tier is None:
            raise NotFound("Tenant not found")
        return tier

    async def _get_tenant_note(self, claims: TokenClaims, note_id: UUID) -> Note:
        # notes of other tenants look exactly like missing ones
        note = await self.note_repo.get_for_tenant(note_id, claims.tenant_id)
        if not note:
            raise NotFound("Note not found")
        return note

    def _check_tag_limit(self, tier: SubscriptionTier, tags: List[str]) -> None:
        max_tags = get_limits(tier).max_tags_per_note
        if len(tags) > max_tags:
            raise PlanLimitExceeded(
                f"Maximum {max_tags} tags allowed for {tier.value} plan",
                details={"limit": max_tags, "current": len(tags)},
            )

    async def _check_private_allowed(self, claims: TokenClaims, tier: SubscriptionTier) -> None:
        require_pro_subscription(claims.with_subscription(tier))
        private_count = await self.note_repo.count_by_tenant(claims.tenant_id, private_only=True)
        if not check_limit(tier, LimitField.MAX_PRIVATE_NOTES, private_count):
            limit = get_limits(tier).max_private_notes
            raise PlanLimitExceeded(
                f"Private note limit reached for {tier.value} plan",
                details={"limit": limit, "current": private_count},
            )
