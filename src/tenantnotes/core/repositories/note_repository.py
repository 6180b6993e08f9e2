"""Note repository for database operations."""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note


class NoteRepository:
    """Repository for note database operations.

    Every query is filtered by tenant_id first; ownership is an extra
    predicate on top for mutations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.flush()
        return note

    async def get_for_tenant(self, note_id: UUID, tenant_id: UUID) -> Optional[Note]:
        """Get note by ID within a tenant."""
        stmt = select(Note).where(Note.id == note_id, Note.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply field updates to a loaded note."""
        for key, value in update_data.items():
            setattr(note, key, value)
        await self.session.flush()
        return note

    async def delete_owned(self, note_ids: Iterable[UUID], tenant_id: UUID, user_id: UUID) -> int:
        """Delete the given notes that the user owns in the tenant, return the count."""
        ids = list(set(note_ids))
        if not ids:
            return 0

        owned_stmt = select(Note.id).where(
            Note.id.in_(ids), Note.tenant_id == tenant_id, Note.user_id == user_id
        )
        owned_ids = list((await self.session.execute(owned_stmt)).scalars())
        if not owned_ids:
            return 0

        stmt = delete(Note).where(
            Note.id.in_(owned_ids), Note.tenant_id == tenant_id, Note.user_id == user_id
        )
        await self.session.execute(stmt)
        return len(owned_ids)

    async def list_user_notes(
        self,
        tenant_id: UUID,
        user_id: UUID,
        page: int = 1,
        per_page: int = 10,
        search: Optional[str] = None,
        tag_filter: Optional[List[str]] = None,
    ) -> tuple[List[Note], int]:
        """List the user's notes in the tenant, newest first, with search and tag filter."""
        stmt = select(Note).where(Note.tenant_id == tenant_id, Note.user_id == user_id)

        if search:
            stmt = stmt.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                )
            )

        stmt = stmt.order_by(desc(Note.updated_at), desc(Note.created_at))
        result = await self.session.execute(stmt)
        notes = list(result.scalars())

        # tags are a JSON list on sqlite, so tag matching happens here
        if tag_filter:
            notes = [note for note in notes if note.has_any_tag(tag_filter)]

        total_count = len(notes)
        offset = (page - 1) * per_page
        return notes[offset : offset + per_page], total_count

    async def list_tenant_notes(self, tenant_id: UUID) -> List[Note]:
        """All notes of a tenant (usage statistics)."""
        stmt = select(Note).where(Note.tenant_id == tenant_id).order_by(Note.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count_by_tenant(self, tenant_id: UUID, private_only: bool = False) -> int:
        """Count tenant notes, optionally only the private ones."""
        stmt = select(func.count(Note.id)).where(Note.tenant_id == tenant_id)
        if private_only:
            stmt = stmt.where(Note.is_private.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar() or 0
