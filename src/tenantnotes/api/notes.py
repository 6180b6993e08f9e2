"""Notes API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.errors import NotFound
from ..core.schemas.auth import TokenClaims
from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteUpdate,
    parse_note_id,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import require_auth

router = APIRouter(prefix="/notes", tags=["notes"])

settings = get_settings()


def _note_uuid(note_id: str) -> UUID:
    # a malformed id can never match a note
    parsed = parse_note_id(note_id)
    if parsed is None:
        raise NotFound("Note not found")
    return parsed


@router.get("", response_model=NoteListResponse)
async def list_notes(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search: Optional[str] = Query(None, description="Case-insensitive title/content match"),
    tags: Optional[str] = Query(None, description="Comma separated, any tag matches"),
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes with optional search and tag filtering."""
    note_service = NoteService(session)
    return await note_service.list_notes(
        claims,
        page=page,
        limit=limit,
        search=search,
        tags=tags.split(",") if tags else None,
    )


@router.post("", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    return await note_service.create_note(claims, request)


# declared before /{note_id} so "bulk" is not parsed as an id
@router.delete("/bulk", response_model=BulkDeleteResponse)
async def bulk_delete_notes(
    request: BulkDeleteRequest,
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete several of the caller's notes."""
    note_service = NoteService(session)
    return await note_service.bulk_delete(claims, request.parsed_ids())


@router.get("/{note_id}", response_model=NoteEnvelope, response_model_exclude_none=True)
async def get_note(
    note_id: str,
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    return await note_service.get_note(claims, _note_uuid(note_id))


@router.put("/{note_id}", response_model=NoteEnvelope)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note."""
    note_service = NoteService(session)
    return await note_service.update_note(claims, _note_uuid(note_id), request)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    claims: TokenClaims = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    return await note_service.delete_note(claims, _note_uuid(note_id))
