"""
Note management schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, PaginationInfo

MAX_TAG_LENGTH = 50


def parse_note_id(value) -> Optional[uuid.UUID]:
    """Parse a note id, None when it is not a UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _clean_tags(tags: List[str]) -> List[str]:
    """Strip tags and drop empty ones; order and case are kept."""
    cleaned: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if not tag:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
        cleaned.append(tag)
    return cleaned


class NoteCreate(CamelModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    content: str = Field(min_length=1, description="Note content")
    tags: List[str] = Field(default_factory=list, description="Note tags")
    is_private: bool = Field(default=False, description="Only visible to the owner (pro plan)")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Title and content are required")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v)


class NoteUpdate(CamelModel):
    """Partial note update; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[List[str]] = Field(default=None)
    is_private: Optional[bool] = Field(default=None)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title and content cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        if v is None:
            return v
        return _clean_tags(v)


class NoteResponse(CamelModel):
    """Note response schema."""

    id: uuid.UUID
    title: str
    content: str
    user_id: uuid.UUID
    tenant_id: uuid.UUID
    tags: List[str]
    is_private: bool
    created_at: datetime
    updated_at: datetime


class NoteEnvelope(CamelModel):
    message: Optional[str] = None
    note: NoteResponse


class NoteListResponse(CamelModel):
    notes: List[NoteResponse]
    pagination: PaginationInfo


class BulkDeleteRequest(CamelModel):
    note_ids: List[str] = Field(min_length=1, description="Note IDs to delete")

    def parsed_ids(self) -> List[uuid.UUID]:
        """Ids that parse as UUIDs; anything else cannot match a note."""
        return [note_id for note_id in map(parse_note_id, self.note_ids) if note_id is not None]


class BulkDeleteResponse(CamelModel):
    message: str
    deleted_count: int
