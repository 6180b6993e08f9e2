"""
Service interfaces for TenantNotes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..schemas.auth import (
    AuthResponse,
    InviteRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenClaims,
)
from ..schemas.common import HealthCheckResponse, MessageResponse
from ..schemas.notes import (
    BulkDeleteResponse,
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteUpdate,
)
from ..schemas.subscription import (
    PlanChangeResponse,
    SubscriptionResponse,
    UsageResponse,
)
from ..subscription import SubscriptionTier


class IAuthService(ABC):
    """Tenant registration, login and user management."""

    @abstractmethod
    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create a tenant and its admin user."""
        pass

    @abstractmethod
    async def login(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a token."""
        pass

    @abstractmethod
    async def invite(self, claims: TokenClaims, request: InviteRequest) -> AuthResponse:
        """Add a user to the admin's tenant."""
        pass

    @abstractmethod
    async def get_profile(self, claims: TokenClaims) -> ProfileResponse:
        """Current user and tenant."""
        pass

    @abstractmethod
    async def logout(self, claims: TokenClaims) -> MessageResponse:
        """Revoke the current token."""
        pass


class INoteService(ABC):
    """Tenant scoped note CRUD with plan enforcement."""

    @abstractmethod
    async def list_notes(
        self,
        claims: TokenClaims,
        page: int,
        limit: int,
        search: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> NoteListResponse:
        """List the caller's notes."""
        pass

    @abstractmethod
    async def create_note(self, claims: TokenClaims, request: NoteCreate) -> NoteEnvelope:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, claims: TokenClaims, note_id: UUID) -> NoteEnvelope:
        """Get note by ID."""
        pass

    @abstractmethod
    async def update_note(
        self, claims: TokenClaims, note_id: UUID, request: NoteUpdate
    ) -> NoteEnvelope:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, claims: TokenClaims, note_id: UUID) -> MessageResponse:
        """Delete note."""
        pass

    @abstractmethod
    async def bulk_delete(self, claims: TokenClaims, note_ids: List[UUID]) -> BulkDeleteResponse:
        """Delete several owned notes at once."""
        pass


class ISubscriptionService(ABC):
    """Plan inspection and changes."""

    @abstractmethod
    async def get_subscription(self, claims: TokenClaims) -> SubscriptionResponse:
        """Plan features plus tenant usage."""
        pass

    @abstractmethod
    async def change_plan(self, claims: TokenClaims, plan: SubscriptionTier) -> PlanChangeResponse:
        """Upgrade or downgrade the tenant."""
        pass

    @abstractmethod
    async def get_usage(self, claims: TokenClaims) -> UsageResponse:
        """Detailed usage against plan limits."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass

    @abstractmethod
    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        pass
