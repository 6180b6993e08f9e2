"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import (
    AuthResponse,
    InviteRequest,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TenantResponse,
    TokenClaims,
    UserResponse,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse, PaginationInfo
from .notes import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    NoteCreate,
    NoteEnvelope,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)
from .subscription import (
    PlanChangeRequest,
    PlanChangeResponse,
    SubscriptionResponse,
    UsageResponse,
)

__all__ = [
    # Auth schemas
    "TokenClaims",
    "RegisterRequest",
    "LoginRequest",
    "InviteRequest",
    "UserResponse",
    "TenantResponse",
    "AuthResponse",
    "ProfileResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteEnvelope",
    "NoteListResponse",
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    # Subscription schemas
    "PlanChangeRequest",
    "PlanChangeResponse",
    "SubscriptionResponse",
    "UsageResponse",
    # Common schemas
    "PaginationInfo",
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
