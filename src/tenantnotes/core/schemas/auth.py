"""
Authentication and authorization schemas.

These schemas define the API contracts for registration, login, invites
and the claim set carried inside access tokens.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models.user import UserRole
from ..subscription import SubscriptionTier
from .common import CamelModel


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or not domain or " " in value:
        raise ValueError("A valid email address is required")
    return value


class TokenClaims(BaseModel):
    """Identity and entitlement snapshot embedded in an access token."""

    user_id: uuid.UUID
    email: str
    role: UserRole
    tenant_id: uuid.UUID
    subscription: SubscriptionTier

    # registered claims, only set on decoded tokens
    jti: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def with_subscription(self, tier: SubscriptionTier) -> "TokenClaims":
        """Copy of the claims carrying the tenant's live plan."""
        return self.model_copy(update={"subscription": tier})


class RegisterRequest(CamelModel):
    """Registration creates a tenant and its first (admin) user."""

    email: str = Field(min_length=3, max_length=255, description="User email")
    password: str = Field(min_length=8, max_length=128, description="User password")
    tenant_name: str = Field(min_length=1, max_length=100, description="Organization name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _normalize_email(v)

    @field_validator("tenant_name")
    @classmethod
    def validate_tenant_name(cls, v):
        if not v.strip():
            raise ValueError("Tenant name cannot be empty")
        return v.strip()


class LoginRequest(CamelModel):
    """User login request schema."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _normalize_email(v)


class InviteRequest(CamelModel):
    """Admin adds a user to their own tenant."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = Field(default=UserRole.MEMBER)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _normalize_email(v)


class UserResponse(CamelModel):
    """User information response schema."""

    id: uuid.UUID
    email: str
    role: UserRole
    tenant_id: uuid.UUID
    subscription: SubscriptionTier
    created_at: Optional[datetime] = None


class TenantResponse(CamelModel):
    id: uuid.UUID
    name: str
    subscription: SubscriptionTier


class AuthResponse(CamelModel):
    """Token plus the authenticated user."""

    message: str
    token: str
    user: UserResponse


class ProfileResponse(CamelModel):
    user: UserResponse
    tenant: TenantResponse
