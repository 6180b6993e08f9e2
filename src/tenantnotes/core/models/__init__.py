"""
Database models for TenantNotes.

Models included:
    - Tenant: organization with a subscription plan
    - User: account bound to a tenant, with a role
    - Note: tenant scoped note owned by a user
"""

from .base import BaseModel, TenantScopedMixin
from .note import Note
from .tenant import Tenant
from .user import User, UserRole

__all__ = [
    "BaseModel",
    "TenantScopedMixin",
    "Tenant",
    "User",
    "UserRole",
    "Note",
]
