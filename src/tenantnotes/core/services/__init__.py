"""
Service layer: one service per resource, constructed per request with the
request's database session.
"""

from .auth_service import AuthService
from .health_service import HealthService
from .interfaces import IAuthService, IHealthService, INoteService, ISubscriptionService
from .note_service import NoteService
from .subscription_service import SubscriptionService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ISubscriptionService",
    "IHealthService",
    # Implementations
    "AuthService",
    "NoteService",
    "SubscriptionService",
    "HealthService",
]
