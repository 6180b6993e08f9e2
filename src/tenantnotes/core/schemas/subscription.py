"""
Subscription and usage schemas.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..subscription import SubscriptionTier
from .common import CamelModel


class PlanChangeRequest(CamelModel):
    plan: SubscriptionTier


class PlanFeatures(CamelModel):
    """Output of describe_features."""

    subscription: SubscriptionTier
    features: Dict[str, str]
    limits: Dict[str, Any]


class TenantUsage(CamelModel):
    users: int
    notes: int
    private_notes: int


class TenantSummary(CamelModel):
    id: uuid.UUID
    name: str
    created_at: Optional[datetime] = None


class SubscriptionResponse(PlanFeatures):
    usage: TenantUsage
    tenant: TenantSummary


class PlanChangeResponse(PlanFeatures):
    message: str


class UsageCounter(CamelModel):
    current: int
    limit: int


class TenantUsageBreakdown(CamelModel):
    users: UsageCounter
    notes: UsageCounter
    private_notes: UsageCounter


class UserUsageBreakdown(CamelModel):
    notes: UsageCounter
    private_notes: UsageCounter


class TagCount(CamelModel):
    tag: str
    count: int


class TagUsage(CamelModel):
    unique: int
    total: int
    popular: List[TagCount]


class UsageDetails(CamelModel):
    tenant: TenantUsageBreakdown
    user: UserUsageBreakdown
    tags: TagUsage


class UsageWarnings(CamelModel):
    near_note_limit: bool
    near_private_note_limit: bool


class UsageResponse(CamelModel):
    subscription: SubscriptionTier
    limits: Dict[str, Any]
    usage: UsageDetails
    warnings: UsageWarnings
