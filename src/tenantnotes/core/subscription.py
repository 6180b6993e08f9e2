"""Subscription plans and the limits each plan grants to a tenant."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

UNLIMITED = -1


class SubscriptionTier(str, Enum):
    """Subscription plan of a tenant."""

    FREE = "free"
    PRO = "pro"


class LimitField(str, Enum):
    """Limits that can be checked against current usage."""

    MAX_NOTES = "max_notes"
    MAX_PRIVATE_NOTES = "max_private_notes"
    MAX_TAGS_PER_NOTE = "max_tags_per_note"
    CAN_INVITE_USERS = "can_invite_users"
    API_RATE_LIMIT = "api_rate_limit"


@dataclass(frozen=True)
class SubscriptionLimits:
    max_notes: int
    max_private_notes: int
    max_tags_per_note: int
    can_invite_users: bool
    api_rate_limit: int  # requests per minute

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (camelCase keys)."""
        return {
            "maxNotes": self.max_notes,
            "maxPrivateNotes": self.max_private_notes,
            "maxTagsPerNote": self.max_tags_per_note,
            "canInviteUsers": self.can_invite_users,
            "apiRateLimit": self.api_rate_limit,
        }


SUBSCRIPTION_LIMITS: Dict[SubscriptionTier, SubscriptionLimits] = {
    SubscriptionTier.FREE: SubscriptionLimits(
        max_notes=50,
        max_private_notes=0,
        max_tags_per_note=3,
        can_invite_users=False,
        api_rate_limit=30,
    ),
    SubscriptionTier.PRO: SubscriptionLimits(
        max_notes=UNLIMITED,
        max_private_notes=UNLIMITED,
        max_tags_per_note=10,
        can_invite_users=True,
        api_rate_limit=300,
    ),
}


def get_limits(tier: Union[SubscriptionTier, str]) -> SubscriptionLimits:
    """Get the limits for a plan."""
    return SUBSCRIPTION_LIMITS[SubscriptionTier(tier)]


def check_limit(
    tier: Union[SubscriptionTier, str], field: Union[LimitField, str], current_value: int
) -> bool:
    """Return True if one more unit may be added on top of ``current_value``.

    Unlimited fields always pass. Otherwise usage must be strictly below
    the limit, so a tenant already at the limit is refused.
    """
    limit = int(getattr(get_limits(tier), LimitField(field).value))
    if limit == UNLIMITED:
        return True
    return current_value < limit


def _describe_count(value: int, none_label: Optional[str] = None) -> str:
    if value == UNLIMITED:
        return "Unlimited"
    if value == 0 and none_label:
        return none_label
    return f"Up to {value}"


def describe_features(tier: Union[SubscriptionTier, str]) -> Dict[str, Any]:
    """Human readable plan summary, used by the subscription endpoints."""
    tier = SubscriptionTier(tier)
    limits = get_limits(tier)
    return {
        "subscription": tier.value,
        "features": {
            "notes": _describe_count(limits.max_notes),
            "privateNotes": _describe_count(limits.max_private_notes, none_label="None"),
            "tagsPerNote": f"Up to {limits.max_tags_per_note}",
            "teamInvites": "Yes" if limits.can_invite_users else "No",
            "apiAccess": f"{limits.api_rate_limit} requests/min",
        },
        "limits": limits.to_dict(),
    }
