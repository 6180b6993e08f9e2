"""Security utilities."""

from .jwt import (
    decode_access_token,
    extract_bearer_token,
    issue_token,
    revoke_token,
    verify_token,
)
from .password import hash_password, needs_update, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "needs_update",
    "issue_token",
    "verify_token",
    "extract_bearer_token",
    "decode_access_token",
    "revoke_token",
]
