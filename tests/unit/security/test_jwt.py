"""Unit tests for security/jwt.py"""

import base64
import json
import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from tenantnotes.core.models.user import UserRole
from tenantnotes.core.subscription import SubscriptionTier
from tenantnotes.security import jwt as jwt_module
from tenantnotes.security.jwt import (
    decode_access_token,
    extract_bearer_token,
    is_token_revoked,
    issue_token,
    revoke_token,
    verify_token,
)


class DummySettings:
    secret_key = "test-secret"
    algorithm = "HS256"
    access_token_expire_minutes = 30


def _b64(data: dict) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _payload(token: str) -> dict:
    return jwt.get_unverified_claims(token)


def test_issue_and_verify_roundtrip(monkeypatch, make_claims):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    claims = make_claims(role=UserRole.MEMBER, subscription=SubscriptionTier.PRO)

    token = issue_token(claims)
    assert token.count(".") == 2

    decoded = verify_token(token)
    assert decoded is not None
    assert decoded.user_id == claims.user_id
    assert decoded.email == claims.email
    assert decoded.role == UserRole.MEMBER
    assert decoded.tenant_id == claims.tenant_id
    assert decoded.subscription == SubscriptionTier.PRO
    assert decoded.jti
    assert decoded.expires_at is not None


def test_issued_token_registered_claims(monkeypatch, make_claims):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    claims = make_claims()

    payload = _payload(issue_token(claims, expires_delta=timedelta(minutes=5)))
    assert payload["sub"] == str(claims.user_id)
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 300
    # unique per issued token
    assert _payload(issue_token(claims))["jti"] != payload["jti"]


def test_verify_rejects_wrong_segment_count():
    assert verify_token("") is None
    assert verify_token("abc") is None
    assert verify_token("a.b") is None
    assert verify_token("a.b.c.d") is None


def test_verify_rejects_undecodable_payload():
    header = _b64({"alg": "HS256", "typ": "JWT"})
    assert verify_token(f"{header}.%%%not-base64%%%.sig") is None
    not_json = base64.urlsafe_b64encode(b"not json").rstrip(b"=").decode()
    assert verify_token(f"{header}.{not_json}.sig") is None


def test_verify_rejects_unsigned_token(make_claims):
    claims = make_claims()
    header = _b64({"alg": "none", "typ": "JWT"})
    body = _b64(
        {
            "sub": str(claims.user_id),
            "email": claims.email,
            "role": "admin",
            "tenant_id": str(claims.tenant_id),
            "subscription": "pro",
            "type": "access",
        }
    )
    assert verify_token(f"{header}.{body}.") is None


def test_verify_rejects_other_key(monkeypatch, make_claims):
    claims = make_claims()
    token = issue_token(claims)

    class OtherSettings(DummySettings):
        secret_key = "another-secret"

    monkeypatch.setattr(jwt_module, "get_settings", lambda: OtherSettings())
    assert verify_token(token) is None


def test_verify_rejects_tampered_payload(make_claims):
    token = issue_token(make_claims(subscription=SubscriptionTier.FREE))
    header, _, signature = token.split(".")
    payload = _payload(token)
    payload["subscription"] = "pro"
    assert verify_token(f"{header}.{_b64(payload)}.{signature}") is None


def test_verify_rejects_expired_token(make_claims):
    token = issue_token(make_claims(), expires_delta=timedelta(seconds=-10))
    assert verify_token(token) is None


def test_verify_rejects_wrong_type_and_bad_claims(monkeypatch):
    monkeypatch.setattr(jwt_module, "get_settings", lambda: DummySettings())
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    base = {
        "sub": str(uuid.uuid4()),
        "email": "a@example.com",
        "role": "admin",
        "tenant_id": str(uuid.uuid4()),
        "subscription": "free",
        "exp": exp,
    }

    refresh = jwt.encode({**base, "type": "refresh"}, "test-secret", algorithm="HS256")
    assert verify_token(refresh) is None

    bad_role = jwt.encode({**base, "type": "access", "role": "owner"}, "test-secret", algorithm="HS256")
    assert verify_token(bad_role) is None

    no_tenant = {k: v for k, v in base.items() if k != "tenant_id"}
    missing = jwt.encode({**no_tenant, "type": "access"}, "test-secret", algorithm="HS256")
    assert verify_token(missing) is None


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token(None) is None
    assert extract_bearer_token("") is None
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token("bearer abc") is None
    assert extract_bearer_token("Basic abc") is None


async def test_revoked_token_no_longer_decodes(make_claims, fake_redis):
    token = issue_token(make_claims())
    claims = await decode_access_token(token)
    assert claims is not None
    assert await is_token_revoked(claims.jti) is False

    assert await revoke_token(claims) is True
    assert await is_token_revoked(claims.jti) is True
    assert await decode_access_token(token) is None

    # TTL follows the token lifetime
    key = f"blacklist:{claims.jti}"
    assert key in fake_redis.expiry


async def test_revocation_degrades_open_without_redis(monkeypatch, make_claims):
    class DownRedis:
        async def ensure_connected(self):
            raise ConnectionError("redis down")

    monkeypatch.setattr(jwt_module, "get_redis_client", lambda: DownRedis())

    token = issue_token(make_claims())
    claims = await decode_access_token(token)
    assert claims is not None
    assert await revoke_token(claims) is False
