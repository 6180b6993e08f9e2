"""Service fixtures: a registered free tenant with its admin."""

import pytest

from tenantnotes.core.schemas.auth import RegisterRequest
from tenantnotes.core.services import AuthService
from tenantnotes.security import verify_token


@pytest.fixture
def auth_service(test_session):
    return AuthService(test_session)


@pytest.fixture
async def admin_claims(auth_service):
    """Claims of a freshly registered tenant admin (free plan)."""
    result = await auth_service.register(
        RegisterRequest(email="admin@acme.test", password="Password123!", tenant_name="Acme")
    )
    return verify_token(result.token)
