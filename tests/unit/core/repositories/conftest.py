"""Two tenants with one user each, created through the repositories."""

import pytest

from tenantnotes.core.models import UserRole
from tenantnotes.core.repositories import NoteRepository, TenantRepository, UserRepository


@pytest.fixture
def tenant_repo(test_session):
    return TenantRepository(test_session)


@pytest.fixture
def user_repo(test_session):
    return UserRepository(test_session)


@pytest.fixture
def note_repo(test_session):
    return NoteRepository(test_session)


async def _make_tenant_with_user(tenant_repo, user_repo, name, email):
    tenant = await tenant_repo.create_tenant({"name": name})
    user = await user_repo.create_user(
        {
            "email": email,
            "password_hash": "x",
            "role": UserRole.ADMIN,
            "tenant_id": tenant.id,
            "subscription": tenant.subscription,
        }
    )
    return tenant, user


@pytest.fixture
async def tenant_a(test_session, tenant_repo, user_repo):
    pair = await _make_tenant_with_user(tenant_repo, user_repo, "Acme", "alice@acme.test")
    await test_session.commit()
    return pair


@pytest.fixture
async def tenant_b(test_session, tenant_repo, user_repo):
    pair = await _make_tenant_with_user(tenant_repo, user_repo, "Globex", "bob@globex.test")
    await test_session.commit()
    return pair
