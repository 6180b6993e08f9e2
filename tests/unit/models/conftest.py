"""Fixtures creating rows directly through the ORM."""

import pytest

from tenantnotes.core.models import Tenant, User, UserRole
from tenantnotes.core.subscription import SubscriptionTier


@pytest.fixture
async def test_tenant(test_session):
    tenant = Tenant(name="Acme")
    test_session.add(tenant)
    await test_session.commit()
    return tenant


@pytest.fixture
async def test_user(test_session, test_tenant):
    user = User(
        email="owner@acme.test",
        password_hash="x",
        role=UserRole.ADMIN,
        tenant_id=test_tenant.id,
        subscription=SubscriptionTier.FREE,
    )
    test_session.add(user)
    await test_session.commit()
    return user
