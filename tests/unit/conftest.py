import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from tenancy.domain.entities import (
    SubscriptionPlan,
    Tenant,
    TenantStatus,
    User,
)
from tenancy.domain.plans import default_features, default_limits


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.audit_events.create = AsyncMock()
    return uow


@pytest.fixture
def make_tenant():
    def _make(status=TenantStatus.active, **overrides):
        plan = overrides.pop("subscription_plan", SubscriptionPlan.Kisan_Basic)
        fields = dict(
            id=uuid4(),
            name="Green Farms",
            slug="green-farms",
            status=status,
            subscription_plan=plan,
            owner_name="Asha Rao",
            owner_email="owner@greenfarms.in",
            feature_flags=default_features(plan),
            **default_limits(plan),
        )
        fields.update(overrides)
        return Tenant(**fields)

    return _make


@pytest.fixture
def make_user():
    def _make(**overrides):
        fields = dict(id=uuid4(), email="user@greenfarms.in", password_hash="x" * 60)
        fields.update(overrides)
        return User(**fields)

    return _make


def cas_returning_updated(tenant):
    """compare_and_set_status double that applies the values like the real repository"""

    async def _cas(tenant_id, expected, values):
        for key, value in values.items():
            setattr(tenant, key, value)
        return tenant

    return AsyncMock(side_effect=_cas)


@pytest.fixture
def tenant_cas():
    return cas_returning_updated
