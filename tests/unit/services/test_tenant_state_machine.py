"""
Unit tests for the tenant state machine.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.domain.entities import TenantStatus
from tenancy.domain.errors import ConflictError, InvalidTransition



@pytest.mark.asyncio
async def test_transition_applies_changes_and_audits(mock_uow, make_tenant, tenant_cas):
    # Arrange
    tenant = make_tenant(TenantStatus.active)
    mock_uow.tenants.compare_and_set_status = tenant_cas(tenant)
    user_id = uuid4()

    # Act
    updated = await TenantStateMachine(mock_uow).transition(
        tenant,
        TenantStatus.suspended,
        changes={"suspension_reason": "Non-payment"},
        action="tenant_suspended",
        user_id=user_id,
        metadata={"reason": "Non-payment"},
    )

    # Assert
    assert updated.status == TenantStatus.suspended
    assert updated.suspension_reason == "Non-payment"
    args = mock_uow.tenants.compare_and_set_status.call_args[0]
    assert args[0] == tenant.id
    assert args[1] == TenantStatus.active

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "tenant_suspended"
    assert audit.user_id == user_id
    assert audit.event_metadata == {"from": "active", "to": "suspended", "reason": "Non-payment"}


@pytest.mark.asyncio
async def test_illegal_transition_never_writes(mock_uow, make_tenant):
    tenant = make_tenant(TenantStatus.archived)
    mock_uow.tenants.compare_and_set_status = AsyncMock()

    with pytest.raises(InvalidTransition):
        await TenantStateMachine(mock_uow).transition(tenant, TenantStatus.active)

    mock_uow.tenants.compare_and_set_status.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_is_concurrent_modification(mock_uow, make_tenant):
    tenant = make_tenant(TenantStatus.active)
    mock_uow.tenants.compare_and_set_status = AsyncMock(return_value=None)

    with pytest.raises(ConflictError) as exc_info:
        await TenantStateMachine(mock_uow).transition(tenant, TenantStatus.suspended)

    assert exc_info.value.code == "CONCURRENT_MODIFICATION"
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_default_action_name(mock_uow, make_tenant, tenant_cas):
    tenant = make_tenant(TenantStatus.trial)
    mock_uow.tenants.compare_and_set_status = tenant_cas(tenant)

    await TenantStateMachine(mock_uow).transition(tenant, TenantStatus.expired)

    assert mock_uow.audit_events.create.call_args[0][0].action == "tenant_expired"
