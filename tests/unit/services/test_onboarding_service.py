"""
Unit tests for onboarding workflow materialization and self-healing.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.domain.entities import OnboardingWorkflow, WorkflowStatus
from tenancy.domain.services.onboarding import ONBOARDING_TEMPLATE, build_steps


@pytest.mark.asyncio
async def test_ensure_workflow_returns_open_workflow(mock_uow):
    existing = OnboardingWorkflow(tenant_id=uuid4(), total_steps=6)
    mock_uow.workflows.get_open_by_tenant = AsyncMock(return_value=existing)
    mock_uow.workflows.create = AsyncMock()

    workflow, created = await OnboardingService(mock_uow).ensure_workflow(existing.tenant_id)

    assert workflow is existing
    assert created is False
    mock_uow.workflows.create.assert_not_called()


@pytest.mark.asyncio
async def test_ensure_workflow_creates_from_template(mock_uow):
    tenant_id = uuid4()
    mock_uow.workflows.get_open_by_tenant = AsyncMock(return_value=None)
    mock_uow.workflows.create = AsyncMock(side_effect=lambda w: w)
    mock_uow.steps.create_many = AsyncMock(side_effect=lambda steps: steps)

    workflow, created = await OnboardingService(mock_uow).ensure_workflow(tenant_id)

    assert created is True
    assert workflow.tenant_id == tenant_id
    assert workflow.status == WorkflowStatus.in_progress
    assert workflow.current_step == 1
    assert workflow.total_steps == len(ONBOARDING_TEMPLATE)
    steps = mock_uow.steps.create_many.call_args[0][0]
    assert len(steps) == len(ONBOARDING_TEMPLATE)
    assert mock_uow.audit_events.create.call_args[0][0].action == "onboarding_workflow_created"


@pytest.mark.asyncio
async def test_load_steps_returns_existing_steps(mock_uow):
    workflow = OnboardingWorkflow(tenant_id=uuid4(), total_steps=6)
    steps = build_steps(workflow.id)
    mock_uow.steps.get_by_workflow = AsyncMock(return_value=steps)
    mock_uow.workflows.compare_and_set = AsyncMock()

    loaded, loaded_steps = await OnboardingService(mock_uow).load_steps(workflow)

    assert loaded is workflow
    assert loaded_steps == steps
    mock_uow.workflows.compare_and_set.assert_not_called()


@pytest.mark.asyncio
async def test_load_steps_heals_workflow_without_steps(mock_uow):
    workflow = OnboardingWorkflow(tenant_id=uuid4(), total_steps=6, current_step=4, version=3)
    healed = OnboardingWorkflow(
        id=workflow.id, tenant_id=workflow.tenant_id, total_steps=6, current_step=1, version=4
    )
    mock_uow.steps.get_by_workflow = AsyncMock(return_value=[])
    mock_uow.workflows.compare_and_set = AsyncMock(return_value=healed)
    mock_uow.steps.create_many = AsyncMock(side_effect=lambda steps: steps)

    loaded, steps = await OnboardingService(mock_uow).load_steps(workflow)

    assert loaded is healed
    assert len(steps) == len(ONBOARDING_TEMPLATE)
    args = mock_uow.workflows.compare_and_set.call_args[0]
    assert args[0] == workflow.id
    assert args[1] == 3
    assert args[2]["current_step"] == 1
    assert mock_uow.audit_events.create.call_args[0][0].action == "onboarding_workflow_healed"


@pytest.mark.asyncio
async def test_load_steps_defers_to_concurrent_healer(mock_uow):
    workflow = OnboardingWorkflow(tenant_id=uuid4(), total_steps=6, version=3)
    healed_steps = build_steps(workflow.id)
    mock_uow.steps.get_by_workflow = AsyncMock(side_effect=[[], healed_steps])
    mock_uow.workflows.compare_and_set = AsyncMock(return_value=None)
    mock_uow.workflows.get_by_id = AsyncMock(return_value=workflow)
    mock_uow.steps.create_many = AsyncMock()

    loaded, steps = await OnboardingService(mock_uow).load_steps(workflow)

    assert steps == healed_steps
    mock_uow.steps.create_many.assert_not_called()
