"""
Onboarding API Routes - workflow creation, reads and step advances
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from tenancy.api.error import to_http_error
from tenancy.api.utils.rbac import (
    authorize,
    require_tenant_permission,
    require_workflow_permission,
)
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.onboarding import (
    AdvanceStepUseCase,
    CreateWorkflowUseCase,
    GetTenantWorkflowUseCase,
    GetWorkflowUseCase,
    PauseWorkflowUseCase,
    ResumeWorkflowUseCase,
)
from tenancy.app.use_cases.onboarding.dtos import (
    AdvanceStepCommand,
    CreateWorkflowResponse,
    WorkflowResponse,
)
from tenancy.depends import (
    get_current_user_id,
    get_dispatcher,
    get_ordering_policy,
    get_unit_of_work,
)
from tenancy.domain.entities import StepOrderingPolicy
from tenancy.domain.permissions import Permission, RBACContext

router = APIRouter(tags=["Onboarding"])


class CreateWorkflowRequest(BaseModel):
    tenant_id: UUID


class AdvanceStepRequest(BaseModel):
    status: str
    step_data: Dict[str, Any] = Field(default_factory=dict)
    validation_errors: List[str] = Field(default_factory=list)


@router.post("/onboarding/workflows", response_model=CreateWorkflowResponse)
async def create_workflow(
    request: CreateWorkflowRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Onboarding Workflow (idempotent)

    Returns the tenant's open workflow when one exists (created=false).

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: TENANT_INACTIVE
    """
    await authorize(uow, user_id, Permission.TENANT_UPDATE, request.tenant_id)

    result = await CreateWorkflowUseCase(uow).execute(request.tenant_id, user_id=user_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/onboarding/workflows/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: UUID,
    context: RBACContext = Depends(require_workflow_permission(Permission.TENANT_READ)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetWorkflowUseCase(uow).execute(workflow_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/tenants/{tenant_id}/onboarding", response_model=WorkflowResponse)
async def get_tenant_workflow(
    tenant_id: UUID,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_READ)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTenantWorkflowUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/onboarding/workflows/{workflow_id}/steps/{step_number}",
    response_model=WorkflowResponse,
)
async def advance_step(
    workflow_id: UUID,
    step_number: int,
    request: AdvanceStepRequest,
    context: RBACContext = Depends(require_workflow_permission(Permission.TENANT_UPDATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    ordering_policy: StepOrderingPolicy = Depends(get_ordering_policy),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Advance Onboarding Step

    Raises:
        - 400 Bad Request: INVALID_STEP_STATUS, INVALID_STEP_NUMBER,
                           VALIDATION_ERRORS_REQUIRED
        - 404 Not Found: WORKFLOW_NOT_FOUND
        - 409 Conflict: WORKFLOW_COMPLETED, WORKFLOW_PAUSED,
                        STEP_ORDER_VIOLATION, CONCURRENT_MODIFICATION
    """
    use_case = AdvanceStepUseCase(uow, ordering_policy=ordering_policy, dispatcher=dispatcher)
    result = await use_case.execute(
        workflow_id,
        step_number,
        AdvanceStepCommand(**request.model_dump()),
        user_id=context.user_id,
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/onboarding/workflows/{workflow_id}/pause", response_model=WorkflowResponse)
async def pause_workflow(
    workflow_id: UUID,
    context: RBACContext = Depends(require_workflow_permission(Permission.TENANT_UPDATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await PauseWorkflowUseCase(uow).execute(workflow_id, user_id=context.user_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/onboarding/workflows/{workflow_id}/resume", response_model=WorkflowResponse)
async def resume_workflow(
    workflow_id: UUID,
    context: RBACContext = Depends(require_workflow_permission(Permission.TENANT_UPDATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ResumeWorkflowUseCase(uow).execute(workflow_id, user_id=context.user_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
