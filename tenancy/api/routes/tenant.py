"""
Tenant API Routes - creation, updates and lifecycle transitions

Authentication is via Bearer JWT; each route requires a permission and, for
tenant-scoped routes, access to the tenant.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenancy.api.error import to_http_error
from tenancy.api.utils.rbac import require_permission, require_tenant_permission
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants import (
    ActivateTenantUseCase,
    ApproveTenantUseCase,
    ArchiveTenantUseCase,
    CreateTenantUseCase,
    ExpireTenantUseCase,
    GetArchiveJobUseCase,
    GetTenantUseCase,
    ListTenantAuditEventsUseCase,
    ProcessArchiveJobUseCase,
    ProvisionTenantAdminUseCase,
    ReactivateTenantUseCase,
    SuspendTenantUseCase,
    UpdateTenantUseCase,
)
from tenancy.app.use_cases.tenants.dtos import (
    ArchiveJobResponse,
    ArchiveTenantResponse,
    AuditEventsResponse,
    CreateTenantCommand,
    CreateTenantResponse,
    ProvisionTenantAdminResponse,
    TenantLimits,
    TenantResponse,
    UpdateTenantCommand,
)
from tenancy.depends import get_dispatcher, get_unit_of_work, get_unit_of_work_factory
from tenancy.domain.entities import TenantStatus
from tenancy.domain.permissions import Permission, RBACContext

router = APIRouter(tags=["Tenant"])


class CreateTenantRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    subscription_plan: str = "Kisan_Basic"
    owner_name: str = Field(..., min_length=1, max_length=255)
    owner_email: EmailStr
    owner_phone: Optional[str] = None
    requires_approval: bool = False
    limits: TenantLimits = TenantLimits()
    feature_flags: Optional[dict] = None
    metadata: Optional[dict] = None


class UpdateTenantRequest(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[EmailStr] = None
    owner_phone: Optional[str] = None
    subscription_plan: Optional[str] = None
    limits: TenantLimits = TenantLimits()
    feature_flags: Optional[dict] = None


class SuspendTenantRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class ArchiveTenantRequest(BaseModel):
    archive_location: str = ""
    encryption_key_id: str = ""


class ApproveTenantRequest(BaseModel):
    target: TenantStatus = TenantStatus.trial


class ActivateTenantRequest(BaseModel):
    subscription_plan: Optional[str] = None


class ProvisionAdminRequest(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None


@router.post("/tenants", status_code=status.HTTP_201_CREATED, response_model=CreateTenantResponse)
async def create_tenant(
    request: CreateTenantRequest,
    context: RBACContext = Depends(require_permission(Permission.TENANT_CREATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, INVALID_SLUG
        - 403 Forbidden: INSUFFICIENT_PERMISSION
        - 409 Conflict: SLUG_CONFLICT
    """
    use_case = CreateTenantUseCase(uow, trial_period_days=ApplicationConfig.TRIAL_PERIOD_DAYS)
    result = await use_case.execute(
        CreateTenantCommand(**request.model_dump()), user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_READ)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTenantUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.patch("/tenants/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantRequest,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_UPDATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Tenant

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, SLUG_IMMUTABLE
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: TENANT_ARCHIVED
    """
    result = await UpdateTenantUseCase(uow).execute(
        tenant_id, UpdateTenantCommand(**request.model_dump()), user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/suspend", response_model=TenantResponse)
async def suspend_tenant(
    tenant_id: UUID,
    request: SuspendTenantRequest = SuspendTenantRequest(),
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CONFIG)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Suspend Tenant (active -> suspended)

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, CONCURRENT_MODIFICATION
    """
    result = await SuspendTenantUseCase(uow, dispatcher).execute(
        tenant_id, reason=request.reason, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/reactivate", response_model=TenantResponse)
async def reactivate_tenant(
    tenant_id: UUID,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CONFIG)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Reactivate Tenant (suspended -> active)

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, CONCURRENT_MODIFICATION
    """
    result = await ReactivateTenantUseCase(uow, dispatcher).execute(
        tenant_id, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/archive",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ArchiveTenantResponse,
)
async def archive_tenant(
    tenant_id: UUID,
    request: ArchiveTenantRequest,
    background_tasks: BackgroundTasks,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_DELETE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    uow_factory=Depends(get_unit_of_work_factory),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Archive Tenant (suspended -> archived, irreversible)

    Returns 202 with the archive job reference; the job is processed in the
    background.

    Raises:
        - 400 Bad Request: ARCHIVE_PARAMETERS_REQUIRED
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_TRANSITION, CONCURRENT_MODIFICATION
    """
    result = await ArchiveTenantUseCase(uow, dispatcher).execute(
        tenant_id,
        request.archive_location,
        request.encryption_key_id,
        user_id=context.user_id,
    )
    if result.is_err():
        raise to_http_error(result.error)

    background_tasks.add_task(
        ProcessArchiveJobUseCase(uow_factory()).execute, UUID(result.value.job.job_id)
    )
    return result.value


@router.get("/archive-jobs/{job_id}", response_model=ArchiveJobResponse)
async def get_archive_job(
    job_id: UUID,
    context: RBACContext = Depends(require_permission(Permission.TENANT_READ)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetArchiveJobUseCase(uow).execute(job_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/approve", response_model=TenantResponse)
async def approve_tenant(
    tenant_id: UUID,
    request: ApproveTenantRequest = ApproveTenantRequest(),
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CONFIG)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Approve Tenant (pending_approval -> trial | active)"""
    use_case = ApproveTenantUseCase(uow, trial_period_days=ApplicationConfig.TRIAL_PERIOD_DAYS)
    result = await use_case.execute(tenant_id, target=request.target, user_id=context.user_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/activate", response_model=TenantResponse)
async def activate_tenant(
    tenant_id: UUID,
    request: ActivateTenantRequest = ActivateTenantRequest(),
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CONFIG)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Activate Tenant (trial -> active)"""
    result = await ActivateTenantUseCase(uow).execute(
        tenant_id, plan=request.subscription_plan, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/expire", response_model=TenantResponse)
async def expire_tenant(
    tenant_id: UUID,
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CONFIG)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Expire Tenant (any non-terminal status -> expired)"""
    result = await ExpireTenantUseCase(uow).execute(tenant_id, user_id=context.user_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/{tenant_id}/provision-admin", response_model=ProvisionTenantAdminResponse)
async def provision_tenant_admin(
    tenant_id: UUID,
    request: ProvisionAdminRequest = ProvisionAdminRequest(),
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_CREATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Provision Tenant Admin - retry entry point for lead conversion's identity step

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 503 Service Unavailable: TRANSIENT_ERROR (timed out, retry)
    """
    use_case = ProvisionTenantAdminUseCase(
        uow,
        dispatcher=dispatcher,
        temp_password_length=ApplicationConfig.TEMP_PASSWORD_LENGTH,
        timeout_seconds=ApplicationConfig.IDENTITY_PROVISIONING_TIMEOUT_SECONDS,
        site_url=ApplicationConfig.SITE_URL,
    )
    result = await use_case.execute(
        tenant_id, email=request.email, full_name=request.full_name, user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.get("/tenants/{tenant_id}/audit-events", response_model=AuditEventsResponse)
async def list_audit_events(
    tenant_id: UUID,
    limit: int = Query(50, ge=1, le=100),
    cursor: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    context: RBACContext = Depends(require_tenant_permission(Permission.TENANT_READ)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListTenantAuditEventsUseCase(uow).execute(
        tenant_id, limit=limit, cursor=cursor, action=action
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
