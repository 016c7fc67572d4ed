"""
Access API Routes - user-tenant access validation and repair

Validation endpoints only require authentication: they report on the
caller's own access and never grant anything.
"""

from typing import Callable, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from tenancy.api.error import to_http_error
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.access import (
    CreateUserTenantRelationshipUseCase,
    ValidateMultipleTenantsUseCase,
    ValidateTenantAccessUseCase,
)
from tenancy.app.use_cases.access.dtos import (
    MultipleTenantAccessResponse,
    RelationshipResponse,
    TenantAccessStatus,
)
from tenancy.depends import get_current_user_id, get_unit_of_work, get_unit_of_work_factory
from tenancy.domain.entities import UserRole

router = APIRouter(prefix="/access", tags=["Access"])


class ValidateTenantsRequest(BaseModel):
    tenant_ids: List[UUID] = Field(..., max_length=100)


class CreateRelationshipRequest(BaseModel):
    role: str = UserRole.tenant_admin.value
    user_id: Optional[UUID] = None


@router.get("/tenants/{tenant_id}", response_model=TenantAccessStatus)
async def validate_tenant_access(
    tenant_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ValidateTenantAccessUseCase(uow).execute(user_id, tenant_id)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post("/tenants/validate", response_model=MultipleTenantAccessResponse)
async def validate_multiple_tenants(
    request: ValidateTenantsRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory),
):
    use_case = ValidateMultipleTenantsUseCase(
        uow_factory, item_timeout_seconds=ApplicationConfig.VALIDATION_ITEM_TIMEOUT_SECONDS
    )
    result = await use_case.execute(user_id, request.tenant_ids)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/relationship",
    status_code=status.HTTP_200_OK,
    response_model=RelationshipResponse,
)
async def create_relationship(
    tenant_id: UUID,
    request: CreateRelationshipRequest = CreateRelationshipRequest(),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create (or repair) a user-tenant relationship

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (not a tenant role)
        - 403 Forbidden: INSUFFICIENT_PERMISSION (caller is not a super admin)
        - 404 Not Found: TENANT_NOT_FOUND, USER_NOT_FOUND
    """
    result = await CreateUserTenantRelationshipUseCase(uow).execute(
        user_id, tenant_id, role=request.role, target_user_id=request.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
