"""
Lead API Routes - lead to tenant conversion
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenancy.api.error import to_http_error
from tenancy.api.utils.rbac import require_permission
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.leads import ConvertLeadToTenantUseCase
from tenancy.app.use_cases.leads.dtos import ConvertLeadCommand, ConvertLeadResponse
from tenancy.depends import get_dispatcher, get_unit_of_work
from tenancy.domain.permissions import Permission, RBACContext

router = APIRouter(prefix="/leads", tags=["Leads"])


class ConvertLeadRequest(BaseModel):
    tenant_name: str = Field(..., min_length=1, max_length=100)
    tenant_slug: str = Field(..., min_length=1, max_length=100)
    subscription_plan: str = "Kisan_Basic"
    admin_email: Optional[EmailStr] = None
    admin_name: Optional[str] = None


@router.post(
    "/{lead_id}/convert",
    status_code=status.HTTP_201_CREATED,
    response_model=ConvertLeadResponse,
)
async def convert_lead(
    lead_id: UUID,
    request: ConvertLeadRequest,
    context: RBACContext = Depends(require_permission(Permission.TENANT_CREATE)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Convert Lead to Tenant

    The tenant exists once this returns 201, even if admin provisioning
    failed (admin_provisioning_status=failed; retry via
    POST /tenants/{id}/provision-admin).

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, INVALID_SLUG
        - 404 Not Found: LEAD_NOT_FOUND
        - 409 Conflict: SLUG_CONFLICT, LEAD_ALREADY_CONVERTED
        - 422 Unprocessable Entity: LEAD_NOT_QUALIFIED
    """
    use_case = ConvertLeadToTenantUseCase(
        uow,
        dispatcher=dispatcher,
        trial_period_days=ApplicationConfig.TRIAL_PERIOD_DAYS,
        temp_password_length=ApplicationConfig.TEMP_PASSWORD_LENGTH,
        provisioning_timeout_seconds=ApplicationConfig.IDENTITY_PROVISIONING_TIMEOUT_SECONDS,
        site_url=ApplicationConfig.SITE_URL,
    )
    result = await use_case.execute(
        lead_id, ConvertLeadCommand(**request.model_dump()), user_id=context.user_id
    )
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
