"""
Admin API Routes - Service Integration Endpoints

These endpoints are for internal service integrations (billing system,
schedulers). Authentication is via Admin API Key, not user JWTs.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from tenancy.api.error import to_http_error
from tenancy.api.utils.admin_auth import verify_admin_api_key
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.billing import (
    DisableExpiredFeaturesUseCase,
    HandleBillingEventUseCase,
)
from tenancy.app.use_cases.billing.dtos import (
    BillingEventCommand,
    BillingEventResponse,
    DisableExpiredFeaturesResponse,
)
from tenancy.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class DisableExpiredRequest(BaseModel):
    now: Optional[datetime] = None


@router.post(
    "/billing/events",
    status_code=status.HTTP_200_OK,
    response_model=BillingEventResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def handle_billing_event(
    request: BillingEventCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Billing Webhook

    invoice.paid activates trial tenants, subscription.deleted expires the
    tenant, invoice.payment_failed is recorded, other events are ignored.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: CONCURRENT_MODIFICATION
    """
    result = await HandleBillingEventUseCase(uow).execute(request)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value


@router.post(
    "/tenants/disable-expired",
    status_code=status.HTTP_200_OK,
    response_model=DisableExpiredFeaturesResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def disable_expired_features(
    request: DisableExpiredRequest = DisableExpiredRequest(),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Expiry Sweep

    Expires trial tenants past trial_ends_at and active tenants past
    subscription_end_date.

    Requires: X-Admin-API-Key header
    """
    result = await DisableExpiredFeaturesUseCase(uow).execute(now=request.now)
    if result.is_err():
        raise to_http_error(result.error)
    return result.value
