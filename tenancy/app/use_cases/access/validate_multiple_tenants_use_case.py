"""
Use Case: Validate Multiple Tenants

Validates access to many tenants at once. Each tenant is checked in its own
unit of work under its own timeout; one failing or slow lookup yields an
invalid entry for that tenant and never fails the batch.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.access.dtos import (
    MultipleTenantAccessResponse,
    TenantAccessStatus,
)
from tenancy.app.use_cases.access.validate_tenant_access_use_case import (
    ValidateTenantAccessUseCase,
)
from tenancy.libs.result import Result, Return

logger = logging.getLogger(__name__)


class ValidateMultipleTenantsUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        item_timeout_seconds: float = 5.0,
    ):
        self.uow_factory = uow_factory
        self.item_timeout_seconds = item_timeout_seconds

    async def execute(
        self, user_id: Optional[UUID], tenant_ids: List[UUID]
    ) -> Result[MultipleTenantAccessResponse]:
        unique_ids = list(dict.fromkeys(tenant_ids))
        statuses = await asyncio.gather(
            *(self._validate_one(user_id, tenant_id) for tenant_id in unique_ids)
        )

        results: Dict[str, TenantAccessStatus] = {
            str(tenant_id): status for tenant_id, status in zip(unique_ids, statuses)
        }
        valid_count = sum(1 for s in results.values() if s.is_valid)
        return Return.ok(
            MultipleTenantAccessResponse(
                results=results,
                valid_count=valid_count,
                invalid_count=len(results) - valid_count,
            )
        )

    async def _validate_one(self, user_id: Optional[UUID], tenant_id: UUID) -> TenantAccessStatus:
        try:
            result = await asyncio.wait_for(
                ValidateTenantAccessUseCase(self.uow_factory()).execute(user_id, tenant_id),
                timeout=self.item_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Access validation for tenant {tenant_id} timed out")
            return TenantAccessStatus.unvalidatable(tenant_id, "validation timed out")
        except Exception as e:
            logger.warning(f"Access validation for tenant {tenant_id} failed: {e}")
            return TenantAccessStatus.unvalidatable(tenant_id, f"validation failed: {e}")

        if result.is_err():
            return TenantAccessStatus.unvalidatable(tenant_id, result.error.message)
        return result.value
