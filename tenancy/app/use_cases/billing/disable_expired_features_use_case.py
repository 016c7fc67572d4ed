"""
Use Case: Disable Expired Features

Sweep invoked by the billing collaborator (or a scheduler): expires every
non-terminal tenant whose trial ended or whose subscription lapsed.
"""

import logging
from datetime import datetime
from typing import Optional

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.billing.dtos import DisableExpiredFeaturesResponse
from tenancy.app.use_cases.tenants.expire_tenant_use_case import expire_tenant
from tenancy.domain.base import utcnow
from tenancy.domain.errors import ConflictError
from tenancy.libs.result import Result, Return

logger = logging.getLogger(__name__)


class DisableExpiredFeaturesUseCase:
    """
    A tenant that changed status since the sweep read it is skipped, not
    fatal; the next sweep picks it up if it is still lapsed.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[DisableExpiredFeaturesResponse]:
        now = now or utcnow()
        expired, skipped = [], []

        async with self.uow:
            for tenant in await self.uow.tenants.list_lapsed(now):
                try:
                    await expire_tenant(self.uow, tenant, source="expiry_sweep")
                    expired.append(str(tenant.id))
                except ConflictError as e:
                    logger.warning(f"Skipping expiry of tenant {tenant.id}: {e.message}")
                    skipped.append(str(tenant.id))

            await self.uow.commit()

        if expired:
            logger.info(f"Expired {len(expired)} lapsed tenants")
        return Return.ok(
            DisableExpiredFeaturesResponse(
                expired_count=len(expired),
                expired_tenant_ids=expired,
                skipped_tenant_ids=skipped,
            )
        )
