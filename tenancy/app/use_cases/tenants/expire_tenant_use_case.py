"""
Use Case: Expire Tenant

Any non-terminal status -> expired when the subscription lapses. Externally
driven (billing events, expiry sweep, operator).
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse
from tenancy.domain.entities import Tenant, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import all_features_disabled
from tenancy.libs.result import Error, Result, Return


async def expire_tenant(
    uow: UnitOfWork,
    tenant: Tenant,
    source: str,
    user_id: Optional[UUID] = None,
) -> Tenant:
    """Transition to expired and disable all features; raises TenancyError"""
    return await TenantStateMachine(uow).transition(
        tenant,
        TenantStatus.expired,
        changes={"feature_flags": all_features_disabled()},
        action="tenant_expired",
        user_id=user_id,
        metadata={"source": source},
    )


class ExpireTenantUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, user_id: Optional[UUID] = None, source: str = "admin"
    ) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            try:
                tenant = await expire_tenant(self.uow, tenant, source, user_id)
            except TenancyError as e:
                return Return.err(e.to_error())

            await self.uow.commit()
            return Return.ok(TenantResponse.from_entity(tenant))
