"""
Use Case: Approve Tenant

pending_approval -> trial | active.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.libs.result import Error, Result, Return

APPROVAL_TARGETS = (TenantStatus.trial, TenantStatus.active)


class ApproveTenantUseCase:
    """
    Approve a pending tenant into trial (default) or straight into active.

    Entering trial starts the trial window.
    """

    def __init__(self, uow: UnitOfWork, trial_period_days: int = 14):
        self.uow = uow
        self.trial_period_days = trial_period_days

    async def execute(
        self,
        tenant_id: UUID,
        target: TenantStatus = TenantStatus.trial,
        user_id: Optional[UUID] = None,
    ) -> Result[TenantResponse]:
        if target not in APPROVAL_TARGETS:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Approval target must be trial or active",
                    details={"fields": {"target": ["Must be trial or active"]}},
                )
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            changes = {}
            if target == TenantStatus.trial:
                changes["trial_ends_at"] = utcnow() + timedelta(days=self.trial_period_days)

            try:
                tenant = await TenantStateMachine(self.uow).transition(
                    tenant,
                    target,
                    changes=changes,
                    action="tenant_approved",
                    user_id=user_id,
                    expected_from=(TenantStatus.pending_approval,),
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            await self.uow.commit()
            return Return.ok(TenantResponse.from_entity(tenant))
