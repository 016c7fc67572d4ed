"""
Use Case: Activate Tenant

trial -> active, on plan upgrade or first payment.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse
from tenancy.domain.entities import SubscriptionPlan, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import default_features, default_limits, parse_plan
from tenancy.libs.result import Error, Result, Return


class ActivateTenantUseCase:
    """
    Activate a trial tenant.

    Business Logic:
    1. Validate plan (if given) and tenant existence
    2. Transition trial -> active; a plan change resets limits and features
       to the new plan's defaults
    3. Record subscription_end_date when known
    4. Commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        plan: Optional[str] = None,
        subscription_end_date: Optional[datetime] = None,
        user_id: Optional[UUID] = None,
        source: str = "admin",
    ) -> Result[TenantResponse]:
        try:
            new_plan = parse_plan(plan) if plan is not None else None
        except TenancyError as e:
            return Return.err(e.to_error())

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            changes = {"trial_ends_at": None}
            effective_plan = SubscriptionPlan(tenant.subscription_plan)
            if new_plan is not None and new_plan != effective_plan:
                effective_plan = new_plan
                changes["subscription_plan"] = new_plan
                changes.update(default_limits(new_plan))
                changes["feature_flags"] = default_features(new_plan)
            if subscription_end_date is not None:
                changes["subscription_end_date"] = subscription_end_date

            try:
                tenant = await TenantStateMachine(self.uow).transition(
                    tenant,
                    TenantStatus.active,
                    changes=changes,
                    action="tenant_activated",
                    user_id=user_id,
                    metadata={"subscription_plan": effective_plan.value, "source": source},
                    expected_from=(TenantStatus.trial,),
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            await self.uow.commit()
            return Return.ok(TenantResponse.from_entity(tenant))
