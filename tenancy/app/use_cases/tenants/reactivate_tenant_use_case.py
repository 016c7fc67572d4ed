"""
Use Case: Reactivate Tenant

suspended -> active. Clears the suspension fields and restores the plan's
default feature flags. Archived tenants can never be reactivated.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.email_sender import EmailType
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse
from tenancy.domain.entities import SubscriptionPlan, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import default_features
from tenancy.libs.result import Error, Result, Return


class ReactivateTenantUseCase:
    """
    Reactivate a suspended tenant.

    Business Logic:
    1. Validate tenant exists
    2. Transition suspended -> active (compare-and-swap on status)
    3. Clear suspended_at / suspension_reason, restore plan-default features
    4. Commit, then notify the owner
    """

    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self, tenant_id: UUID, user_id: Optional[UUID] = None
    ) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            try:
                tenant = await TenantStateMachine(self.uow).transition(
                    tenant,
                    TenantStatus.active,
                    changes={
                        "suspended_at": None,
                        "suspension_reason": None,
                        "feature_flags": default_features(
                            SubscriptionPlan(tenant.subscription_plan)
                        ),
                    },
                    action="tenant_reactivated",
                    user_id=user_id,
                    expected_from=(TenantStatus.suspended,),
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            await self.uow.commit()

        if self.dispatcher:
            self.dispatcher.dispatch(
                EmailType.TENANT_REACTIVATED,
                tenant.id,
                tenant.owner_email,
                {"tenant_name": tenant.name},
            )

        return Return.ok(TenantResponse.from_entity(tenant))
