"""
Use Case: Suspend Tenant

active -> suspended. The tenant stays readable; write-capable features are
switched off and nothing is deleted.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.email_sender import EmailType
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import without_write_features
from tenancy.libs.result import Error, Result, Return


class SuspendTenantUseCase:
    """
    Suspend an active tenant.

    Business Logic:
    1. Validate tenant exists
    2. Transition active -> suspended (compare-and-swap on status)
    3. Stamp suspended_at / suspension_reason, disable write features
    4. Audit event (inside the transition), commit
    5. Notify the owner after commit
    """

    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self, tenant_id: UUID, reason: Optional[str] = None, user_id: Optional[UUID] = None
    ) -> Result[TenantResponse]:
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            # 2-4. Transition with side effects
            reason = reason.strip() if reason and reason.strip() else None
            try:
                tenant = await TenantStateMachine(self.uow).transition(
                    tenant,
                    TenantStatus.suspended,
                    changes={
                        "suspended_at": utcnow(),
                        "suspension_reason": reason,
                        "feature_flags": without_write_features(tenant.feature_flags or {}),
                    },
                    action="tenant_suspended",
                    user_id=user_id,
                    metadata={"reason": reason},
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            await self.uow.commit()

        # 5. Best-effort notification
        if self.dispatcher:
            self.dispatcher.dispatch(
                EmailType.TENANT_SUSPENDED,
                tenant.id,
                tenant.owner_email,
                {"tenant_name": tenant.name, "reason": reason},
            )

        return Return.ok(TenantResponse.from_entity(tenant))
