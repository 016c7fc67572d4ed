"""
Use Case: Handle Billing Event

Maps subscription webhook events onto tenant lifecycle hooks.
"""

import logging
from uuid import UUID

from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.billing.dtos import BillingEventCommand, BillingEventResponse
from tenancy.app.use_cases.tenants.expire_tenant_use_case import expire_tenant
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.services.tenant_lifecycle import can_transition
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

INVOICE_PAID = "invoice.paid"
INVOICE_PAYMENT_FAILED = "invoice.payment_failed"
SUBSCRIPTION_DELETED = ("subscription.deleted", "customer.subscription.deleted")


class HandleBillingEventUseCase:
    """
    Business Logic:
    - invoice.paid: trial -> active; an active tenant gets its
      subscription_end_date extended to period_end
    - subscription.deleted: any non-terminal status -> expired
    - invoice.payment_failed: audit event only
    - anything else: acknowledged and ignored

    Events that do not apply to the tenant's current status are ignored, so
    webhook redelivery is harmless.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: BillingEventCommand) -> Result[BillingEventResponse]:
        try:
            tenant_id = UUID(command.tenant_id)
        except ValueError:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid tenant id",
                    details={"fields": {"tenant_id": ["Must be a UUID"]}},
                )
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            current = TenantStatus(tenant.status)
            outcome = "ignored"
            detail = None

            try:
                if command.type == INVOICE_PAID:
                    if current == TenantStatus.trial:
                        changes = {"trial_ends_at": None}
                        if command.period_end:
                            changes["subscription_end_date"] = command.period_end
                        tenant = await TenantStateMachine(self.uow).transition(
                            tenant,
                            TenantStatus.active,
                            changes=changes,
                            action="tenant_activated",
                            metadata={"source": "billing", "event": command.type},
                        )
                        outcome = "applied"
                    elif current == TenantStatus.active and command.period_end:
                        tenant.subscription_end_date = command.period_end
                        tenant.updated_at = utcnow()
                        tenant = await self.uow.tenants.update(tenant)
                        outcome = "applied"
                        detail = "subscription extended"
                    else:
                        detail = f"no effect on {current.value} tenant"

                elif command.type in SUBSCRIPTION_DELETED:
                    if can_transition(current, TenantStatus.expired):
                        tenant = await expire_tenant(self.uow, tenant, source="billing")
                        outcome = "applied"
                    else:
                        detail = f"tenant already {current.value}"

                elif command.type == INVOICE_PAYMENT_FAILED:
                    outcome = "recorded"

                else:
                    detail = "unhandled event type"
            except TenancyError as e:
                return Return.err(e.to_error())

            if outcome != "ignored":
                await self.uow.audit_events.create(
                    AuditEvent(
                        tenant_id=tenant.id,
                        user_id=None,
                        action=f"billing_{command.type.replace('.', '_')}",
                        event_metadata={"outcome": outcome, "data": command.data},
                    )
                )
                await self.uow.commit()

            logger.info(f"Billing event {command.type} for tenant {tenant_id}: {outcome}")
            return Return.ok(
                BillingEventResponse(
                    event_type=command.type,
                    tenant_id=str(tenant_id),
                    outcome=outcome,
                    tenant_status=getattr(tenant.status, "value", tenant.status),
                    detail=detail,
                )
            )
