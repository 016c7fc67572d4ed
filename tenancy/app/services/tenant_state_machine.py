"""
Tenant State Machine.

The only writer of Tenant.status. Every transition is checked against the
transition table and then applied with a compare-and-swap on the status that
was read, so two concurrent transitions on one tenant yield one winner and
one CONCURRENT_MODIFICATION conflict.
"""

import logging
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, Tenant, TenantStatus
from tenancy.domain.errors import ConflictError, InvalidTransition
from tenancy.domain.services.tenant_lifecycle import validate_transition

logger = logging.getLogger(__name__)


class TenantStateMachine:
    """Validates and applies tenant status transitions inside an open unit of work"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def transition(
        self,
        tenant: Tenant,
        requested: TenantStatus,
        changes: Optional[Dict[str, Any]] = None,
        action: Optional[str] = None,
        user_id: Optional[UUID] = None,
        metadata: Optional[Dict[str, Any]] = None,
        expected_from: Optional[Iterable[TenantStatus]] = None,
    ) -> Tenant:
        """
        Move tenant from its current (as read) status to requested.

        expected_from narrows the legal source states to those the calling
        operation accepts.

        Raises:
            InvalidTransition: requested is not reachable from the current status, or the
                current status is outside expected_from
            ConflictError: status changed since it was read (CONCURRENT_MODIFICATION)
        """
        current = TenantStatus(tenant.status)
        if expected_from is not None and current not in set(expected_from):
            raise InvalidTransition(current, requested)
        validate_transition(current, requested)

        now = utcnow()
        values = dict(changes or {})
        values["status"] = requested
        values["updated_at"] = now

        updated = await self.uow.tenants.compare_and_set_status(tenant.id, current, values)
        if updated is None:
            logger.warning(
                f"Lost transition race on tenant {tenant.id}: {current.value} -> {requested.value}"
            )
            raise ConflictError(
                "Tenant status changed concurrently, reload and retry",
                code="CONCURRENT_MODIFICATION",
                reason=f"expected status {current.value}",
            )

        event_metadata = {"from": current.value, "to": requested.value}
        event_metadata.update(metadata or {})
        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant.id,
                user_id=user_id,
                action=action or f"tenant_{requested.value}",
                event_metadata=event_metadata,
            )
        )

        logger.info(f"Tenant {tenant.id} transitioned {current.value} -> {requested.value}")
        return updated
