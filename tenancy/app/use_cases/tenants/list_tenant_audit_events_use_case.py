"""
Use Case: List Tenant Audit Events

Returns audit events for a tenant with cursor-based pagination.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import AuditEventItem, AuditEventsResponse
from tenancy.libs.result import Error, Result, Return

MAX_PAGE_SIZE = 100


class ListTenantAuditEventsUseCase:
    """
    Business Logic:
    1. Clamp limit to 1..100
    2. Validate tenant exists
    3. Fetch one page of events (newest first)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Result[AuditEventsResponse]:
        limit = max(1, min(limit, MAX_PAGE_SIZE))

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            events, next_cursor = await self.uow.audit_events.get_by_tenant_paginated(
                tenant_id, limit=limit, cursor=cursor, action=action
            )

            return Return.ok(
                AuditEventsResponse(
                    events=[AuditEventItem.from_entity(e) for e in events],
                    next_cursor=next_cursor,
                )
            )
