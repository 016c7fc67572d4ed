from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from tenancy.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_tenant_paginated(
        self,
        tenant_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a tenant, newest first, optionally filtered by action.

        Returns:
            Tuple of (events, next_cursor); next_cursor is None on the last page
        """
        pass
