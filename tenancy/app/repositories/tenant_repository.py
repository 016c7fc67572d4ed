from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from tenancy.domain.entities import Tenant, TenantStatus


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update non-status fields of an existing tenant"""
        pass

    @abstractmethod
    async def compare_and_set_status(
        self, tenant_id: UUID, expected: TenantStatus, values: Dict[str, Any]
    ) -> Optional[Tenant]:
        """
        Apply values only if the persisted status still equals expected.

        Returns the refreshed tenant, or None when another writer got there
        first.
        """
        pass

    @abstractmethod
    async def list_lapsed(self, now: datetime) -> List[Tenant]:
        """Non-terminal tenants past trial_ends_at or subscription_end_date"""
        pass
