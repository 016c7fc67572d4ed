from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from tenancy.domain.entities import UserRole, UserTenant


class IUserTenantRepository(ABC):
    """UserTenant repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[UserTenant]:
        """Get relationship by user and tenant"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[UserTenant]:
        """Get all relationships for a user"""
        pass

    @abstractmethod
    async def upsert(
        self,
        user_id: UUID,
        tenant_id: UUID,
        role: UserRole,
        is_active: bool = True,
        metadata: Optional[dict] = None,
    ) -> UserTenant:
        """
        Insert or update the (user, tenant) relationship atomically.

        Concurrent calls for the same pair are last-writer-wins on role and
        is_active.
        """
        pass
