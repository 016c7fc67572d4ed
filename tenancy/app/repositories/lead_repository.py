from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from tenancy.domain.entities import Lead


class ILeadRepository(ABC):
    """Lead repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, lead_id: UUID) -> Optional[Lead]:
        """Get lead by ID"""
        pass

    @abstractmethod
    async def mark_converted(
        self, lead_id: UUID, tenant_id: UUID, converted_at: datetime
    ) -> bool:
        """
        Flip a qualified lead to converted.

        Returns False if the lead was no longer qualified (lost race).
        """
        pass
