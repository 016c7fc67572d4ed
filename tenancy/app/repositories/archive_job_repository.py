from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenancy.domain.entities import ArchiveJob


class IArchiveJobRepository(ABC):
    """ArchiveJob repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[ArchiveJob]:
        """Get archive job by ID"""
        pass

    @abstractmethod
    async def create(self, job: ArchiveJob) -> ArchiveJob:
        """Create a new archive job"""
        pass

    @abstractmethod
    async def update(self, job: ArchiveJob) -> ArchiveJob:
        """Update existing archive job"""
        pass
