from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.app.repositories.archive_job_repository import IArchiveJobRepository
from tenancy.domain.entities import ArchiveJob


class ArchiveJobRepository(IArchiveJobRepository):
    """ArchiveJob repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, job_id: UUID) -> Optional[ArchiveJob]:
        """Get archive job by ID"""
        stmt = select(ArchiveJob).where(ArchiveJob.id == job_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, job: ArchiveJob) -> ArchiveJob:
        """Create a new archive job"""
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job

    async def update(self, job: ArchiveJob) -> ArchiveJob:
        """Update existing archive job"""
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job
