"""
Use Cases: Archive jobs

ProcessArchiveJobUseCase drives a queued job to completion after the archive
transition committed. GetArchiveJobUseCase reads a job's progress.
"""

import logging
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import ArchiveJobResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import ArchiveJobStatus, AuditEvent, TenantStatus
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ProcessArchiveJobUseCase:
    """
    Business Logic:
    1. Load job; anything but queued is returned unchanged (idempotent)
    2. Mark running and commit
    3. Verify the tenant is archived with matching location and key
    4. Mark completed (or failed with the reason), audit, commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, job_id: UUID) -> Result[ArchiveJobResponse]:
        async with self.uow:
            # 1. Load job
            job = await self.uow.archive_jobs.get_by_id(job_id)
            if not job:
                return Return.err(Error("ARCHIVE_JOB_NOT_FOUND", "Archive job not found"))

            if job.status != ArchiveJobStatus.queued:
                return Return.ok(ArchiveJobResponse.from_entity(job))

            # 2. Mark running
            job.status = ArchiveJobStatus.running
            job.started_at = utcnow()
            job = await self.uow.archive_jobs.update(job)
            await self.uow.commit()

        async with self.uow:
            # 3. Verify tenant state
            tenant = await self.uow.tenants.get_by_id(job.tenant_id)
            if tenant is None:
                failure = "Tenant no longer exists"
            elif tenant.status != TenantStatus.archived:
                failure = f"Tenant is {getattr(tenant.status, 'value', tenant.status)}, not archived"
            elif (
                tenant.archive_location != job.archive_location
                or tenant.encryption_key_id != job.encryption_key_id
            ):
                failure = "Archive parameters do not match the tenant record"
            else:
                failure = None

            # 4. Finish
            job = await self.uow.archive_jobs.get_by_id(job_id)
            job.completed_at = utcnow()
            if failure:
                job.status = ArchiveJobStatus.failed
                job.error_message = failure
                logger.error(f"Archive job {job.id} for tenant {job.tenant_id} failed: {failure}")
            else:
                job.status = ArchiveJobStatus.completed
            job = await self.uow.archive_jobs.update(job)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=job.tenant_id,
                    user_id=None,
                    action=f"archive_job_{job.status.value}",
                    event_metadata={"job_id": str(job.id), "error": failure},
                )
            )
            await self.uow.commit()

            return Return.ok(ArchiveJobResponse.from_entity(job))


class GetArchiveJobUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, job_id: UUID) -> Result[ArchiveJobResponse]:
        async with self.uow:
            job = await self.uow.archive_jobs.get_by_id(job_id)
            if not job:
                return Return.err(Error("ARCHIVE_JOB_NOT_FOUND", "Archive job not found"))
            return Return.ok(ArchiveJobResponse.from_entity(job))
