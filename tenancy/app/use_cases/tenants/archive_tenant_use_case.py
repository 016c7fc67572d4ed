"""
Use Case: Archive Tenant

suspended -> archived. Irreversible. The transition records where the data
goes and which key encrypts it, then queues an archive job; the actual
archival runs asynchronously (see ProcessArchiveJobUseCase).
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.email_sender import EmailType
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.tenant_state_machine import TenantStateMachine
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import (
    ArchiveJobResponse,
    ArchiveTenantResponse,
    TenantResponse,
)
from tenancy.domain.base import utcnow
from tenancy.domain.entities import ArchiveJob, ArchiveJobStatus, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import all_features_disabled
from tenancy.libs.result import Error, Result, Return


class ArchiveTenantUseCase:
    """
    Archive a suspended tenant.

    Business Logic:
    1. Require non-empty archive_location and encryption_key_id
    2. Validate tenant exists
    3. Transition suspended -> archived (compare-and-swap on status), stamp
       archived_at / archive_location / encryption_key_id, disable all features
    4. Queue an ArchiveJob in the same transaction
    5. Commit and return the job reference

    A second call fails with INVALID_TRANSITION (archived is terminal), so
    the job is never queued twice.
    """

    def __init__(self, uow: UnitOfWork, dispatcher: Optional[NotificationDispatcher] = None):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(
        self,
        tenant_id: UUID,
        archive_location: Optional[str],
        encryption_key_id: Optional[str],
        user_id: Optional[UUID] = None,
    ) -> Result[ArchiveTenantResponse]:
        # 1. Validate parameters
        location = (archive_location or "").strip()
        key_id = (encryption_key_id or "").strip()
        missing = {}
        if not location:
            missing["archive_location"] = ["Archive location is required"]
        if not key_id:
            missing["encryption_key_id"] = ["Encryption key id is required"]
        if missing:
            return Return.err(
                Error(
                    "ARCHIVE_PARAMETERS_REQUIRED",
                    "Archive location and encryption key id are required",
                    details={"fields": missing},
                )
            )

        async with self.uow:
            # 2. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            # 3. Transition
            try:
                tenant = await TenantStateMachine(self.uow).transition(
                    tenant,
                    TenantStatus.archived,
                    changes={
                        "archived_at": utcnow(),
                        "archive_location": location,
                        "encryption_key_id": key_id,
                        "feature_flags": all_features_disabled(),
                    },
                    action="tenant_archived",
                    user_id=user_id,
                    metadata={"archive_location": location},
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            # 4. Queue archive job
            job = await self.uow.archive_jobs.create(
                ArchiveJob(
                    tenant_id=tenant.id,
                    archive_location=location,
                    encryption_key_id=key_id,
                    status=ArchiveJobStatus.queued,
                )
            )

            # 5. Commit
            await self.uow.commit()

        if self.dispatcher:
            self.dispatcher.dispatch(
                EmailType.TENANT_ARCHIVED,
                tenant.id,
                tenant.owner_email,
                {"tenant_name": tenant.name},
            )

        return Return.ok(
            ArchiveTenantResponse(
                tenant=TenantResponse.from_entity(tenant),
                job=ArchiveJobResponse.from_entity(job),
            )
        )
