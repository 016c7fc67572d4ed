"""
Unit tests for archive job processing and audit event listing.
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from tenancy.app.use_cases.tenants import (
    GetArchiveJobUseCase,
    ListTenantAuditEventsUseCase,
    ProcessArchiveJobUseCase,
)
from tenancy.domain.entities import ArchiveJob, ArchiveJobStatus, AuditEvent, TenantStatus


def _job(tenant, status=ArchiveJobStatus.queued, **overrides):
    fields = dict(
        tenant_id=tenant.id,
        archive_location="s3://archives/green-farms",
        encryption_key_id="kms-key-1",
        status=status,
    )
    fields.update(overrides)
    return ArchiveJob(**fields)


@pytest.mark.asyncio
async def test_process_archive_job_completes(mock_uow, make_tenant):
    tenant = make_tenant(
        TenantStatus.archived,
        archive_location="s3://archives/green-farms",
        encryption_key_id="kms-key-1",
    )
    job = _job(tenant)
    mock_uow.archive_jobs.get_by_id = AsyncMock(return_value=job)
    mock_uow.archive_jobs.update = AsyncMock(side_effect=lambda j: j)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    result = await ProcessArchiveJobUseCase(mock_uow).execute(job.id)

    assert result.is_ok()
    assert result.value.status == "completed"
    assert result.value.started_at is not None
    assert result.value.completed_at is not None
    assert mock_uow.commit.call_count == 2
    assert mock_uow.audit_events.create.call_args[0][0].action == "archive_job_completed"


@pytest.mark.asyncio
async def test_process_archive_job_fails_on_mismatch(mock_uow, make_tenant):
    tenant = make_tenant(
        TenantStatus.archived, archive_location="s3://elsewhere", encryption_key_id="kms-key-1"
    )
    job = _job(tenant)
    mock_uow.archive_jobs.get_by_id = AsyncMock(return_value=job)
    mock_uow.archive_jobs.update = AsyncMock(side_effect=lambda j: j)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)

    result = await ProcessArchiveJobUseCase(mock_uow).execute(job.id)

    assert result.is_ok()
    assert result.value.status == "failed"
    assert result.value.error_message == "Archive parameters do not match the tenant record"


@pytest.mark.asyncio
async def test_process_archive_job_is_idempotent(mock_uow, make_tenant):
    job = _job(make_tenant(TenantStatus.archived), status=ArchiveJobStatus.completed)
    mock_uow.archive_jobs.get_by_id = AsyncMock(return_value=job)
    mock_uow.archive_jobs.update = AsyncMock()

    result = await ProcessArchiveJobUseCase(mock_uow).execute(job.id)

    assert result.value.status == "completed"
    mock_uow.archive_jobs.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_get_missing_archive_job(mock_uow):
    mock_uow.archive_jobs.get_by_id = AsyncMock(return_value=None)

    result = await GetArchiveJobUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "ARCHIVE_JOB_NOT_FOUND"


@pytest.mark.asyncio
async def test_list_audit_events_clamps_limit(mock_uow, make_tenant):
    tenant = make_tenant()
    events = [AuditEvent(tenant_id=tenant.id, action="tenant_created")]
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.audit_events.get_by_tenant_paginated = AsyncMock(return_value=(events, "next"))

    result = await ListTenantAuditEventsUseCase(mock_uow).execute(tenant.id, limit=500)

    assert result.is_ok()
    assert result.value.next_cursor == "next"
    assert result.value.events[0].action == "tenant_created"
    assert mock_uow.audit_events.get_by_tenant_paginated.call_args.kwargs["limit"] == 100
