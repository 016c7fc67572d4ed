"""
ArchiveJob Entity

Record of the asynchronous archival of a tenant's data.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from tenancy.domain.base import utcnow

from .enums import ArchiveJobStatus


class ArchiveJob(SQLModel, table=True):
    """
    ArchiveJob entity - created in the same transaction as the archive
    transition; processed afterwards.
    """

    __tablename__ = "archive_jobs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    archive_location: str = Field(max_length=500)
    encryption_key_id: str = Field(max_length=255)

    status: ArchiveJobStatus = Field(default=ArchiveJobStatus.queued)
    error_message: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    started_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
