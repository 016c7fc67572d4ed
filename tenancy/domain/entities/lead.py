"""
Lead Entity

A prospective customer prior to becoming a tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenancy.domain.base import utcnow

from .enums import LeadStatus


class Lead(SQLModel, table=True):
    """
    Lead entity - sales prospect.

    Business Rules:
    - Conversion is only permitted from qualified
    - Once converted the lead is immutable except for audit annotations
    - converted_tenant_id points at the tenant created by conversion
    """

    __tablename__ = "leads"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_name: str = Field(max_length=255)
    contact_name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    phone: Optional[str] = Field(default=None, max_length=32)

    status: LeadStatus = Field(default=LeadStatus.new)

    converted_tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id")
    converted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    annotations: list = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_lead_status", "status"),)
