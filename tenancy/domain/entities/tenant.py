"""
Tenant Entity

An isolated customer organization on the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenancy.domain.base import utcnow

from .enums import ProvisioningStatus, SubscriptionPlan, TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated organization with its own limits and features.

    Business Rules:
    - slug is globally unique and immutable once assigned
    - status only changes through the tenant state machine
    - suspended_at/suspension_reason are set only while suspended
    - archived_at/archive_location/encryption_key_id are set only once archived
    - never hard-deleted; archived is terminal
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    slug: str = Field(unique=True, index=True, max_length=50)

    status: TenantStatus = Field(default=TenantStatus.trial)
    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.Kisan_Basic)

    # Owner contact
    owner_name: str = Field(max_length=255)
    owner_email: str = Field(max_length=255)
    owner_phone: Optional[str] = Field(default=None, max_length=32)

    # Resource limits
    max_farmers: int = Field(default=0, ge=0)
    max_dealers: int = Field(default=0, ge=0)
    max_products: int = Field(default=0, ge=0)
    max_storage_gb: int = Field(default=0, ge=0)
    max_api_calls_per_day: int = Field(default=0, ge=0)

    feature_flags: dict = Field(default_factory=dict, sa_column=Column(JSON))

    # Subscription window
    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    subscription_end_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Suspension
    suspended_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    suspension_reason: Optional[str] = Field(default=None, max_length=500)

    # Archival
    archived_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    archive_location: Optional[str] = Field(default=None, max_length=500)
    encryption_key_id: Optional[str] = Field(default=None, max_length=255)

    admin_provisioning_status: ProvisioningStatus = Field(
        default=ProvisioningStatus.pending
    )

    tenant_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_tenant_status", "status"),)
