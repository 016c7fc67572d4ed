"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for tenant domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from tenancy.domain.entities import ArchiveJob, AuditEvent, Tenant

ARCHIVE_WARNING = (
    "Archiving is irreversible. The tenant cannot be reactivated and all "
    "operational features are disabled."
)


# ============================================================================
# Command DTOs
# ============================================================================


class TenantLimits(BaseModel):
    """Optional resource limit overrides; None keeps the plan default"""

    max_farmers: Optional[int] = None
    max_dealers: Optional[int] = None
    max_products: Optional[int] = None
    max_storage_gb: Optional[int] = None
    max_api_calls_per_day: Optional[int] = None

    def provided(self) -> Dict[str, int]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class CreateTenantCommand(BaseModel):
    """Command for direct tenant creation"""

    name: str
    slug: str
    subscription_plan: str = "Kisan_Basic"
    owner_name: str
    owner_email: str
    owner_phone: Optional[str] = None
    requires_approval: bool = False
    limits: TenantLimits = TenantLimits()
    feature_flags: Optional[Dict[str, bool]] = None
    metadata: Optional[Dict] = None


class UpdateTenantCommand(BaseModel):
    """Partial tenant update; None means unchanged"""

    name: Optional[str] = None
    slug: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_phone: Optional[str] = None
    subscription_plan: Optional[str] = None
    limits: TenantLimits = TenantLimits()
    feature_flags: Optional[Dict[str, bool]] = None
    subscription_end_date: Optional[datetime] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TenantResponse(BaseModel):
    """Tenant representation returned by every tenant operation"""

    id: str
    name: str
    slug: str
    status: str
    subscription_plan: str
    owner_name: str
    owner_email: str
    owner_phone: Optional[str] = None
    max_farmers: int
    max_dealers: int
    max_products: int
    max_storage_gb: int
    max_api_calls_per_day: int
    feature_flags: Dict[str, bool]
    trial_ends_at: Optional[datetime] = None
    subscription_end_date: Optional[datetime] = None
    suspended_at: Optional[datetime] = None
    suspension_reason: Optional[str] = None
    archived_at: Optional[datetime] = None
    archive_location: Optional[str] = None
    admin_provisioning_status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=str(tenant.id),
            name=tenant.name,
            slug=tenant.slug,
            status=_value(tenant.status),
            subscription_plan=_value(tenant.subscription_plan),
            owner_name=tenant.owner_name,
            owner_email=tenant.owner_email,
            owner_phone=tenant.owner_phone,
            max_farmers=tenant.max_farmers,
            max_dealers=tenant.max_dealers,
            max_products=tenant.max_products,
            max_storage_gb=tenant.max_storage_gb,
            max_api_calls_per_day=tenant.max_api_calls_per_day,
            feature_flags=dict(tenant.feature_flags or {}),
            trial_ends_at=tenant.trial_ends_at,
            subscription_end_date=tenant.subscription_end_date,
            suspended_at=tenant.suspended_at,
            suspension_reason=tenant.suspension_reason,
            archived_at=tenant.archived_at,
            archive_location=tenant.archive_location,
            admin_provisioning_status=_value(tenant.admin_provisioning_status),
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )


class CreateTenantResponse(BaseModel):
    """Response for create tenant use case"""

    tenant: TenantResponse
    workflow_id: str


class ArchiveJobResponse(BaseModel):
    """Archive job reference"""

    job_id: str
    tenant_id: str
    status: str
    archive_location: str
    error_message: Optional[str] = None
    created_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: ArchiveJob) -> "ArchiveJobResponse":
        return cls(
            job_id=str(job.id),
            tenant_id=str(job.tenant_id),
            status=_value(job.status),
            archive_location=job.archive_location,
            error_message=job.error_message,
            created_at=job.created_at,
            started_at=job.started_at,
            completed_at=job.completed_at,
        )


class ArchiveTenantResponse(BaseModel):
    """Response for archive tenant use case; archival itself runs asynchronously"""

    tenant: TenantResponse
    job: ArchiveJobResponse
    warning: str = ARCHIVE_WARNING


class AuditEventItem(BaseModel):
    id: str
    action: str
    user_id: Optional[str] = None
    event_metadata: Optional[Dict] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventItem":
        return cls(
            id=str(event.id),
            action=event.action,
            user_id=str(event.user_id) if event.user_id else None,
            event_metadata=event.event_metadata,
            created_at=event.created_at,
        )


class AuditEventsResponse(BaseModel):
    """Response for list tenant audit events use case"""

    events: List[AuditEventItem]
    next_cursor: Optional[str] = None


class ProvisionTenantAdminResponse(BaseModel):
    """Response for provision tenant admin use case"""

    tenant_id: str
    user_id: str
    user_created: bool
    admin_provisioning_status: str
    temp_password: Optional[str] = None


def _value(value) -> str:
    return getattr(value, "value", value)
