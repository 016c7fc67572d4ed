"""Tenant use cases: creation, updates and lifecycle transitions."""

from .activate_tenant_use_case import ActivateTenantUseCase
from .approve_tenant_use_case import ApproveTenantUseCase
from .archive_job_use_cases import GetArchiveJobUseCase, ProcessArchiveJobUseCase
from .archive_tenant_use_case import ArchiveTenantUseCase
from .create_tenant_use_case import CreateTenantUseCase
from .expire_tenant_use_case import ExpireTenantUseCase, expire_tenant
from .get_tenant_use_case import GetTenantUseCase
from .list_tenant_audit_events_use_case import ListTenantAuditEventsUseCase
from .provision_tenant_admin_use_case import ProvisionTenantAdminUseCase
from .reactivate_tenant_use_case import ReactivateTenantUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "GetTenantUseCase",
    "SuspendTenantUseCase",
    "ReactivateTenantUseCase",
    "ArchiveTenantUseCase",
    "ApproveTenantUseCase",
    "ActivateTenantUseCase",
    "ExpireTenantUseCase",
    "expire_tenant",
    "ListTenantAuditEventsUseCase",
    "ProcessArchiveJobUseCase",
    "GetArchiveJobUseCase",
    "ProvisionTenantAdminUseCase",
]
