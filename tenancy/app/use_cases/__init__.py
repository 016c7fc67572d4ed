"""
Use Cases

Organized by area:
- tenants/: Tenant creation, updates and lifecycle transitions
- onboarding/: Onboarding workflow engine
- access/: Access validation and RBAC context
- leads/: Lead conversion pipeline
- billing/: Subscription webhook hooks and expiry sweep
"""

from .access import (
    CreateUserTenantRelationshipUseCase,
    LoadRBACContextUseCase,
    ValidateMultipleTenantsUseCase,
    ValidateTenantAccessUseCase,
)
from .billing import DisableExpiredFeaturesUseCase, HandleBillingEventUseCase
from .leads import ConvertLeadToTenantUseCase
from .onboarding import (
    AdvanceStepUseCase,
    CreateWorkflowUseCase,
    GetTenantWorkflowUseCase,
    GetWorkflowUseCase,
    PauseWorkflowUseCase,
    ResumeWorkflowUseCase,
)
from .tenants import (
    ActivateTenantUseCase,
    ApproveTenantUseCase,
    ArchiveTenantUseCase,
    CreateTenantUseCase,
    ExpireTenantUseCase,
    GetArchiveJobUseCase,
    GetTenantUseCase,
    ListTenantAuditEventsUseCase,
    ProcessArchiveJobUseCase,
    ProvisionTenantAdminUseCase,
    ReactivateTenantUseCase,
    SuspendTenantUseCase,
    UpdateTenantUseCase,
)

__all__ = [
    # Tenants
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "GetTenantUseCase",
    "SuspendTenantUseCase",
    "ReactivateTenantUseCase",
    "ArchiveTenantUseCase",
    "ApproveTenantUseCase",
    "ActivateTenantUseCase",
    "ExpireTenantUseCase",
    "ListTenantAuditEventsUseCase",
    "ProcessArchiveJobUseCase",
    "GetArchiveJobUseCase",
    "ProvisionTenantAdminUseCase",
    # Onboarding
    "CreateWorkflowUseCase",
    "GetWorkflowUseCase",
    "GetTenantWorkflowUseCase",
    "AdvanceStepUseCase",
    "PauseWorkflowUseCase",
    "ResumeWorkflowUseCase",
    # Access
    "ValidateTenantAccessUseCase",
    "ValidateMultipleTenantsUseCase",
    "CreateUserTenantRelationshipUseCase",
    "LoadRBACContextUseCase",
    # Leads
    "ConvertLeadToTenantUseCase",
    # Billing
    "HandleBillingEventUseCase",
    "DisableExpiredFeaturesUseCase",
]
