"""
Tenancy Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ArchiveJobStatus,
    LeadStatus,
    ProvisioningStatus,
    StepOrderingPolicy,
    StepStatus,
    SubscriptionPlan,
    TenantStatus,
    UserRole,
    UserStatus,
    WorkflowStatus,
)

# Export all entities
from .tenant import Tenant
from .onboarding import OnboardingStep, OnboardingWorkflow
from .user import AdminUser, User
from .user_tenant import UserTenant
from .lead import Lead
from .archive_job import ArchiveJob
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "ArchiveJobStatus",
    "LeadStatus",
    "ProvisioningStatus",
    "StepOrderingPolicy",
    "StepStatus",
    "SubscriptionPlan",
    "TenantStatus",
    "UserRole",
    "UserStatus",
    "WorkflowStatus",
    # Entities
    "Tenant",
    "OnboardingWorkflow",
    "OnboardingStep",
    "User",
    "AdminUser",
    "UserTenant",
    "Lead",
    "ArchiveJob",
    "AuditEvent",
]
