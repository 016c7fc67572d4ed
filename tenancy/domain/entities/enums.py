"""
Tenancy Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status"""

    pending_approval = "pending_approval"
    trial = "trial"
    active = "active"
    suspended = "suspended"
    archived = "archived"
    expired = "expired"


class SubscriptionPlan(str, Enum):
    """Subscription tier, drives default limits and feature flags"""

    Kisan_Basic = "Kisan_Basic"
    Shakti_Growth = "Shakti_Growth"
    AI_Enterprise = "AI_Enterprise"
    Custom_Enterprise = "Custom_Enterprise"


class UserRole(str, Enum):
    """System-wide and tenant-scoped roles"""

    super_admin = "super_admin"
    platform_admin = "platform_admin"
    tenant_admin = "tenant_admin"
    tenant_user = "tenant_user"
    farmer = "farmer"
    dealer = "dealer"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class WorkflowStatus(str, Enum):
    """Onboarding workflow status"""

    in_progress = "in_progress"
    completed = "completed"
    paused = "paused"
    failed = "failed"


class StepStatus(str, Enum):
    """Onboarding step status"""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    skipped = "skipped"
    failed = "failed"


class StepOrderingPolicy(str, Enum):
    """How strictly the onboarding engine enforces step order"""

    lenient = "lenient"
    strict = "strict"


class LeadStatus(str, Enum):
    """Sales lead status"""

    new = "new"
    assigned = "assigned"
    contacted = "contacted"
    qualified = "qualified"
    converted = "converted"
    rejected = "rejected"


class ArchiveJobStatus(str, Enum):
    """Archival job status"""

    queued = "queued"
    running = "running"
    completed = "completed"
    failed = "failed"


class ProvisioningStatus(str, Enum):
    """Tenant admin identity provisioning status"""

    pending = "pending"
    completed = "completed"
    failed = "failed"
