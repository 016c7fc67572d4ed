from abc import ABC, abstractmethod

from tenancy.app.repositories.archive_job_repository import IArchiveJobRepository
from tenancy.app.repositories.audit_event_repository import IAuditEventRepository
from tenancy.app.repositories.lead_repository import ILeadRepository
from tenancy.app.repositories.onboarding_repository import (
    IOnboardingStepRepository,
    IOnboardingWorkflowRepository,
)
from tenancy.app.repositories.tenant_repository import ITenantRepository
from tenancy.app.repositories.user_repository import IAdminUserRepository, IUserRepository
from tenancy.app.repositories.user_tenant_repository import IUserTenantRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    workflows: IOnboardingWorkflowRepository
    steps: IOnboardingStepRepository
    user_tenants: IUserTenantRepository
    users: IUserRepository
    admin_users: IAdminUserRepository
    leads: ILeadRepository
    archive_jobs: IArchiveJobRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
