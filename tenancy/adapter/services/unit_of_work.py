from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.adapter.repositories.archive_job_repository import ArchiveJobRepository
from tenancy.adapter.repositories.audit_event_repository import AuditEventRepository
from tenancy.adapter.repositories.lead_repository import LeadRepository
from tenancy.adapter.repositories.onboarding_repository import (
    OnboardingStepRepository,
    OnboardingWorkflowRepository,
)
from tenancy.adapter.repositories.tenant_repository import TenantRepository
from tenancy.adapter.repositories.user_repository import AdminUserRepository, UserRepository
from tenancy.adapter.repositories.user_tenant_repository import UserTenantRepository
from tenancy.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern.

    With owns_session=True the session is closed when the context exits,
    for units of work opened from a factory outside the request scope.
    """

    def __init__(self, session: AsyncSession, owns_session: bool = False):
        self.session = session
        self.owns_session = owns_session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.workflows = OnboardingWorkflowRepository(self.session)
        self.steps = OnboardingStepRepository(self.session)
        self.user_tenants = UserTenantRepository(self.session)
        self.users = UserRepository(self.session)
        self.admin_users = AdminUserRepository(self.session)
        self.leads = LeadRepository(self.session)
        self.archive_jobs = ArchiveJobRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        if self.owns_session:
            await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
