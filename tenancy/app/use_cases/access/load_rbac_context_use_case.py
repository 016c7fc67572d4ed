"""
Use Case: Load RBAC Context

Builds the per-request permission context from the user's system role and,
when a tenant is targeted, the user's active tenant role.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.access_policy import resolve_system_role
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.domain.entities import UserStatus
from tenancy.domain.permissions import RBACContext, build_context
from tenancy.libs.result import Error, Result, Return


class LoadRBACContextUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, tenant_id: Optional[UUID] = None
    ) -> Result[RBACContext]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.status == UserStatus.disabled:
                return Return.err(Error("NOT_AUTHENTICATED", "User not found or disabled"))

            admin = await self.uow.admin_users.get_by_user_id(user_id)
            system_role = resolve_system_role(user, admin)

            tenant_role = None
            scoped_tenant_id = None
            if tenant_id is not None:
                relationship = await self.uow.user_tenants.get_by_user_and_tenant(
                    user_id, tenant_id
                )
                if relationship is not None and relationship.is_active:
                    tenant_role = relationship.role
                    scoped_tenant_id = tenant_id

            return Return.ok(build_context(user_id, system_role, scoped_tenant_id, tenant_role))
