"""
Use Case: Validate Tenant Access

Checks whether a user has a usable relationship with a tenant, and whether
a missing or inactive relationship can be repaired by that user.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.access_policy import is_super_admin
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.access.dtos import TenantAccessStatus
from tenancy.domain.entities import UserStatus
from tenancy.libs.result import Result, Return

ISSUE_NOT_AUTHENTICATED = "not authenticated"
ISSUE_USER_MISSING = "user not found in auth"
ISSUE_USER_DISABLED = "user disabled"
ISSUE_TENANT_MISSING = "tenant not found"
ISSUE_RELATIONSHIP_MISSING = "relationship missing"
ISSUE_RELATIONSHIP_INACTIVE = "relationship inactive"


class ValidateTenantAccessUseCase:
    """
    Business Logic:
    1. No authenticated user -> invalid, not fixable
    2. Resolve super-admin membership (privileged bypass)
    3. Look up the tenant and the (user, tenant) relationship:
       missing or inactive -> issue, fixable only by a super admin
    4. is_valid = active relationship OR super admin

    Never returns an error Result; problems are reported as issues.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: Optional[UUID], tenant_id: UUID
    ) -> Result[TenantAccessStatus]:
        status = TenantAccessStatus(tenant_id=str(tenant_id))

        # 1. Authenticated identity
        if user_id is None:
            status.issues.append(ISSUE_NOT_AUTHENTICATED)
            return Return.ok(status)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                status.issues.append(ISSUE_USER_MISSING)
                return Return.ok(status)
            status.user_exists_in_auth = True
            if user.status == UserStatus.disabled:
                status.issues.append(ISSUE_USER_DISABLED)
                return Return.ok(status)

            # 2. Privileged bypass
            admin = await self.uow.admin_users.get_by_user_id(user_id)
            status.is_super_admin = is_super_admin(user, admin)

            # 3. Tenant + relationship
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                status.issues.append(ISSUE_TENANT_MISSING)
                return Return.ok(status)

            relationship = await self.uow.user_tenants.get_by_user_and_tenant(user_id, tenant_id)
            if relationship is None:
                status.issues.append(ISSUE_RELATIONSHIP_MISSING)
                status.can_auto_fix = status.is_super_admin
            else:
                status.relationship_exists = True
                status.relationship_active = relationship.is_active
                status.role = getattr(relationship.role, "value", relationship.role)
                if not relationship.is_active:
                    status.issues.append(ISSUE_RELATIONSHIP_INACTIVE)
                    status.can_auto_fix = status.is_super_admin

            # 4. Verdict
            status.is_valid = status.relationship_active or status.is_super_admin
            return Return.ok(status)
