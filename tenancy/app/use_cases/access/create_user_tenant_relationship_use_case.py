"""
Use Case: Create User-Tenant Relationship

Repairs a missing or inactive relationship (the auto-fix of access
validation). Upsert keyed on (user, tenant): concurrent calls for the same
pair are last-writer-wins, never an error.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.access_policy import is_super_admin
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.access.dtos import RelationshipResponse
from tenancy.domain.entities import AuditEvent, TenantStatus, UserRole
from tenancy.domain.permissions import is_system_admin_role
from tenancy.libs.result import Error, Result, Return


class CreateUserTenantRelationshipUseCase:
    """
    Business Logic:
    1. Validate role is a tenant-scoped role
    2. Only a super admin may create relationships
    3. Validate tenant (not archived) and target user exist
    4. Upsert relationship as active, audit, commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        tenant_id: UUID,
        role: str = UserRole.tenant_admin.value,
        target_user_id: Optional[UUID] = None,
    ) -> Result[RelationshipResponse]:
        # 1. Role
        try:
            tenant_role = UserRole(role)
        except ValueError:
            tenant_role = None
        if tenant_role is None or is_system_admin_role(tenant_role):
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Invalid tenant role '{role}'",
                    details={"fields": {"role": ["Must be a tenant-scoped role"]}},
                )
            )

        user_id = target_user_id or actor_id

        async with self.uow:
            # 2. Authorization
            actor = await self.uow.users.get_by_id(actor_id)
            if actor is None:
                return Return.err(Error("NOT_AUTHENTICATED", "User not found"))
            admin = await self.uow.admin_users.get_by_user_id(actor_id)
            if not is_super_admin(actor, admin):
                return Return.err(
                    Error(
                        "INSUFFICIENT_PERMISSION",
                        "Only super admins can create tenant relationships",
                    )
                )

            # 3. Tenant + target user
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.status == TenantStatus.archived:
                return Return.err(
                    Error("TENANT_ARCHIVED", "Archived tenants cannot gain members")
                )
            if user_id != actor_id and not await self.uow.users.get_by_id(user_id):
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            # 4. Upsert
            relationship = await self.uow.user_tenants.upsert(
                user_id=user_id,
                tenant_id=tenant_id,
                role=tenant_role,
                is_active=True,
                metadata={"created_via": "auto_fix", "created_by": str(actor_id)},
            )
            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor_id,
                    action="user_tenant_relationship_upserted",
                    event_metadata={"user_id": str(user_id), "role": tenant_role.value},
                )
            )
            await self.uow.commit()

            return Return.ok(
                RelationshipResponse(
                    user_id=str(relationship.user_id),
                    tenant_id=str(relationship.tenant_id),
                    role=getattr(relationship.role, "value", relationship.role),
                    is_active=relationship.is_active,
                )
            )
