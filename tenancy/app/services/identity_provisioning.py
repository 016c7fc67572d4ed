"""
Tenant admin identity provisioning.

Creates (or reuses) the admin login for a tenant and bootstraps its
tenant_admin relationship. Runs inside the caller's unit of work.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import bcrypt

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, Tenant, User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class ProvisionedIdentity:
    user_id: UUID
    created: bool
    reissued: bool = False

    @property
    def credentials_issued(self) -> bool:
        return self.created or self.reissued


def hash_password(password: str) -> str:
    # bcrypt cost factor 12
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(12)).decode("utf-8")


async def provision_tenant_admin(
    uow: UnitOfWork,
    tenant: Tenant,
    email: str,
    full_name: Optional[str],
    temp_password: str,
    source: str,
    actor_id: Optional[UUID] = None,
) -> ProvisionedIdentity:
    """
    1. Find the user by email, or create it with the hashed temp password
       and must_change_password set
    2. Upsert the (user, tenant) relationship as an active tenant_admin
    3. Record an audit event

    Existing users keep their password, unless they are already this
    tenant's admin and still hold an unchanged temporary password. That
    password is reissued, since the earlier one may never have been delivered.
    """
    user = await uow.users.get_by_email(email)
    created = user is None
    reissued = False
    if created:
        user = await uow.users.create(
            User(
                email=email,
                full_name=full_name,
                password_hash=hash_password(temp_password),
                must_change_password=True,
            )
        )
    elif user.must_change_password and await _is_tenant_admin(uow, user.id, tenant.id):
        user.password_hash = hash_password(temp_password)
        user.updated_at = utcnow()
        user = await uow.users.update(user)
        reissued = True
    elif full_name and not user.full_name:
        user.full_name = full_name
        user.updated_at = utcnow()
        user = await uow.users.update(user)

    await uow.user_tenants.upsert(
        user_id=user.id,
        tenant_id=tenant.id,
        role=UserRole.tenant_admin,
        is_active=True,
        metadata={"source": source},
    )

    await uow.audit_events.create(
        AuditEvent(
            tenant_id=tenant.id,
            user_id=actor_id,
            action="tenant_admin_provisioned",
            event_metadata={
                "admin_user_id": str(user.id),
                "user_created": created,
                "credentials_reissued": reissued,
                "source": source,
            },
        )
    )

    logger.info(
        f"Provisioned admin {user.id} for tenant {tenant.id} ({'new' if created else 'existing'} user)"
    )
    return ProvisionedIdentity(user_id=user.id, created=created, reissued=reissued)


async def _is_tenant_admin(uow: UnitOfWork, user_id: UUID, tenant_id: UUID) -> bool:
    relationship = await uow.user_tenants.get_by_user_and_tenant(user_id, tenant_id)
    return relationship is not None and relationship.role == UserRole.tenant_admin
