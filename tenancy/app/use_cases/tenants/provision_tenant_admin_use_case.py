"""
Use Case: Provision Tenant Admin

Creates or links the tenant's admin identity in its own transaction, under a
bounded timeout. Used as the identity step of lead conversion and as the
retry entry point when that step failed.
"""

import asyncio
import logging
from typing import Optional
from uuid import UUID

from tenancy.app.services.email_sender import EmailType
from tenancy.app.services.identity_provisioning import provision_tenant_admin
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import ProvisionTenantAdminResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import ProvisioningStatus, TenantStatus
from tenancy.domain.errors import TransientError
from tenancy.domain.services.credentials import generate_temp_password
from tenancy.domain.services.validation import email_errors
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ProvisionTenantAdminUseCase:
    """
    Provision the tenant admin identity.

    Business Logic:
    1. Validate tenant exists and is not archived/expired
    2. Resolve admin email (explicit, else tenant owner email)
    3. Generate a temporary password
    4. Create or reuse the user, upsert its tenant_admin relationship
    5. Mark admin_provisioning_status completed, commit
    6. Send the welcome email whenever credentials were issued: a new user,
       or a retry that reissues a temporary password never changed

    Steps 4-5 run under timeout_seconds. A timeout marks the tenant's
    provisioning as failed and returns TRANSIENT_ERROR.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: Optional[NotificationDispatcher] = None,
        temp_password_length: int = 12,
        timeout_seconds: float = 10.0,
        site_url: Optional[str] = None,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.temp_password_length = temp_password_length
        self.timeout_seconds = timeout_seconds
        self.site_url = site_url

    async def execute(
        self,
        tenant_id: UUID,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        user_id: Optional[UUID] = None,
        temp_password: Optional[str] = None,
        source: str = "retry",
    ) -> Result[ProvisionTenantAdminResponse]:
        if email is not None and email_errors(email):
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid admin email",
                    details={"fields": {"email": email_errors(email)}},
                )
            )

        password = temp_password or generate_temp_password(self.temp_password_length)

        try:
            result = await asyncio.wait_for(
                self._provision(tenant_id, email, full_name, user_id, password, source),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Identity provisioning for tenant {tenant_id} timed out after {self.timeout_seconds}s"
            )
            await self.record_failure(tenant_id, "timeout")
            return Return.err(
                TransientError(
                    "Identity provisioning timed out, try again",
                    reason=f"timeout after {self.timeout_seconds}s",
                ).to_error()
            )

        if result.is_err():
            return result

        response, recipient, tenant_name = result.value
        if response.temp_password and self.dispatcher:
            self.dispatcher.dispatch(
                EmailType.LEAD_CONVERSION_WELCOME,
                tenant_id,
                recipient,
                {
                    "tenant_name": tenant_name,
                    "admin_name": full_name,
                    "email": recipient,
                    "temp_password": response.temp_password,
                    "login_url": f"{self.site_url}/auth" if self.site_url else None,
                },
            )
        return Return.ok(response)

    async def _provision(self, tenant_id, email, full_name, user_id, password, source):
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.status in (TenantStatus.archived, TenantStatus.expired):
                return Return.err(
                    Error(
                        "INVALID_TRANSITION",
                        "Cannot provision an admin for an archived or expired tenant",
                    )
                )

            # 2. Resolve email
            admin_email = (email or tenant.owner_email).strip().lower()
            admin_name = full_name or tenant.owner_name

            # 4. Identity + relationship
            identity = await provision_tenant_admin(
                self.uow,
                tenant,
                admin_email,
                admin_name,
                password,
                source=source,
                actor_id=user_id,
            )

            # 5. Mark completed
            tenant.admin_provisioning_status = ProvisioningStatus.completed
            tenant.updated_at = utcnow()
            await self.uow.tenants.update(tenant)
            await self.uow.commit()

            return Return.ok(
                (
                    ProvisionTenantAdminResponse(
                        tenant_id=str(tenant.id),
                        user_id=str(identity.user_id),
                        user_created=identity.created,
                        admin_provisioning_status=ProvisioningStatus.completed.value,
                        temp_password=password if identity.credentials_issued else None,
                    ),
                    admin_email,
                    tenant.name,
                )
            )

    async def record_failure(self, tenant_id: UUID, reason: str) -> None:
        """
        Best-effort: flag the tenant so the provisioning can be retried.

        A timed-out attempt may still have committed; the retry then reissues
        the unchanged temporary password.
        """
        try:
            async with self.uow:
                tenant = await self.uow.tenants.get_by_id(tenant_id)
                if tenant is None:
                    return
                tenant.admin_provisioning_status = ProvisioningStatus.failed
                tenant.tenant_metadata = {
                    **(tenant.tenant_metadata or {}),
                    "admin_provisioning_error": reason,
                }
                tenant.updated_at = utcnow()
                await self.uow.tenants.update(tenant)
                await self.uow.commit()
        except Exception as e:
            logger.error(f"Could not record provisioning failure for tenant {tenant_id}: {e}")
