"""
Use Case: Convert Lead to Tenant

Saga turning a qualified lead into a trial tenant with an admin login.

The tenant row, its onboarding workflow and the lead's converted flag
commit together. Identity provisioning follows in its own transaction under
a timeout; its failure leaves the tenant in place with
admin_provisioning_status=failed for a later retry.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.leads.dtos import ConvertLeadCommand, ConvertLeadResponse
from tenancy.app.use_cases.tenants.provision_tenant_admin_use_case import (
    ProvisionTenantAdminUseCase,
)
from tenancy.domain.base import utcnow
from tenancy.domain.entities import (
    AuditEvent,
    LeadStatus,
    ProvisioningStatus,
    Tenant,
    TenantStatus,
)
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import default_features, default_limits, parse_plan
from tenancy.domain.services.credentials import generate_temp_password
from tenancy.domain.services.validation import validate_tenant_fields
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ConvertLeadToTenantUseCase:
    """
    Business Logic:
    1. Load lead; require status == qualified (LEAD_NOT_QUALIFIED otherwise,
       which also makes a repeated conversion fail fast)
    2. Validate input; require a free slug (SLUG_CONFLICT)
    3. Create tenant in trial; owner defaults to the lead's contact; create
       its onboarding workflow
    6. Flip lead qualified -> converted with converted_tenant_id (CAS on
       status; a lost race is LEAD_ALREADY_CONVERTED and nothing commits)
       Audit and commit steps 1-3 and 6 together
    4. Generate the temporary password
    5. Provision the admin identity in a separate transaction, bounded by a
       timeout; failures are logged and recorded on the tenant, never
       propagated
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: Optional[NotificationDispatcher] = None,
        trial_period_days: int = 14,
        temp_password_length: int = 12,
        provisioning_timeout_seconds: float = 10.0,
        site_url: Optional[str] = None,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.trial_period_days = trial_period_days
        self.temp_password_length = temp_password_length
        self.provisioning_timeout_seconds = provisioning_timeout_seconds
        self.site_url = site_url

    async def execute(
        self, lead_id: UUID, command: ConvertLeadCommand, user_id: Optional[UUID] = None
    ) -> Result[ConvertLeadResponse]:
        async with self.uow:
            # 1. Lead must be qualified
            lead = await self.uow.leads.get_by_id(lead_id)
            if not lead:
                return Return.err(Error("LEAD_NOT_FOUND", "Lead not found"))
            if lead.status != LeadStatus.qualified:
                current = getattr(lead.status, "value", lead.status)
                return Return.err(
                    Error(
                        "LEAD_NOT_QUALIFIED",
                        "Only qualified leads can be converted",
                        reason=f"lead status is {current}",
                    )
                )

            # 2. Input + slug
            admin_email = (command.admin_email or lead.email).strip().lower()
            admin_name = command.admin_name or lead.contact_name
            try:
                validate_tenant_fields(
                    name=command.tenant_name,
                    slug=command.tenant_slug,
                    owner_email=admin_email,
                    require=("name", "slug", "owner_email"),
                )
                plan = parse_plan(command.subscription_plan)
            except TenancyError as e:
                return Return.err(e.to_error())

            if await self.uow.tenants.get_by_slug(command.tenant_slug):
                return Return.err(
                    Error(
                        "SLUG_CONFLICT",
                        f"Slug '{command.tenant_slug}' is already taken",
                        reason="Choose a different slug",
                    )
                )

            # 3. Tenant + onboarding workflow
            now = utcnow()
            try:
                tenant = await self.uow.tenants.create(
                    Tenant(
                        name=command.tenant_name.strip(),
                        slug=command.tenant_slug,
                        status=TenantStatus.trial,
                        subscription_plan=plan,
                        owner_name=admin_name,
                        owner_email=admin_email,
                        owner_phone=lead.phone,
                        feature_flags=default_features(plan),
                        trial_ends_at=now + timedelta(days=self.trial_period_days),
                        admin_provisioning_status=ProvisioningStatus.pending,
                        tenant_metadata={"converted_from_lead": str(lead.id)},
                        **default_limits(plan),
                    )
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            workflow, _ = await OnboardingService(self.uow).ensure_workflow(tenant.id, user_id)

            # 6. Lead -> converted
            if not await self.uow.leads.mark_converted(lead.id, tenant.id, now):
                return Return.err(
                    Error(
                        "LEAD_ALREADY_CONVERTED",
                        "Lead was converted concurrently",
                        reason="lead is no longer qualified",
                    )
                )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user_id,
                    action="lead_converted",
                    event_metadata={
                        "lead_id": str(lead.id),
                        "slug": tenant.slug,
                        "subscription_plan": plan.value,
                    },
                )
            )
            await self.uow.commit()
            tenant_id = tenant.id

        logger.info(f"Lead {lead_id} converted to tenant {tenant_id} ({command.tenant_slug})")

        # 4. Temporary password
        temp_password = generate_temp_password(self.temp_password_length)

        # 5. Best-effort identity provisioning
        provisioning = ProvisionTenantAdminUseCase(
            self.uow,
            dispatcher=self.dispatcher,
            temp_password_length=self.temp_password_length,
            timeout_seconds=self.provisioning_timeout_seconds,
            site_url=self.site_url,
        )
        response = ConvertLeadResponse(
            tenant_id=str(tenant_id),
            tenant_slug=command.tenant_slug,
            workflow_id=str(workflow.id),
            admin_provisioning_status=ProvisioningStatus.failed.value,
        )
        try:
            result = await provisioning.execute(
                tenant_id,
                email=admin_email,
                full_name=admin_name,
                user_id=user_id,
                temp_password=temp_password,
                source="lead_conversion",
            )
        except Exception as e:
            logger.error(f"Identity provisioning for tenant {tenant_id} failed: {e}")
            await provisioning.record_failure(tenant_id, str(e))
            return Return.ok(response)

        if result.is_err():
            # Timeouts are already recorded by the provisioning use case
            if result.error.code != "TRANSIENT_ERROR":
                logger.warning(
                    f"Identity provisioning for tenant {tenant_id} failed: {result.error.message}"
                )
                await provisioning.record_failure(tenant_id, result.error.code)
            return Return.ok(response)

        response.temp_password = result.value.temp_password
        response.admin_user_id = result.value.user_id
        response.admin_provisioning_status = result.value.admin_provisioning_status
        return Return.ok(response)
