"""
Use Case: Create Tenant

Direct tenant creation by a platform operator. The tenant starts in trial
(or pending_approval) and gets its onboarding workflow in the same
transaction.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import (
    CreateTenantCommand,
    CreateTenantResponse,
    TenantResponse,
)
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, Tenant, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import default_features, default_limits, parse_plan
from tenancy.domain.services.validation import validate_tenant_fields
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class CreateTenantUseCase:
    """
    Create a tenant with plan defaults.

    Business Logic:
    1. Validate name, slug, owner email, limits and plan
    2. Reject a slug that is already taken (SLUG_CONFLICT)
    3. Create tenant in trial (trial_ends_at = now + trial period) or
       pending_approval
    4. Materialize the onboarding workflow
    5. Create audit event and commit
    """

    def __init__(self, uow: UnitOfWork, trial_period_days: int = 14):
        self.uow = uow
        self.trial_period_days = trial_period_days

    async def execute(
        self, command: CreateTenantCommand, user_id: Optional[UUID] = None
    ) -> Result[CreateTenantResponse]:
        try:
            # 1. Validate input
            limits = command.limits.provided()
            validate_tenant_fields(
                name=command.name,
                slug=command.slug,
                owner_email=command.owner_email,
                limits=limits,
                require=("name", "slug", "owner_email"),
            )
            plan = parse_plan(command.subscription_plan)
        except TenancyError as e:
            return Return.err(e.to_error())

        async with self.uow:
            # 2. Slug uniqueness
            if await self.uow.tenants.get_by_slug(command.slug):
                return Return.err(
                    Error(
                        "SLUG_CONFLICT",
                        f"Slug '{command.slug}' is already taken",
                        reason="Choose a different slug",
                    )
                )

            # 3. Create tenant
            now = utcnow()
            status = (
                TenantStatus.pending_approval
                if command.requires_approval
                else TenantStatus.trial
            )
            feature_flags = default_features(plan)
            feature_flags.update(command.feature_flags or {})

            tenant = Tenant(
                name=command.name.strip(),
                slug=command.slug,
                status=status,
                subscription_plan=plan,
                owner_name=command.owner_name,
                owner_email=command.owner_email.strip().lower(),
                owner_phone=command.owner_phone,
                feature_flags=feature_flags,
                trial_ends_at=(
                    now + timedelta(days=self.trial_period_days)
                    if status == TenantStatus.trial
                    else None
                ),
                tenant_metadata=dict(command.metadata or {}),
                **{**default_limits(plan), **limits},
            )
            try:
                tenant = await self.uow.tenants.create(tenant)
            except TenancyError as e:
                return Return.err(e.to_error())

            # 4. Onboarding workflow
            workflow, _ = await OnboardingService(self.uow).ensure_workflow(tenant.id, user_id)

            # 5. Audit + commit
            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user_id,
                    action="tenant_created",
                    event_metadata={
                        "slug": tenant.slug,
                        "status": status.value,
                        "subscription_plan": plan.value,
                    },
                )
            )
            await self.uow.commit()

            logger.info(f"Created tenant {tenant.id} ({tenant.slug}) in {status.value}")
            return Return.ok(
                CreateTenantResponse(
                    tenant=TenantResponse.from_entity(tenant),
                    workflow_id=str(workflow.id),
                )
            )
