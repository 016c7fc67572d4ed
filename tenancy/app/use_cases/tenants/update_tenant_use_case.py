"""
Use Case: Update Tenant

Edits owner contact, plan, limits and feature flags. Never touches status
or slug.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.tenants.dtos import TenantResponse, UpdateTenantCommand
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, TenantStatus
from tenancy.domain.errors import TenancyError
from tenancy.domain.plans import parse_plan
from tenancy.domain.services.validation import validate_tenant_fields
from tenancy.libs.result import Error, Result, Return

# Plan and feature flags are lifecycle-controlled outside these states
FEATURE_EDITABLE_STATUSES = (
    TenantStatus.pending_approval,
    TenantStatus.trial,
    TenantStatus.active,
)


class UpdateTenantUseCase:
    """
    Update mutable tenant fields.

    Business Logic:
    1. Load tenant; archived tenants are read-only, and plan or feature
       changes need a pending_approval, trial or active tenant
    2. Reject any slug change (SLUG_IMMUTABLE)
    3. Validate provided fields
    4. Apply changes, create audit event listing changed fields, commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, command: UpdateTenantCommand, user_id: Optional[UUID] = None
    ) -> Result[TenantResponse]:
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if tenant.status == TenantStatus.archived:
                return Return.err(
                    Error("TENANT_ARCHIVED", "Archived tenants cannot be modified")
                )

            # 2. Slug is immutable
            if command.slug is not None and command.slug != tenant.slug:
                return Return.err(
                    Error(
                        "SLUG_IMMUTABLE",
                        "Slug cannot be changed once assigned",
                        reason=f"current slug is '{tenant.slug}'",
                    )
                )

            # 3. Validate
            limits = command.limits.provided()
            try:
                validate_tenant_fields(
                    name=command.name, owner_email=command.owner_email, limits=limits
                )
                plan = (
                    parse_plan(command.subscription_plan)
                    if command.subscription_plan is not None
                    else None
                )
            except TenancyError as e:
                return Return.err(e.to_error())

            plan_changed = plan is not None and plan != tenant.subscription_plan
            if (plan_changed or command.feature_flags) and (
                tenant.status not in FEATURE_EDITABLE_STATUSES
            ):
                return Return.err(
                    Error(
                        "TENANT_INACTIVE",
                        "Plan and feature flags cannot change while the tenant is inactive",
                        reason=f"status is {TenantStatus(tenant.status).value}",
                    )
                )

            # 4. Apply
            changed = []
            for field_name in ("name", "owner_name", "owner_phone", "subscription_end_date"):
                value = getattr(command, field_name)
                if value is not None and value != getattr(tenant, field_name):
                    setattr(tenant, field_name, value)
                    changed.append(field_name)

            if command.owner_email is not None:
                email = command.owner_email.strip().lower()
                if email != tenant.owner_email:
                    tenant.owner_email = email
                    changed.append("owner_email")

            if plan_changed:
                tenant.subscription_plan = plan
                changed.append("subscription_plan")

            for field_name, value in limits.items():
                if value != getattr(tenant, field_name):
                    setattr(tenant, field_name, value)
                    changed.append(field_name)

            if command.feature_flags:
                # Reassign so the JSON column is flagged dirty
                tenant.feature_flags = {**(tenant.feature_flags or {}), **command.feature_flags}
                changed.append("feature_flags")

            if not changed:
                return Return.ok(TenantResponse.from_entity(tenant))

            tenant.updated_at = utcnow()
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user_id,
                    action="tenant_updated",
                    event_metadata={"fields": changed},
                )
            )
            await self.uow.commit()

            return Return.ok(TenantResponse.from_entity(tenant))
