"""
Use Case: Create Onboarding Workflow

Idempotent: a tenant with an open (in_progress or paused) workflow gets that
workflow back instead of a duplicate.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.onboarding.dtos import CreateWorkflowResponse, WorkflowResponse
from tenancy.domain.entities import TenantStatus
from tenancy.libs.result import Error, Result, Return


class CreateWorkflowUseCase:
    """
    Business Logic:
    1. Validate tenant exists and is not archived/expired
    2. Return the open workflow if there is one, else create it from the
       template with every step pending
    3. Self-heal a workflow that has no steps
    4. Commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, user_id: Optional[UUID] = None
    ) -> Result[CreateWorkflowResponse]:
        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
            if tenant.status in (TenantStatus.archived, TenantStatus.expired):
                return Return.err(
                    Error(
                        "TENANT_INACTIVE",
                        "Cannot start onboarding for an archived or expired tenant",
                    )
                )

            # 2. Existing or new workflow
            onboarding = OnboardingService(self.uow)
            workflow, created = await onboarding.ensure_workflow(tenant_id, user_id)

            # 3. Steps (healed if missing)
            workflow, steps = await onboarding.load_steps(workflow)

            # 4. Commit
            await self.uow.commit()

            return Return.ok(
                CreateWorkflowResponse(
                    workflow=WorkflowResponse.from_entities(workflow, steps),
                    created=created,
                )
            )
