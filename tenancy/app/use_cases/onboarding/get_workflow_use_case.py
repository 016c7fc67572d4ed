from uuid import UUID

from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.onboarding.dtos import WorkflowResponse
from tenancy.libs.result import Error, Result, Return


class GetWorkflowUseCase:
    """Read a workflow with its steps; a step-less workflow is repaired first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, workflow_id: UUID) -> Result[WorkflowResponse]:
        async with self.uow:
            workflow = await self.uow.workflows.get_by_id(workflow_id)
            if not workflow:
                return Return.err(Error("WORKFLOW_NOT_FOUND", "Onboarding workflow not found"))

            workflow, steps = await OnboardingService(self.uow).load_steps(workflow)
            await self.uow.commit()

            return Return.ok(WorkflowResponse.from_entities(workflow, steps))


class GetTenantWorkflowUseCase:
    """Read the tenant's most recent workflow"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[WorkflowResponse]:
        async with self.uow:
            workflow = await self.uow.workflows.get_latest_by_tenant(tenant_id)
            if not workflow:
                return Return.err(
                    Error("WORKFLOW_NOT_FOUND", "Tenant has no onboarding workflow")
                )

            workflow, steps = await OnboardingService(self.uow).load_steps(workflow)
            await self.uow.commit()

            return Return.ok(WorkflowResponse.from_entities(workflow, steps))
