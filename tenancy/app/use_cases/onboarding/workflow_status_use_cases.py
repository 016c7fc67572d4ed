"""
Use Cases: Pause / Resume Onboarding Workflow

in_progress <-> paused. Completed and failed workflows cannot change.
"""

from typing import Optional
from uuid import UUID

from tenancy.app.services.onboarding_service import OnboardingService
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.onboarding.dtos import WorkflowResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import AuditEvent, WorkflowStatus
from tenancy.libs.result import Error, Result, Return


class _ChangeWorkflowStatus:
    source_status: WorkflowStatus
    target_status: WorkflowStatus
    action: str

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, workflow_id: UUID, user_id: Optional[UUID] = None
    ) -> Result[WorkflowResponse]:
        async with self.uow:
            workflow = await self.uow.workflows.get_by_id(workflow_id)
            if not workflow:
                return Return.err(Error("WORKFLOW_NOT_FOUND", "Onboarding workflow not found"))

            if workflow.status == WorkflowStatus.completed:
                return Return.err(
                    Error("WORKFLOW_COMPLETED", "Onboarding workflow is already completed")
                )
            if workflow.status != self.source_status:
                return Return.err(
                    Error(
                        "INVALID_WORKFLOW_STATE",
                        f"Workflow is {getattr(workflow.status, 'value', workflow.status)}, "
                        f"expected {self.source_status.value}",
                    )
                )

            updated = await self.uow.workflows.compare_and_set(
                workflow.id,
                workflow.version,
                {"status": self.target_status, "updated_at": utcnow()},
            )
            if updated is None:
                return Return.err(
                    Error(
                        "CONCURRENT_MODIFICATION",
                        "Onboarding workflow changed concurrently, reload and retry",
                    )
                )

            updated, steps = await OnboardingService(self.uow).load_steps(updated)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=updated.tenant_id,
                    user_id=user_id,
                    action=self.action,
                    event_metadata={"workflow_id": str(updated.id)},
                )
            )
            await self.uow.commit()

            return Return.ok(WorkflowResponse.from_entities(updated, steps))


class PauseWorkflowUseCase(_ChangeWorkflowStatus):
    source_status = WorkflowStatus.in_progress
    target_status = WorkflowStatus.paused
    action = "onboarding_paused"


class ResumeWorkflowUseCase(_ChangeWorkflowStatus):
    source_status = WorkflowStatus.paused
    target_status = WorkflowStatus.in_progress
    action = "onboarding_resumed"
