"""
Use Case: Advance Onboarding Step

Sets one step's status, merges its data and recomputes the workflow's
current_step and status. Serialized per workflow through a compare-and-swap
on the workflow version.
"""

import logging
from typing import Optional
from uuid import UUID

from tenancy.app.services.email_sender import EmailType
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.onboarding_service import OnboardingService, current_step_for
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.app.use_cases.onboarding.dtos import AdvanceStepCommand, WorkflowResponse
from tenancy.domain.base import utcnow
from tenancy.domain.entities import (
    AuditEvent,
    StepOrderingPolicy,
    StepStatus,
    WorkflowStatus,
)
from tenancy.domain.services.onboarding import is_complete, ordering_violations
from tenancy.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class AdvanceStepUseCase:
    """
    Business Logic:
    1. Validate the requested step status
    2. Load workflow; completed/failed workflows are immutable, paused ones
       reject advances
    3. Load steps (self-healing) and validate step_number
    4. failed requires validation_errors; completed obeys the ordering policy
    5. Update the step: merge step_data, stamp or clear completed_at /
       completed_by, keep validation_errors only while failed
    6. Recompute current_step and workflow status, CAS on version
    7. Audit, commit, send the completion email
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ordering_policy: StepOrderingPolicy = StepOrderingPolicy.lenient,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        self.uow = uow
        self.ordering_policy = ordering_policy
        self.dispatcher = dispatcher

    async def execute(
        self,
        workflow_id: UUID,
        step_number: int,
        command: AdvanceStepCommand,
        user_id: Optional[UUID] = None,
    ) -> Result[WorkflowResponse]:
        # 1. Validate status
        try:
            new_status = StepStatus(command.status)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_STEP_STATUS",
                    f"Invalid step status '{command.status}'",
                    reason=f"Must be one of: {', '.join(s.value for s in StepStatus)}",
                )
            )

        async with self.uow:
            # 2. Load workflow
            workflow = await self.uow.workflows.get_by_id(workflow_id)
            if not workflow:
                return Return.err(Error("WORKFLOW_NOT_FOUND", "Onboarding workflow not found"))
            if workflow.status == WorkflowStatus.completed:
                return Return.err(
                    Error("WORKFLOW_COMPLETED", "Onboarding workflow is already completed")
                )
            if workflow.status == WorkflowStatus.failed:
                return Return.err(Error("WORKFLOW_FAILED", "Onboarding workflow has failed"))
            if workflow.status == WorkflowStatus.paused:
                return Return.err(
                    Error("WORKFLOW_PAUSED", "Resume the onboarding workflow before advancing it")
                )

            # 3. Load steps
            workflow, steps = await OnboardingService(self.uow).load_steps(workflow)
            step = next((s for s in steps if s.step_number == step_number), None)
            if step is None:
                return Return.err(
                    Error(
                        "INVALID_STEP_NUMBER",
                        f"Step {step_number} does not exist",
                        reason=f"Valid steps are 1..{len(steps)}",
                    )
                )

            # 4. Status-specific preconditions
            errors = [e for e in command.validation_errors if e and e.strip()]
            if new_status == StepStatus.failed and not errors:
                return Return.err(
                    Error(
                        "VALIDATION_ERRORS_REQUIRED",
                        "A failed step must carry at least one validation error",
                    )
                )
            if new_status == StepStatus.completed:
                blocking = ordering_violations(steps, step_number, self.ordering_policy)
                if blocking:
                    return Return.err(
                        Error(
                            "STEP_ORDER_VIOLATION",
                            f"Complete required steps {blocking} before step {step_number}",
                            details={"blocking_steps": blocking},
                        )
                    )

            # 5. Update step
            now = utcnow()
            previous_status = step.step_status
            step.step_status = new_status
            step.step_data = {**(step.step_data or {}), **command.step_data}
            if new_status == StepStatus.completed:
                step.completed_at = now
                step.completed_by = user_id
            else:
                step.completed_at = None
                step.completed_by = None
            step.validation_errors = errors if new_status == StepStatus.failed else []
            step.updated_at = now
            await self.uow.steps.update(step)

            # 6. Recompute workflow
            done = is_complete(steps)
            values = {
                "current_step": current_step_for(workflow, steps),
                "status": WorkflowStatus.completed if done else WorkflowStatus.in_progress,
                "completed_at": now if done else None,
                "updated_at": now,
            }
            updated = await self.uow.workflows.compare_and_set(
                workflow.id, workflow.version, values
            )
            if updated is None:
                return Return.err(
                    Error(
                        "CONCURRENT_MODIFICATION",
                        "Onboarding workflow changed concurrently, reload and retry",
                    )
                )

            # 7. Audit + commit
            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=updated.tenant_id,
                    user_id=user_id,
                    action="onboarding_step_updated",
                    event_metadata={
                        "workflow_id": str(updated.id),
                        "step_number": step_number,
                        "step_key": step.step_key,
                        "from": getattr(previous_status, "value", previous_status),
                        "to": new_status.value,
                    },
                )
            )
            tenant = None
            if done:
                await self.uow.audit_events.create(
                    AuditEvent(
                        tenant_id=updated.tenant_id,
                        user_id=user_id,
                        action="onboarding_completed",
                        event_metadata={"workflow_id": str(updated.id)},
                    )
                )
                tenant = await self.uow.tenants.get_by_id(updated.tenant_id)

            await self.uow.commit()

        if done:
            logger.info(f"Onboarding workflow {updated.id} completed for tenant {updated.tenant_id}")
            if tenant and self.dispatcher:
                self.dispatcher.dispatch(
                    EmailType.ONBOARDING_COMPLETED,
                    tenant.id,
                    tenant.owner_email,
                    {"tenant_name": tenant.name},
                )

        return Return.ok(WorkflowResponse.from_entities(updated, steps))
