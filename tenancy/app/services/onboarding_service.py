"""
Onboarding workflow materialization and self-healing.

Shared by tenant creation, lead conversion and the onboarding use cases.
Operates inside the caller's unit of work and never commits.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.domain.base import utcnow
from tenancy.domain.entities import (
    AuditEvent,
    OnboardingStep,
    OnboardingWorkflow,
    WorkflowStatus,
)
from tenancy.domain.services.onboarding import ONBOARDING_TEMPLATE, build_steps, next_open_step

logger = logging.getLogger(__name__)


class OnboardingService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def ensure_workflow(
        self, tenant_id: UUID, user_id: Optional[UUID] = None
    ) -> Tuple[OnboardingWorkflow, bool]:
        """
        Return the tenant's open workflow, creating one from the template if
        none exists. The boolean is True when a new workflow was created.
        """
        existing = await self.uow.workflows.get_open_by_tenant(tenant_id)
        if existing:
            return existing, False

        workflow = await self.uow.workflows.create(
            OnboardingWorkflow(
                tenant_id=tenant_id,
                status=WorkflowStatus.in_progress,
                current_step=1,
                total_steps=len(ONBOARDING_TEMPLATE),
            )
        )
        await self.uow.steps.create_many(build_steps(workflow.id))
        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant_id,
                user_id=user_id,
                action="onboarding_workflow_created",
                event_metadata={
                    "workflow_id": str(workflow.id),
                    "total_steps": workflow.total_steps,
                },
            )
        )
        return workflow, True

    async def load_steps(
        self, workflow: OnboardingWorkflow
    ) -> Tuple[OnboardingWorkflow, List[OnboardingStep]]:
        """
        Load a workflow's steps. A workflow row without steps is corrupt and
        gets a fresh step set; the caller never sees the corruption.
        """
        steps = await self.uow.steps.get_by_workflow(workflow.id)
        if steps:
            return workflow, steps

        logger.warning(f"Workflow {workflow.id} has no steps, recreating from template")

        # Claim the repair via version so concurrent readers don't both insert
        healed = await self.uow.workflows.compare_and_set(
            workflow.id,
            workflow.version,
            {
                "status": WorkflowStatus.in_progress,
                "current_step": 1,
                "total_steps": len(ONBOARDING_TEMPLATE),
                "completed_at": None,
                "updated_at": utcnow(),
            },
        )
        if healed is None:
            reloaded = await self.uow.workflows.get_by_id(workflow.id)
            return reloaded, await self.uow.steps.get_by_workflow(workflow.id)

        steps = await self.uow.steps.create_many(build_steps(healed.id))
        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=healed.tenant_id,
                user_id=None,
                action="onboarding_workflow_healed",
                event_metadata={"workflow_id": str(healed.id), "total_steps": len(steps)},
            )
        )
        return healed, steps


def current_step_for(workflow: OnboardingWorkflow, steps: List[OnboardingStep]) -> int:
    """Lowest open step number; total_steps once every step is done"""
    open_step = next_open_step(steps)
    return open_step if open_step is not None else workflow.total_steps
