from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenancy.app.repositories.onboarding_repository import (
    IOnboardingStepRepository,
    IOnboardingWorkflowRepository,
)
from tenancy.domain.entities import OnboardingStep, OnboardingWorkflow, WorkflowStatus

OPEN_WORKFLOW_STATUSES = (WorkflowStatus.in_progress, WorkflowStatus.paused)


class OnboardingWorkflowRepository(IOnboardingWorkflowRepository):
    """OnboardingWorkflow repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, workflow_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get workflow by ID"""
        stmt = select(OnboardingWorkflow).where(OnboardingWorkflow.id == workflow_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_open_by_tenant(self, tenant_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get the tenant's in_progress or paused workflow"""
        stmt = (
            select(OnboardingWorkflow)
            .where(
                OnboardingWorkflow.tenant_id == tenant_id,
                OnboardingWorkflow.status.in_(OPEN_WORKFLOW_STATUSES),
            )
            .order_by(OnboardingWorkflow.started_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_latest_by_tenant(self, tenant_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get the most recently started workflow of a tenant"""
        stmt = (
            select(OnboardingWorkflow)
            .where(OnboardingWorkflow.tenant_id == tenant_id)
            .order_by(OnboardingWorkflow.started_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, workflow: OnboardingWorkflow) -> OnboardingWorkflow:
        """Create a new workflow"""
        self.session.add(workflow)
        await self.session.flush()
        await self.session.refresh(workflow)
        return workflow

    async def compare_and_set(
        self, workflow_id: UUID, expected_version: int, values: Dict[str, Any]
    ) -> Optional[OnboardingWorkflow]:
        """Conditional UPDATE ... WHERE id = :id AND version = :expected_version"""
        stmt = (
            update(OnboardingWorkflow)
            .where(
                OnboardingWorkflow.id == workflow_id,
                OnboardingWorkflow.version == expected_version,
            )
            .values(version=expected_version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.session.get(OnboardingWorkflow, workflow_id, populate_existing=True)


class OnboardingStepRepository(IOnboardingStepRepository):
    """OnboardingStep repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_workflow(self, workflow_id: UUID) -> List[OnboardingStep]:
        """Get all steps of a workflow ordered by step_number"""
        stmt = (
            select(OnboardingStep)
            .where(OnboardingStep.workflow_id == workflow_id)
            .order_by(OnboardingStep.step_number)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create_many(self, steps: List[OnboardingStep]) -> List[OnboardingStep]:
        """Create a batch of steps"""
        self.session.add_all(steps)
        await self.session.flush()
        return sorted(steps, key=lambda s: s.step_number)

    async def update(self, step: OnboardingStep) -> OnboardingStep:
        """Update existing step"""
        self.session.add(step)
        await self.session.flush()
        await self.session.refresh(step)
        return step
