from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from tenancy.domain.entities import OnboardingStep, OnboardingWorkflow


class IOnboardingWorkflowRepository(ABC):
    """OnboardingWorkflow repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, workflow_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get workflow by ID"""
        pass

    @abstractmethod
    async def get_open_by_tenant(self, tenant_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get the tenant's non-terminal (in_progress/paused) workflow, if any"""
        pass

    @abstractmethod
    async def get_latest_by_tenant(self, tenant_id: UUID) -> Optional[OnboardingWorkflow]:
        """Get the most recently started workflow of a tenant"""
        pass

    @abstractmethod
    async def create(self, workflow: OnboardingWorkflow) -> OnboardingWorkflow:
        """Create a new workflow"""
        pass

    @abstractmethod
    async def compare_and_set(
        self, workflow_id: UUID, expected_version: int, values: Dict[str, Any]
    ) -> Optional[OnboardingWorkflow]:
        """
        Apply values and bump version only if version still equals
        expected_version. Returns the refreshed workflow or None on conflict.
        """
        pass


class IOnboardingStepRepository(ABC):
    """OnboardingStep repository interface - application layer"""

    @abstractmethod
    async def get_by_workflow(self, workflow_id: UUID) -> List[OnboardingStep]:
        """Get all steps of a workflow ordered by step_number"""
        pass

    @abstractmethod
    async def create_many(self, steps: List[OnboardingStep]) -> List[OnboardingStep]:
        """Create a batch of steps"""
        pass

    @abstractmethod
    async def update(self, step: OnboardingStep) -> OnboardingStep:
        """Update existing step"""
        pass
