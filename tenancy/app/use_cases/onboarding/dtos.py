"""
Onboarding Use Case DTOs
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from tenancy.domain.entities import OnboardingStep, OnboardingWorkflow
from tenancy.domain.services.onboarding import DONE_STATUSES


class AdvanceStepCommand(BaseModel):
    """New status for one step plus data to merge into step_data"""

    status: str
    step_data: Dict[str, Any] = Field(default_factory=dict)
    validation_errors: List[str] = Field(default_factory=list)


class StepResponse(BaseModel):
    step_number: int
    step_key: str
    step_name: str
    is_required: bool
    step_status: str
    step_data: Dict[str, Any]
    validation_errors: List[str]
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None

    @classmethod
    def from_entity(cls, step: OnboardingStep) -> "StepResponse":
        return cls(
            step_number=step.step_number,
            step_key=step.step_key,
            step_name=step.step_name,
            is_required=step.is_required,
            step_status=getattr(step.step_status, "value", step.step_status),
            step_data=dict(step.step_data or {}),
            validation_errors=list(step.validation_errors or []),
            completed_at=step.completed_at,
            completed_by=str(step.completed_by) if step.completed_by else None,
        )


class WorkflowResponse(BaseModel):
    id: str
    tenant_id: str
    status: str
    current_step: int
    total_steps: int
    version: int
    progress_percent: int
    started_at: datetime
    completed_at: Optional[datetime] = None
    steps: List[StepResponse]

    @classmethod
    def from_entities(
        cls, workflow: OnboardingWorkflow, steps: List[OnboardingStep]
    ) -> "WorkflowResponse":
        done = sum(1 for s in steps if s.step_status in DONE_STATUSES)
        return cls(
            id=str(workflow.id),
            tenant_id=str(workflow.tenant_id),
            status=getattr(workflow.status, "value", workflow.status),
            current_step=workflow.current_step,
            total_steps=workflow.total_steps,
            version=workflow.version,
            progress_percent=round(done * 100 / len(steps)) if steps else 0,
            started_at=workflow.started_at,
            completed_at=workflow.completed_at,
            steps=[StepResponse.from_entity(s) for s in steps],
        )


class CreateWorkflowResponse(BaseModel):
    workflow: WorkflowResponse
    created: bool
