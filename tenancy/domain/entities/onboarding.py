"""
Onboarding Entities

OnboardingWorkflow is the per-tenant checklist; OnboardingStep is one
ordered task inside it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenancy.domain.base import utcnow

from .enums import StepStatus, WorkflowStatus


class OnboardingWorkflow(SQLModel, table=True):
    """
    OnboardingWorkflow entity - ordered setup checklist for one tenant.

    Business Rules:
    - At most one non-terminal workflow per tenant
    - 1 <= current_step <= total_steps
    - completed iff every step is completed or skipped; immutable afterwards
    - version is bumped on every advance (optimistic concurrency)
    """

    __tablename__ = "onboarding_workflows"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    status: WorkflowStatus = Field(default=WorkflowStatus.in_progress)
    current_step: int = Field(default=1, ge=1)
    total_steps: int = Field(default=1, ge=1)
    version: int = Field(default=1)

    workflow_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    started_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_workflow_tenant_status", "tenant_id", "status"),)


class OnboardingStep(SQLModel, table=True):
    """
    OnboardingStep entity - one task inside a workflow.

    Business Rules:
    - step_number is unique per workflow and contiguous from 1
    - step_data is merged, never replaced, on update
    - validation_errors is non-empty only while failed
    """

    __tablename__ = "onboarding_steps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workflow_id: UUID = Field(
        foreign_key="onboarding_workflows.id", nullable=False, index=True
    )

    step_number: int = Field(ge=1)
    step_key: str = Field(max_length=64)
    step_name: str = Field(max_length=255)
    is_required: bool = Field(default=True)

    step_status: StepStatus = Field(default=StepStatus.pending)
    step_data: dict = Field(default_factory=dict, sa_column=Column(JSON))
    validation_errors: list = Field(default_factory=list, sa_column=Column(JSON))

    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    completed_by: Optional[UUID] = Field(default=None)
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_step_workflow_number", "workflow_id", "step_number", unique=True),
    )
