"""Onboarding workflow use cases."""

from .advance_step_use_case import AdvanceStepUseCase
from .create_workflow_use_case import CreateWorkflowUseCase
from .get_workflow_use_case import GetTenantWorkflowUseCase, GetWorkflowUseCase
from .workflow_status_use_cases import PauseWorkflowUseCase, ResumeWorkflowUseCase

__all__ = [
    "CreateWorkflowUseCase",
    "GetWorkflowUseCase",
    "GetTenantWorkflowUseCase",
    "AdvanceStepUseCase",
    "PauseWorkflowUseCase",
    "ResumeWorkflowUseCase",
]
