"""
Onboarding workflow rules: the step template and progress recomputation.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from tenancy.domain.entities.enums import StepOrderingPolicy, StepStatus
from tenancy.domain.entities.onboarding import OnboardingStep

DONE_STATUSES = frozenset({StepStatus.completed, StepStatus.skipped})
BLOCKING_STATUSES = frozenset({StepStatus.pending, StepStatus.failed})


@dataclass(frozen=True)
class StepTemplate:
    key: str
    name: str
    is_required: bool
    estimated_minutes: int


ONBOARDING_TEMPLATE: Sequence[StepTemplate] = (
    StepTemplate("legal_documents", "Legal Documents", True, 15),
    StepTemplate("subscription_billing", "Subscription & Billing", True, 10),
    StepTemplate("branding", "Branding & Design", False, 10),
    StepTemplate("features_limits", "Features & Limits", True, 10),
    StepTemplate("data_import", "Data Import", False, 20),
    StepTemplate("team_invites", "Team Invites", True, 5),
)


def build_steps(workflow_id, template: Sequence[StepTemplate] = ONBOARDING_TEMPLATE) -> List[OnboardingStep]:
    """Fresh pending steps numbered contiguously from 1"""
    return [
        OnboardingStep(
            workflow_id=workflow_id,
            step_number=number,
            step_key=item.key,
            step_name=item.name,
            is_required=item.is_required,
            step_status=StepStatus.pending,
            step_data={"estimated_minutes": item.estimated_minutes},
            validation_errors=[],
        )
        for number, item in enumerate(template, start=1)
    ]


def next_open_step(steps: Sequence[OnboardingStep]) -> Optional[int]:
    """Lowest step number not completed/skipped, or None when all are done"""
    open_numbers = [s.step_number for s in steps if s.step_status not in DONE_STATUSES]
    return min(open_numbers) if open_numbers else None


def is_complete(steps: Sequence[OnboardingStep]) -> bool:
    return bool(steps) and next_open_step(steps) is None


def ordering_violations(
    steps: Sequence[OnboardingStep],
    step_number: int,
    policy: StepOrderingPolicy,
) -> List[int]:
    """
    Lower-numbered required steps that block completing step_number.
    Always empty under the lenient policy.
    """
    if policy != StepOrderingPolicy.strict:
        return []
    return sorted(
        s.step_number
        for s in steps
        if s.step_number < step_number
        and s.is_required
        and s.step_status in BLOCKING_STATUSES
    )
