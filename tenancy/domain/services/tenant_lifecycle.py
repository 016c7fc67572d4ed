"""
Tenant lifecycle transition table.

The status field is a tagged variant: every change must be an edge in
VALID_TRANSITIONS. archived is terminal; expired accepts no further change.
"""

from typing import Dict, FrozenSet

from tenancy.domain.entities.enums import TenantStatus
from tenancy.domain.errors import InvalidTransition

VALID_TRANSITIONS: Dict[TenantStatus, FrozenSet[TenantStatus]] = {
    TenantStatus.pending_approval: frozenset(
        {TenantStatus.trial, TenantStatus.active, TenantStatus.expired}
    ),
    TenantStatus.trial: frozenset({TenantStatus.active, TenantStatus.expired}),
    TenantStatus.active: frozenset({TenantStatus.suspended, TenantStatus.expired}),
    TenantStatus.suspended: frozenset(
        {TenantStatus.active, TenantStatus.archived, TenantStatus.expired}
    ),
    TenantStatus.expired: frozenset(),
    TenantStatus.archived: frozenset(),
}

# Statuses in which a fresh onboarding workflow is materialized
ONBOARDING_STATUSES = frozenset({TenantStatus.trial, TenantStatus.pending_approval})


def can_transition(current: TenantStatus, requested: TenantStatus) -> bool:
    return requested in VALID_TRANSITIONS.get(current, frozenset())


def validate_transition(current: TenantStatus, requested: TenantStatus) -> None:
    """Raise InvalidTransition unless current -> requested is a legal edge"""
    if not can_transition(current, requested):
        raise InvalidTransition(current, requested)


def is_terminal(status: TenantStatus) -> bool:
    return not VALID_TRANSITIONS.get(status)
