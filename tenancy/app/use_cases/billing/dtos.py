"""
Billing Use Case DTOs
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BillingEventCommand(BaseModel):
    """Subscription collaborator webhook event, already authenticated"""

    type: str
    tenant_id: str
    period_end: Optional[datetime] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class BillingEventResponse(BaseModel):
    event_type: str
    tenant_id: str
    outcome: str  # applied | recorded | ignored
    tenant_status: Optional[str] = None
    detail: Optional[str] = None


class DisableExpiredFeaturesResponse(BaseModel):
    expired_count: int
    expired_tenant_ids: List[str]
    skipped_tenant_ids: List[str]
