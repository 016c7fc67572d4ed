"""
Email delivery collaborator interface.

Template rendering and transport live outside this service; the core only
asks for an email of a given type to be sent and records the outcome.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel


class EmailType:
    LEAD_CONVERSION_WELCOME = "lead_conversion_welcome"
    TENANT_SUSPENDED = "tenant_suspended"
    TENANT_REACTIVATED = "tenant_reactivated"
    TENANT_ARCHIVED = "tenant_archived"
    ONBOARDING_COMPLETED = "onboarding_completed"


class EmailDeliveryResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class IEmailSender(ABC):
    """Email sender interface - application layer"""

    @abstractmethod
    async def send_email(
        self,
        email_type: str,
        tenant_id: Optional[UUID],
        recipient: str,
        template_data: Dict[str, Any],
    ) -> EmailDeliveryResult:
        """Send one templated email; failures are reported, not raised"""
        pass
