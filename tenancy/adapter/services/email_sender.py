"""
Email sender adapters.

HttpEmailSender posts to an external mail service; LoggingEmailSender only
logs, for local development and tests.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

import httpx

from tenancy.app.services.email_sender import EmailDeliveryResult, IEmailSender

logger = logging.getLogger(__name__)


class HttpEmailSender(IEmailSender):
    """Deliver emails through the mail service's JSON endpoint"""

    def __init__(self, service_url: str, timeout_seconds: float = 10.0, api_key: Optional[str] = None):
        self.service_url = service_url
        self.timeout_seconds = timeout_seconds
        self.api_key = api_key

    async def send_email(
        self,
        email_type: str,
        tenant_id: Optional[UUID],
        recipient: str,
        template_data: Dict[str, Any],
    ) -> EmailDeliveryResult:
        payload = {
            "type": email_type,
            "tenantId": str(tenant_id) if tenant_id else None,
            "recipient": recipient,
            "templateData": template_data,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.service_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            return EmailDeliveryResult(
                success=False, error=f"Mail service returned {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            return EmailDeliveryResult(success=False, error=f"Mail service unreachable: {e}")

        body = response.json() if response.content else {}
        return EmailDeliveryResult(
            success=bool(body.get("success", True)),
            message_id=body.get("messageId"),
            error=body.get("error"),
        )


class LoggingEmailSender(IEmailSender):
    """Log the email instead of sending it"""

    async def send_email(
        self,
        email_type: str,
        tenant_id: Optional[UUID],
        recipient: str,
        template_data: Dict[str, Any],
    ) -> EmailDeliveryResult:
        # Never log credentials
        safe_keys = sorted(k for k in template_data if "password" not in k.lower())
        logger.info(
            f"[email:{email_type}] tenant={tenant_id} to={recipient} fields={safe_keys}"
        )
        return EmailDeliveryResult(success=True, message_id=f"log-{uuid4()}")
