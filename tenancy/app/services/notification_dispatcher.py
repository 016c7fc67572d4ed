"""
Post-commit notification dispatch.

Emails are side effects of state changes that have already been committed.
They run as background asyncio tasks so a slow or failing mail service never
holds a transaction open or turns a successful change into an error.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Set
from uuid import UUID

from tenancy.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Fire-and-forget email dispatch with failure logging"""

    def __init__(self, email_sender: IEmailSender):
        self.email_sender = email_sender
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(
        self,
        email_type: str,
        tenant_id: Optional[UUID],
        recipient: Optional[str],
        template_data: Optional[Dict[str, Any]] = None,
    ) -> Optional[asyncio.Task]:
        """Schedule an email; call only after the owning transaction committed"""
        if not recipient:
            logger.warning(f"Skipping {email_type} email for tenant {tenant_id}: no recipient")
            return None

        task = asyncio.create_task(
            self._send(email_type, tenant_id, recipient, template_data or {})
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _send(
        self,
        email_type: str,
        tenant_id: Optional[UUID],
        recipient: str,
        template_data: Dict[str, Any],
    ) -> None:
        try:
            result = await self.email_sender.send_email(
                email_type, tenant_id, recipient, template_data
            )
        except Exception as e:
            logger.error(f"Email {email_type} for tenant {tenant_id} raised: {e}")
            return

        if result.success:
            logger.info(
                f"Email {email_type} sent for tenant {tenant_id} (message_id={result.message_id})"
            )
        else:
            logger.warning(f"Email {email_type} for tenant {tenant_id} failed: {result.error}")

    async def drain(self) -> None:
        """Wait for every in-flight send to finish"""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
