"""
Notifier adapters for the external notification collaborator.
"""

import logging

import httpx

from tenant_governance.app.services.notification_dispatcher import INotifier
from tenant_governance.domain.entities import NotificationEvent

logger = logging.getLogger(__name__)


class LoggingNotifier(INotifier):
    """Default notifier when no delivery endpoint is configured"""

    async def send(self, event: NotificationEvent) -> None:
        logger.info(
            "Notification %s for tenant %s: %s",
            event.event_type.value,
            event.tenant_id,
            event.payload,
        )


class WebhookNotifier(INotifier):
    """POSTs {event_type, tenant_id, payload} to the notifier service"""

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    async def send(self, event: NotificationEvent) -> None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.url, json=event.model_dump(mode="json"))
            response.raise_for_status()
        logger.info(
            "Delivered %s notification for tenant %s", event.event_type.value, event.tenant_id
        )
