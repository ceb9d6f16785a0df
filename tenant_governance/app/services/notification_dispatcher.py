"""
Notification dispatch - fire-and-forget hand-off of lifecycle events.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Set

from tenant_governance.domain.entities import NotificationEvent

logger = logging.getLogger(__name__)


class INotifier(ABC):
    """External notification collaborator"""

    @abstractmethod
    async def send(self, event: NotificationEvent) -> None:
        """Attempt delivery once; raise on failure"""
        pass


class NotificationDispatcher:
    """
    Enqueues notification events without blocking the caller.

    Business Rules:
    - One enqueue attempt per event, no retries on the notifier's behalf
    - Delivery failures are logged and never reach the caller
    """

    def __init__(self, notifier: INotifier):
        self.notifier = notifier
        self._pending: Set[asyncio.Task] = set()

    def dispatch(self, event: NotificationEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(
                "No running event loop, dropped %s notification for tenant %s",
                event.event_type.value,
                event.tenant_id,
            )
            return

        task = loop.create_task(self._deliver(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, event: NotificationEvent) -> None:
        try:
            await self.notifier.send(event)
        except Exception:
            logger.warning(
                "Notification %s for tenant %s failed",
                event.event_type.value,
                event.tenant_id,
                exc_info=True,
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight deliveries (shutdown and tests)"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
