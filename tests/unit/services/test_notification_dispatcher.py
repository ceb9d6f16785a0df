import asyncio
import logging
from uuid import uuid4

import pytest

from tenant_governance.app.services.notification_dispatcher import (
    INotifier,
    NotificationDispatcher,
)
from tenant_governance.domain.entities import NotificationEvent, NotificationEventType


class RecordingNotifier(INotifier):
    def __init__(self, fail: bool = False, delay: float = 0):
        self.sent = []
        self.fail = fail
        self.delay = delay

    async def send(self, event):
        await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionError("notifier unreachable")
        self.sent.append(event)


def make_event(kind=NotificationEventType.approval):
    return NotificationEvent(event_type=kind, tenant_id=uuid4(), payload={"tenant_name": "Acme"})


@pytest.mark.asyncio
async def test_dispatch_does_not_wait_for_delivery():
    notifier = RecordingNotifier(delay=0.05)
    dispatcher = NotificationDispatcher(notifier)

    dispatcher.dispatch(make_event())

    assert notifier.sent == []
    assert dispatcher.pending == 1

    await dispatcher.drain()
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_delivery_failure_is_logged_not_raised(caplog):
    dispatcher = NotificationDispatcher(RecordingNotifier(fail=True))

    with caplog.at_level(logging.WARNING):
        dispatcher.dispatch(make_event(NotificationEventType.suspension))
        await dispatcher.drain()

    assert dispatcher.pending == 0
    assert "suspension" in caplog.text


@pytest.mark.asyncio
async def test_each_event_is_sent_once():
    notifier = RecordingNotifier()
    dispatcher = NotificationDispatcher(notifier)
    events = [make_event() for _ in range(3)]

    for event in events:
        dispatcher.dispatch(event)
    await dispatcher.drain()

    assert sorted(e.tenant_id for e in notifier.sent) == sorted(e.tenant_id for e in events)


def test_dispatch_without_running_loop_drops_event(caplog):
    dispatcher = NotificationDispatcher(RecordingNotifier())

    with caplog.at_level(logging.ERROR):
        dispatcher.dispatch(make_event())

    assert dispatcher.pending == 0
    assert "dropped" in caplog.text
