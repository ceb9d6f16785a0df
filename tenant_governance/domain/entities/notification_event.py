"""
NotificationEvent Value Object

What the lifecycle hands to the external notifier after a transition.
"""

from typing import Any, Dict
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .enums import NotificationEventType


class NotificationEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: NotificationEventType
    tenant_id: UUID
    payload: Dict[str, Any] = Field(default_factory=dict)
