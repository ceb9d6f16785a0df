"""
AuditLogEntry Entity

Append-only record of an administrative action.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AuditAction, AuditTargetType


class AuditLogEntry(SQLModel, table=True):
    """
    AuditLogEntry entity - immutable log of administrative actions.

    Business Rules:
    - Immutable (never updated or deleted)
    - target_name and actor_name are snapshots taken at write time, so the
      entry stays legible after the target or actor is deleted
    - target_id and actor_id are plain strings, never foreign keys
    - sequence is assigned by the store and is the entry's public id
    """

    __tablename__ = "audit_log_entries"

    sequence: Optional[int] = Field(default=None, primary_key=True)

    action: AuditAction = Field(nullable=False)
    target_type: AuditTargetType = Field(default=AuditTargetType.tenant)
    target_id: str = Field(max_length=64, index=True)
    target_name: str = Field(max_length=255)

    actor_id: str = Field(max_length=64, index=True)
    actor_name: str = Field(max_length=255)

    details: str = Field(default="", max_length=4000)
    ip_address: Optional[str] = Field(default=None, max_length=45)

    timestamp: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_audit_action_timestamp", "action", "timestamp"),
        Index("idx_audit_timestamp", "timestamp"),
    )
