"""
Tenant Entity

Represents a business registered on the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - a business and its standing on the platform.

    Business Rules:
    - Created in pending_approval
    - status only changes through a validated lifecycle transition
    - version increments on every status change (optimistic concurrency)
    - suspension_expires_at is only meaningful while suspended
    - Destroyed only through confirmed cascade deletion
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255, index=True)
    phone: Optional[str] = Field(default=None, max_length=50)

    status: TenantStatus = Field(default=TenantStatus.pending_approval)
    status_reason: Optional[str] = Field(default=None, max_length=1000)
    status_changed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    status_changed_by: Optional[str] = Field(default=None, max_length=64)
    suspension_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    version: int = Field(default=1, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_status", "status"),
        Index("idx_tenant_suspension_expiry", "status", "suspension_expires_at"),
    )
