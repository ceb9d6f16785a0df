"""
Invoice Entity

Mutable business document whose edits are tracked in the edit history.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from ..base import utcnow


class Invoice(SQLModel, table=True):
    """Invoice entity - items and total follow the same rules as SalesOrder"""

    __tablename__ = "invoices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    invoice_number: str = Field(max_length=50)
    customer_name: str = Field(max_length=255)
    status: str = Field(default="unpaid", max_length=30)
    due_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    items: list = Field(default_factory=list, sa_column=Column(JSON))
    total: float = Field(default=0.0)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
