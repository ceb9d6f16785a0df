"""
SalesOrder Entity

Mutable business document whose edits are tracked in the edit history.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from ..base import utcnow


class SalesOrder(SQLModel, table=True):
    """
    SalesOrder entity.

    Business Rules:
    - items is a list of {product_name, quantity, unit_price}
    - subtotal and total are derived from items
    """

    __tablename__ = "sales_orders"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    order_number: str = Field(max_length=50)
    customer_name: str = Field(max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=50)
    status: str = Field(default="pending", max_length=30)
    items: list = Field(default_factory=list, sa_column=Column(JSON))
    subtotal: float = Field(default=0.0)
    total: float = Field(default=0.0)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
