"""
Document Edit Use Case DTOs
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from tenant_governance.app.services.edit_history_ledger import EditHistoryRecord


class LineItem(BaseModel):
    product_name: str = Field(min_length=1, max_length=255)
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)


class SalesOrderPatch(BaseModel):
    """Editable sales order fields; omitted fields are left unchanged"""

    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=50)
    status: Optional[str] = Field(default=None, min_length=1, max_length=30)
    items: Optional[List[LineItem]] = Field(default=None, min_length=1)


class InvoicePatch(BaseModel):
    """Editable invoice fields; omitted fields are left unchanged"""

    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    status: Optional[str] = Field(default=None, min_length=1, max_length=30)
    due_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    items: Optional[List[LineItem]] = Field(default=None, min_length=1)


class EditDocumentResponse(BaseModel):
    document_id: str
    document_type: str
    changed_fields: List[str]
    entry: Optional[EditHistoryRecord] = None


class EditHistoryResponse(BaseModel):
    document_id: str
    entries: List[EditHistoryRecord]
