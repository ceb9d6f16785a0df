"""Document edits and their field-level history."""

from .dtos import (
    EditDocumentResponse,
    EditHistoryResponse,
    InvoicePatch,
    LineItem,
    SalesOrderPatch,
)
from .edit_document_use_case import EditDocumentUseCase, line_items_total
from .get_edit_history_use_case import GetEditHistoryUseCase

__all__ = [
    "EditDocumentUseCase",
    "GetEditHistoryUseCase",
    "EditDocumentResponse",
    "EditHistoryResponse",
    "InvoicePatch",
    "LineItem",
    "SalesOrderPatch",
    "line_items_total",
]
