"""
EditHistoryEntry Entity

Append-only field-level diff of one edit to a business document.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import DocumentType


class EditHistoryEntry(SQLModel, table=True):
    """
    EditHistoryEntry entity.

    Business Rules:
    - document_id is not a foreign key: history survives document deletion
    - sequence and edited_at strictly increase per document
    - changes is an ordered list of {field, old_value, new_value, marker}
    """

    __tablename__ = "edit_history_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_type: DocumentType = Field(nullable=False)
    document_id: UUID = Field(nullable=False)
    tenant_id: UUID = Field(nullable=False, index=True)
    sequence: int = Field(nullable=False)

    edited_by: str = Field(max_length=64)
    edited_by_name: str = Field(max_length=255)
    edited_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))

    changes: list = Field(default_factory=list, sa_column=Column(JSON))

    __table_args__ = (
        Index("idx_edit_history_document_sequence", "document_id", "sequence", unique=True),
    )
