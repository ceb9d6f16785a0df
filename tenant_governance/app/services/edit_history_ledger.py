"""
Edit history ledger - per-document, append-only field-level diffs.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, AsyncContextManager, Iterable, List, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from tenant_governance.app.services.keyed_lock import KeyedLock, document_locks
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import Actor, DocumentType, EditHistoryEntry

logger = logging.getLogger(__name__)


class FieldChange(BaseModel):
    """One changed top-level field; structural fields carry only a marker"""

    model_config = ConfigDict(frozen=True)

    field: str
    old_value: Any = None
    new_value: Any = None
    marker: Optional[str] = None


class EditHistoryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    document_type: DocumentType
    document_id: UUID
    tenant_id: UUID
    sequence: int
    edited_by: str
    edited_by_name: str
    edited_at: datetime
    changes: List[FieldChange]


def _is_structural(value: Any) -> bool:
    return isinstance(value, (list, dict, tuple, set))


class EditHistoryLedger:
    """
    Per-document edit history.

    Business Rules:
    - Entries of one document are appended in commit order; callers hold
      serialized(document_id) from reading the document until commit
    - Different documents never wait on each other
    - edited_at strictly increases per document, history is never rewritten
    - history() works for deleted documents
    """

    def __init__(self, uow: UnitOfWork, locks: KeyedLock = document_locks):
        self.uow = uow
        self.locks = locks

    @staticmethod
    def diff(
        old_record: Mapping[str, Any],
        new_record: Mapping[str, Any],
        structural_fields: Iterable[str] = (),
    ) -> List[FieldChange]:
        """
        Ordered changes between two flat records.

        Fields keep old_record's order, then fields only present in
        new_record. Designated structural fields and nested collections
        produce a single "<field> modified" marker instead of their values.
        """
        structural = set(structural_fields)
        fields = list(old_record) + [f for f in new_record if f not in old_record]

        changes: List[FieldChange] = []
        for field in fields:
            old_value = old_record.get(field)
            new_value = new_record.get(field)
            if old_value == new_value:
                continue
            if field in structural or _is_structural(old_value) or _is_structural(new_value):
                changes.append(FieldChange(field=field, marker=f"{field} modified"))
            else:
                changes.append(
                    FieldChange(field=field, old_value=old_value, new_value=new_value)
                )
        return changes

    def serialized(self, document_id: UUID) -> AsyncContextManager[None]:
        """Per-document ordering lock"""
        return self.locks.hold(str(document_id))

    async def append(
        self,
        document_type: DocumentType,
        document_id: UUID,
        tenant_id: UUID,
        actor: Actor,
        changes: List[FieldChange],
        timestamp: Optional[datetime] = None,
    ) -> EditHistoryRecord:
        """
        Append one entry in the caller's unit of work.

        Must run inside serialized(document_id); the caller commits.
        Raises PersistenceError.
        """
        latest = await self.uow.edit_history.get_latest(document_id)
        edited_at = timestamp or utcnow()
        sequence = 1
        if latest is not None:
            sequence = latest.sequence + 1
            if edited_at <= latest.edited_at:
                edited_at = latest.edited_at + timedelta(microseconds=1)

        entry = EditHistoryEntry(
            document_type=document_type,
            document_id=document_id,
            tenant_id=tenant_id,
            sequence=sequence,
            edited_by=actor.id,
            edited_by_name=actor.name,
            edited_at=edited_at,
            changes=[change.model_dump(mode="json") for change in changes],
        )
        entry = await self.uow.edit_history.append(entry)
        logger.info(
            "Edit #%d on %s %s by %s (%d field(s))",
            sequence,
            document_type.value,
            document_id,
            actor.id,
            len(changes),
        )
        return EditHistoryRecord.model_validate(entry)

    async def history(self, document_id: UUID) -> List[EditHistoryRecord]:
        """Full ordered history; empty when the document was never edited"""
        entries = await self.uow.edit_history.list_by_document(document_id)
        return [EditHistoryRecord.model_validate(entry) for entry in entries]
