"""
Audit ledger - append-only record of administrative actions.
"""

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import as_naive_utc, utcnow
from tenant_governance.domain.entities import (
    Actor,
    AuditAction,
    AuditLogEntry,
    AuditTargetType,
)

logger = logging.getLogger(__name__)


class AuditRecord(BaseModel):
    """Read-only copy of a stored entry; changing it never touches the ledger"""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    sequence: int
    action: AuditAction
    target_type: AuditTargetType
    target_id: str
    target_name: str
    actor_id: str
    actor_name: str
    details: str
    ip_address: Optional[str]
    timestamp: datetime


class AuditQuery(BaseModel):
    """Filters for AuditLedger.query; all optional and combined with AND"""

    action: Optional[AuditAction] = None
    search: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    target_id: Optional[str] = None


class AuditLedger:
    """
    Append-only audit ledger.

    Business Rules:
    - record() is synchronous with respect to its caller: the entry is written
      in the caller's unit of work and becomes durable with its commit
    - Store failures surface as PersistenceError so the caller can abort
    - There is no update or delete operation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @staticmethod
    def entry(
        action: AuditAction,
        actor: Actor,
        target_id: str,
        target_name: str,
        details: str = "",
        target_type: AuditTargetType = AuditTargetType.tenant,
    ) -> AuditLogEntry:
        """Build an entry, snapshotting actor and target names at write time"""
        return AuditLogEntry(
            action=action,
            target_type=target_type,
            target_id=str(target_id),
            target_name=target_name,
            actor_id=actor.id,
            actor_name=actor.name,
            details=details or "",
            ip_address=actor.ip_address,
            timestamp=utcnow(),
        )

    async def record(self, entry: AuditLogEntry) -> int:
        """Append an entry; returns its sequence. Raises PersistenceError."""
        sequence = await self.uow.audit_entries.append(entry)
        logger.info(
            "Audit #%s %s on %s %s by %s",
            sequence,
            entry.action.value,
            entry.target_type.value,
            entry.target_id,
            entry.actor_id,
        )
        return sequence

    async def get(self, sequence: int) -> Optional[AuditRecord]:
        entry = await self.uow.audit_entries.get_by_sequence(sequence)
        return AuditRecord.model_validate(entry) if entry else None

    async def query(self, filters: Optional[AuditQuery] = None) -> List[AuditRecord]:
        """
        Entries matching all filters, newest first.

        search matches target_name, actor_name and details case-insensitively.
        No match is an empty list. No limit is applied here.
        """
        filters = filters or AuditQuery()
        search = filters.search.strip() if filters.search else None
        entries = await self.uow.audit_entries.search(
            action=filters.action,
            text=search or None,
            start=as_naive_utc(filters.start),
            end=as_naive_utc(filters.end),
            target_id=filters.target_id,
        )
        return [AuditRecord.model_validate(entry) for entry in entries]
