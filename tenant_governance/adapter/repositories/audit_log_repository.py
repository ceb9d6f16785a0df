from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.app.repositories.audit_log_repository import IAuditLogRepository
from tenant_governance.domain.entities import AuditAction, AuditLogEntry
from tenant_governance.domain.exceptions import PersistenceError


class AuditLogRepository(IAuditLogRepository):
    """AuditLogEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, entry: AuditLogEntry) -> int:
        """Insert the entry (immutable afterwards) and return its sequence"""
        try:
            self.session.add(entry)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("audit append", str(exc)) from exc
        return entry.sequence

    async def get_by_sequence(self, sequence: int) -> Optional[AuditLogEntry]:
        stmt = (
            select(AuditLogEntry)
            .where(AuditLogEntry.sequence == sequence)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("audit read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def search(
        self,
        action: Optional[AuditAction] = None,
        text: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        target_id: Optional[str] = None,
    ) -> List[AuditLogEntry]:
        stmt = select(AuditLogEntry).execution_options(populate_existing=True)

        if action is not None:
            stmt = stmt.where(AuditLogEntry.action == action)
        if target_id:
            stmt = stmt.where(AuditLogEntry.target_id == target_id)
        if text:
            pattern = f"%{text}%"
            stmt = stmt.where(
                or_(
                    AuditLogEntry.target_name.ilike(pattern),
                    AuditLogEntry.actor_name.ilike(pattern),
                    AuditLogEntry.details.ilike(pattern),
                )
            )
        if start is not None:
            stmt = stmt.where(AuditLogEntry.timestamp >= start)
        if end is not None:
            stmt = stmt.where(AuditLogEntry.timestamp <= end)

        # Newest first; sequence breaks ties between identical timestamps
        stmt = stmt.order_by(AuditLogEntry.timestamp.desc(), AuditLogEntry.sequence.desc())

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("audit query", str(exc)) from exc
        return list(result.scalars().all())
