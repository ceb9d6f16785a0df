from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.app.repositories.edit_history_repository import (
    IEditHistoryRepository,
)
from tenant_governance.domain.entities import EditHistoryEntry
from tenant_governance.domain.exceptions import PersistenceError


class EditHistoryRepository(IEditHistoryRepository):
    """EditHistoryEntry repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, entry: EditHistoryEntry) -> EditHistoryEntry:
        try:
            self.session.add(entry)
            await self.session.flush()
            await self.session.refresh(entry)
        except SQLAlchemyError as exc:
            raise PersistenceError("edit history append", str(exc)) from exc
        return entry

    async def get_latest(self, document_id: UUID) -> Optional[EditHistoryEntry]:
        stmt = (
            select(EditHistoryEntry)
            .where(EditHistoryEntry.document_id == document_id)
            .order_by(EditHistoryEntry.sequence.desc())
            .limit(1)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("edit history read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def list_by_document(self, document_id: UUID) -> List[EditHistoryEntry]:
        stmt = (
            select(EditHistoryEntry)
            .where(EditHistoryEntry.document_id == document_id)
            .order_by(EditHistoryEntry.sequence.asc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("edit history read", str(exc)) from exc
        return list(result.scalars().all())
