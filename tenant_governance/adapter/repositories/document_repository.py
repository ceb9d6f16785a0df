from typing import Generic, Optional, Type
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.app.repositories.document_repository import (
    DocumentT,
    IDocumentRepository,
)
from tenant_governance.domain.exceptions import PersistenceError


class DocumentRepository(IDocumentRepository[DocumentT], Generic[DocumentT]):
    """Business document repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession, model: Type[DocumentT]):
        self.session = session
        self.model = model

    async def get_by_id(self, document_id: UUID) -> Optional[DocumentT]:
        """Get document by ID"""
        stmt = (
            select(self.model)
            .where(self.model.id == document_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"{self.model.__tablename__} read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def create(self, document: DocumentT) -> DocumentT:
        """Create a new document"""
        try:
            self.session.add(document)
            await self.session.flush()
            await self.session.refresh(document)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"{self.model.__tablename__} create", str(exc)) from exc
        return document

    async def update(self, document: DocumentT) -> DocumentT:
        """Update existing document"""
        try:
            self.session.add(document)
            await self.session.flush()
            await self.session.refresh(document)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"{self.model.__tablename__} update", str(exc)) from exc
        return document

    async def delete_by_tenant(self, tenant_id: UUID) -> int:
        try:
            result = await self.session.execute(
                delete(self.model).where(self.model.tenant_id == tenant_id)
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"{self.model.__tablename__} cascade delete", str(exc)
            ) from exc
        return result.rowcount
