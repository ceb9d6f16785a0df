from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from sqlmodel import SQLModel

DocumentT = TypeVar("DocumentT", bound=SQLModel)


class IDocumentRepository(ABC, Generic[DocumentT]):
    """Business document repository interface (sales orders, invoices)"""

    @abstractmethod
    async def get_by_id(self, document_id: UUID) -> Optional[DocumentT]:
        """Get document by ID"""
        pass

    @abstractmethod
    async def create(self, document: DocumentT) -> DocumentT:
        """Create a new document"""
        pass

    @abstractmethod
    async def update(self, document: DocumentT) -> DocumentT:
        """Update existing document"""
        pass

    @abstractmethod
    async def delete_by_tenant(self, tenant_id: UUID) -> int:
        """Hard-delete every document of a tenant, returns rows removed"""
        pass
