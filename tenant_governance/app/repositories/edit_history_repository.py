from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from tenant_governance.domain.entities import EditHistoryEntry


class IEditHistoryRepository(ABC):
    """EditHistoryEntry repository interface - append and read only"""

    @abstractmethod
    async def append(self, entry: EditHistoryEntry) -> EditHistoryEntry:
        """Append an entry"""
        pass

    @abstractmethod
    async def get_latest(self, document_id: UUID) -> Optional[EditHistoryEntry]:
        """Most recent entry of a document, None if it was never edited"""
        pass

    @abstractmethod
    async def list_by_document(self, document_id: UUID) -> List[EditHistoryEntry]:
        """All entries of a document in sequence order"""
        pass
