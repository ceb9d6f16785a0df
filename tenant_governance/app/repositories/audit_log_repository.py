from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from tenant_governance.domain.entities import AuditAction, AuditLogEntry


class IAuditLogRepository(ABC):
    """
    AuditLogEntry repository interface - application layer

    Append and read only. There is deliberately no update or delete.
    """

    @abstractmethod
    async def append(self, entry: AuditLogEntry) -> int:
        """Append an entry and return its assigned sequence"""
        pass

    @abstractmethod
    async def get_by_sequence(self, sequence: int) -> Optional[AuditLogEntry]:
        """Get one entry by its sequence"""
        pass

    @abstractmethod
    async def search(
        self,
        action: Optional[AuditAction] = None,
        text: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        target_id: Optional[str] = None,
    ) -> List[AuditLogEntry]:
        """Entries matching every given filter, newest first"""
        pass
