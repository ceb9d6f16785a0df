from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from tenant_governance.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID, always re-read from the store"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update_profile(self, tenant: Tenant) -> Tenant:
        """Persist non-status fields of an existing tenant"""
        pass

    @abstractmethod
    async def compare_and_set(
        self, tenant_id: UUID, expected_version: int, values: Dict[str, Any]
    ) -> bool:
        """
        Apply values and bump version only if the stored version still equals
        expected_version. Returns False when another writer got there first.
        """
        pass

    @abstractmethod
    async def lock(self, tenant_id: UUID) -> bool:
        """
        Take the tenant row's write lock for the rest of the transaction, so
        writers in other processes queue behind us. False if the row is gone.
        """
        pass

    @abstractmethod
    async def get_expired_suspensions(self, now: datetime) -> List[Tenant]:
        """Suspended tenants whose suspension_expires_at is at or before now"""
        pass

    @abstractmethod
    async def delete(self, tenant_id: UUID) -> int:
        """Hard-delete the tenant row, returns rows removed"""
        pass
