from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenant_governance.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def count_active_admins(self, tenant_id: UUID) -> int:
        """Count active users with the admin role in a tenant"""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> int:
        """Hard-delete one user, returns rows removed"""
        pass

    @abstractmethod
    async def delete_by_tenant(self, tenant_id: UUID) -> int:
        """Hard-delete every user of a tenant, returns rows removed"""
        pass
