from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.app.repositories.user_repository import IUserRepository
from tenant_governance.domain.entities import User, UserRole, UserStatus
from tenant_governance.domain.exceptions import PersistenceError


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, bypassing any stale copy in the identity map"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("user read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        stmt = select(User).where(User.email == email)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("user read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except SQLAlchemyError as exc:
            raise PersistenceError("user create", str(exc)) from exc
        return user

    async def count_active_admins(self, tenant_id: UUID) -> int:
        stmt = select(func.count()).select_from(User).where(
            User.tenant_id == tenant_id,
            User.role == UserRole.admin,
            User.status == UserStatus.active,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("admin count", str(exc)) from exc
        return result.scalar_one()

    async def delete(self, user_id: UUID) -> int:
        try:
            result = await self.session.execute(delete(User).where(User.id == user_id))
        except SQLAlchemyError as exc:
            raise PersistenceError("user delete", str(exc)) from exc
        return result.rowcount

    async def delete_by_tenant(self, tenant_id: UUID) -> int:
        try:
            result = await self.session.execute(
                delete(User).where(User.tenant_id == tenant_id)
            )
        except SQLAlchemyError as exc:
            raise PersistenceError("user cascade delete", str(exc)) from exc
        return result.rowcount
