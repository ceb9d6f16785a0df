from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.app.repositories.tenant_repository import ITenantRepository
from tenant_governance.domain.entities import Tenant, TenantStatus
from tenant_governance.domain.exceptions import PersistenceError


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID, bypassing any stale copy in the identity map"""
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant read", str(exc)) from exc
        return result.scalar_one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        try:
            self.session.add(tenant)
            await self.session.flush()
            await self.session.refresh(tenant)
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant create", str(exc)) from exc
        return tenant

    async def update_profile(self, tenant: Tenant) -> Tenant:
        """Persist non-status fields of an existing tenant"""
        try:
            self.session.add(tenant)
            await self.session.flush()
            await self.session.refresh(tenant)
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant update", str(exc)) from exc
        return tenant

    async def compare_and_set(
        self, tenant_id: UUID, expected_version: int, values: Dict[str, Any]
    ) -> bool:
        """Conditional UPDATE on (id, version); one row changed means we won"""
        stmt = (
            update(Tenant)
            .where(Tenant.id == tenant_id, Tenant.version == expected_version)
            .values(**values, version=expected_version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant status update", str(exc)) from exc
        return result.rowcount == 1

    async def lock(self, tenant_id: UUID) -> bool:
        """
        No-op UPDATE of the row: a row lock on PostgreSQL, the database write
        lock on SQLite. Either way it is held until commit or rollback.
        """
        stmt = (
            update(Tenant)
            .where(Tenant.id == tenant_id)
            .values(version=Tenant.version)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant lock", str(exc)) from exc
        return result.rowcount == 1

    async def get_expired_suspensions(self, now: datetime) -> List[Tenant]:
        stmt = select(Tenant).where(
            Tenant.status == TenantStatus.suspended,
            Tenant.suspension_expires_at.isnot(None),
            Tenant.suspension_expires_at <= now,
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("expired suspension scan", str(exc)) from exc
        return list(result.scalars().all())

    async def delete(self, tenant_id: UUID) -> int:
        try:
            result = await self.session.execute(delete(Tenant).where(Tenant.id == tenant_id))
        except SQLAlchemyError as exc:
            raise PersistenceError("tenant delete", str(exc)) from exc
        return result.rowcount
