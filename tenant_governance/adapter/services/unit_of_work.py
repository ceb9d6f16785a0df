from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_governance.adapter.repositories.audit_log_repository import AuditLogRepository
from tenant_governance.adapter.repositories.document_repository import DocumentRepository
from tenant_governance.adapter.repositories.edit_history_repository import (
    EditHistoryRepository,
)
from tenant_governance.adapter.repositories.tenant_repository import TenantRepository
from tenant_governance.adapter.repositories.user_repository import UserRepository
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.entities import (
    AuditLogEntry,
    EditHistoryEntry,
    Invoice,
    SalesOrder,
)
from tenant_governance.domain.exceptions import PersistenceError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.users = UserRepository(self.session)
        self.sales_orders = DocumentRepository(self.session, SalesOrder)
        self.invoices = DocumentRepository(self.session, Invoice)
        self.audit_entries = AuditLogRepository(self.session)
        self.edit_history = EditHistoryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("commit", str(exc)) from exc

    async def rollback(self):
        await self.session.rollback()


def _reject_ledger_mutation(mapper, connection, target):
    raise PersistenceError(
        f"{type(target).__tablename__} write",
        "ledger entries are append-only",
    )


# Ledger rows may be inserted, never updated or deleted through the ORM
for _ledger_model in (AuditLogEntry, EditHistoryEntry):
    event.listen(_ledger_model, "before_update", _reject_ledger_mutation)
    event.listen(_ledger_model, "before_delete", _reject_ledger_mutation)
