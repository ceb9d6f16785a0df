from abc import ABC, abstractmethod

from tenant_governance.app.repositories.audit_log_repository import IAuditLogRepository
from tenant_governance.app.repositories.document_repository import IDocumentRepository
from tenant_governance.app.repositories.edit_history_repository import (
    IEditHistoryRepository,
)
from tenant_governance.app.repositories.tenant_repository import ITenantRepository
from tenant_governance.app.repositories.user_repository import IUserRepository
from tenant_governance.domain.entities import Invoice, SalesOrder


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    users: IUserRepository
    sales_orders: IDocumentRepository[SalesOrder]
    invoices: IDocumentRepository[Invoice]
    audit_entries: IAuditLogRepository
    edit_history: IEditHistoryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        """Make all pending writes durable; raises PersistenceError on failure"""
        pass

    @abstractmethod
    async def rollback(self):
        pass
