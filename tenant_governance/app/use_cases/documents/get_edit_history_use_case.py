"""
Use Case: Get Edit History

Returns every edit of a document, oldest first. Works for documents that were
deleted since; a document that was never edited has an empty history.
"""

import logging
from uuid import UUID

from tenant_governance.app.services.edit_history_ledger import EditHistoryLedger
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.entities import Actor
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import EditHistoryResponse

logger = logging.getLogger(__name__)


class GetEditHistoryUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, document_id: UUID, actor: Actor) -> Result[EditHistoryResponse]:
        """
        Errors:
            - PERSISTENCE_ERROR: history store unavailable
        """
        async with self.uow:
            try:
                entries = await EditHistoryLedger(self.uow).history(document_id)
            except PersistenceError as exc:
                logger.error("Edit history of %s unavailable: %s", document_id, exc)
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Edit history is unavailable", reason=str(exc))
                )

        # Tenant users only see their own tenant's entries
        if not actor.is_superadmin:
            entries = [e for e in entries if str(e.tenant_id) == actor.tenant_id]

        return Return.ok(EditHistoryResponse(document_id=str(document_id), entries=entries))
