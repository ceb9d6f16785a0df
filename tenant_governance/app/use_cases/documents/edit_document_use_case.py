"""
Use Case: Edit Document

Applies a partial edit to a sales order or invoice and appends the field-level
diff to the document's edit history in the same transaction.
"""

import logging
from typing import Any, Dict, Union
from uuid import UUID

from tenant_governance.app.repositories.document_repository import IDocumentRepository
from tenant_governance.app.services.edit_history_ledger import EditHistoryLedger
from tenant_governance.app.services.keyed_lock import KeyedLock, document_locks
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import Actor, DocumentType
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import EditDocumentResponse, InvoicePatch, SalesOrderPatch

logger = logging.getLogger(__name__)

TRACKED_FIELDS = {
    DocumentType.sales_order: (
        "customer_name",
        "customer_phone",
        "status",
        "items",
        "subtotal",
        "total",
    ),
    DocumentType.invoice: ("customer_name", "status", "due_date", "notes", "items", "total"),
}

STRUCTURAL_FIELDS = ("items",)


def line_items_total(items: list) -> float:
    return round(sum(item["quantity"] * item["unit_price"] for item in items), 2)


class EditDocumentUseCase:
    """
    Business Logic:
    1. Take the document's ordering lock before reading it
    2. Load the document, scoped to the caller's tenant
    3. Apply the patch and recompute totals when items change
    4. Diff old and new values; nothing changed means no history entry
    5. Save the document and append the history entry, commit once

    Edits of one document are therefore recorded in the order they commit.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_type: DocumentType,
        locks: KeyedLock = document_locks,
    ):
        self.uow = uow
        self.document_type = document_type
        self.ledger = EditHistoryLedger(uow, locks)

    def _repository(self) -> IDocumentRepository:
        if self.document_type is DocumentType.sales_order:
            return self.uow.sales_orders
        return self.uow.invoices

    async def execute(
        self,
        document_id: UUID,
        patch: Union[SalesOrderPatch, InvoicePatch],
        actor: Actor,
    ) -> Result[EditDocumentResponse]:
        """
        Errors:
            - DOCUMENT_NOT_FOUND: No such document in the caller's tenant
            - PERSISTENCE_ERROR: Store failed, neither edit nor history saved
        """
        async with self.ledger.serialized(document_id):
            async with self.uow:
                repository = self._repository()
                document = await repository.get_by_id(document_id)
                if not document or not self._visible_to(document, actor):
                    return Return.err(
                        Error(
                            "DOCUMENT_NOT_FOUND",
                            f"{self.document_type.value.replace('_', ' ').capitalize()} not found",
                        )
                    )

                fields = TRACKED_FIELDS[self.document_type]
                before = {field: getattr(document, field) for field in fields}
                after = self._apply(before, patch)

                changes = self.ledger.diff(before, after, structural_fields=STRUCTURAL_FIELDS)
                if not changes:
                    return Return.ok(
                        EditDocumentResponse(
                            document_id=str(document.id),
                            document_type=self.document_type.value,
                            changed_fields=[],
                        )
                    )

                for change in changes:
                    setattr(document, change.field, after[change.field])
                document.updated_at = utcnow()

                try:
                    document = await repository.update(document)
                    record = await self.ledger.append(
                        self.document_type,
                        document.id,
                        document.tenant_id,
                        actor,
                        changes,
                    )
                    await self.uow.commit()
                except PersistenceError as exc:
                    await self.uow.rollback()
                    logger.error(
                        "Edit of %s %s aborted: %s", self.document_type.value, document_id, exc
                    )
                    return Return.err(
                        Error(
                            "PERSISTENCE_ERROR",
                            "Document was not changed",
                            reason=str(exc),
                        )
                    )

                return Return.ok(
                    EditDocumentResponse(
                        document_id=str(document_id),
                        document_type=self.document_type.value,
                        changed_fields=[change.field for change in changes],
                        entry=record,
                    )
                )

    @staticmethod
    def _visible_to(document, actor: Actor) -> bool:
        if actor.is_superadmin:
            return True
        return actor.tenant_id is not None and str(document.tenant_id) == actor.tenant_id

    def _apply(self, before: Dict[str, Any], patch) -> Dict[str, Any]:
        after = dict(before)
        requested = patch.model_dump(exclude_none=True)
        after.update({k: v for k, v in requested.items() if k in after})

        if "items" in requested:
            amount = line_items_total(requested["items"])
            if "subtotal" in after:
                after["subtotal"] = amount
            after["total"] = amount
        return after
