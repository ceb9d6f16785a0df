"""
Use Case: Delete Tenant (cascade)

Permanently removes a tenant and everything that belongs to it: users, sales
orders and invoices. Requires the typed "DELETE" confirmation. The cascade and
its single audit entry commit together or not at all. Audit and edit history
entries are kept; history of deleted documents stays retrievable by id.
"""

import asyncio
import logging
from typing import Optional
from uuid import UUID

from tenant_governance.app.services.audit_ledger import AuditLedger
from tenant_governance.app.services.confirmation_guard import (
    CONFIRMATION_TOKEN,
    ConfirmationGuard,
)
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.entities import Actor, AuditAction
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import DeletionSummary

logger = logging.getLogger(__name__)

DEFAULT_CASCADE_TIMEOUT_SECONDS = 30.0


class DeleteTenantUseCase:
    """
    Business Logic:
    1. Check the confirmation token (CONFIRMATION_MISMATCH, nothing touched)
    2. Load tenant
    3. Delete invoices, sales orders, users, then the tenant row
    4. Record one delete_tenant entry with the removal counts
    5. Commit everything at once

    Any store failure, or steps 2-4 running past timeout_seconds, rolls back
    the whole cascade and reports PARTIAL_FAILURE; the tenant is never
    half-deleted. The commit itself is not cut short by the deadline.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        timeout_seconds: float = DEFAULT_CASCADE_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.timeout_seconds = timeout_seconds

    async def execute(
        self,
        tenant_id: UUID,
        confirmation: Optional[str],
        reason: Optional[str],
        actor: Actor,
    ) -> Result[DeletionSummary]:
        """
        Execute delete tenant use case.

        Args:
            tenant_id: UUID of tenant to delete
            confirmation: Must be exactly "DELETE"
            reason: Justification recorded on the audit entry
            actor: Administrator performing the deletion

        Returns:
            Result[DeletionSummary] with counts of removed records

        Errors:
            - CONFIRMATION_MISMATCH: confirmation is not "DELETE"
            - TENANT_NOT_FOUND: Tenant does not exist
            - PARTIAL_FAILURE: cascade failed or timed out, nothing was deleted
        """
        confirmed = ConfirmationGuard.authorize(CONFIRMATION_TOKEN, confirmation)
        if confirmed.is_err():
            return confirmed

        async with self.uow:
            try:
                # 2-4 bounded by the deadline; nothing is durable yet
                async with asyncio.timeout(self.timeout_seconds):
                    staged = await self._stage(tenant_id, reason, actor)
            except TimeoutError:
                await self.uow.rollback()
                logger.error(
                    "Cascade delete of tenant %s exceeded %ss, rolled back",
                    tenant_id,
                    self.timeout_seconds,
                )
                return Return.err(
                    Error(
                        "PARTIAL_FAILURE",
                        "Tenant deletion did not finish in time; nothing was deleted",
                        reason=f"timeout after {self.timeout_seconds}s",
                    )
                )
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._rolled_back(tenant_id, exc)

            if staged.is_err():
                return staged

            # 5. Commit outside the deadline so the outcome is never misreported
            try:
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._rolled_back(tenant_id, exc)

        summary = staged.value
        logger.info("Deleted tenant %s (%s): %s", tenant_id, summary.target_name, summary.removed)
        return staged

    async def _stage(
        self, tenant_id: UUID, reason: Optional[str], actor: Actor
    ) -> Result[DeletionSummary]:
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if not tenant:
            return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))
        tenant_name = tenant.name

        removed = {
            "invoices": await self.uow.invoices.delete_by_tenant(tenant_id),
            "sales_orders": await self.uow.sales_orders.delete_by_tenant(tenant_id),
            "users": await self.uow.users.delete_by_tenant(tenant_id),
        }
        removed["tenants"] = await self.uow.tenants.delete(tenant_id)

        scope = ", ".join(f"{count} {name}" for name, count in removed.items())
        details = f"{reason.strip()}; removed {scope}" if reason else f"Removed {scope}"

        ledger = AuditLedger(self.uow)
        sequence = await ledger.record(
            ledger.entry(
                AuditAction.delete_tenant,
                actor,
                target_id=str(tenant_id),
                target_name=tenant_name,
                details=details,
            )
        )
        return Return.ok(
            DeletionSummary(
                status="deleted",
                target_id=str(tenant_id),
                target_name=tenant_name,
                removed=removed,
                audit_sequence=sequence,
            )
        )

    @staticmethod
    def _rolled_back(tenant_id: UUID, exc: PersistenceError) -> Result:
        logger.error("Cascade delete of tenant %s failed: %s", tenant_id, exc)
        return Return.err(
            Error(
                "PARTIAL_FAILURE",
                "Tenant deletion failed partway and was rolled back; nothing was deleted",
                reason=str(exc),
            )
        )
