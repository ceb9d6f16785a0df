"""
Use Case: Delete User

Permanently removes one user after the typed "DELETE" confirmation. Refuses
to remove the last administrator of an active tenant.
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
from tenant_governance.domain.entities import (
    Actor,
    AuditAction,
    AuditTargetType,
    TenantStatus,
    UserRole,
    UserStatus,
)
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .delete_tenant_use_case import DEFAULT_CASCADE_TIMEOUT_SECONDS
from .dtos import DeletionSummary

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Business Logic:
    1. Check the confirmation token
    2. Find the user's tenant, then lock the tenant row
    3. Re-read the user and count active admins under that lock
    4. Delete the user and record one delete_user entry
    5. Commit (outside the deadline)

    The tenant row lock is held by the store, so deletes running in other
    workers queue behind it and count the admins that are actually left.
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
        user_id: UUID,
        confirmation: Optional[str],
        reason: Optional[str],
        actor: Actor,
    ) -> Result[DeletionSummary]:
        """
        Errors:
            - CONFIRMATION_MISMATCH: confirmation is not "DELETE"
            - USER_NOT_FOUND: User does not exist
            - LAST_ADMIN_PROTECTION: user is the only admin of an active tenant
            - PARTIAL_FAILURE: delete failed or timed out, nothing was deleted
        """
        confirmed = ConfirmationGuard.authorize(CONFIRMATION_TOKEN, confirmation)
        if confirmed.is_err():
            return confirmed

        async with self.uow:
            try:
                async with asyncio.timeout(self.timeout_seconds):
                    staged = await self._stage(user_id, reason, actor)
            except TimeoutError:
                await self.uow.rollback()
                logger.error("Delete of user %s exceeded %ss", user_id, self.timeout_seconds)
                return Return.err(
                    Error(
                        "PARTIAL_FAILURE",
                        "User deletion did not finish in time; nothing was deleted",
                        reason=f"timeout after {self.timeout_seconds}s",
                    )
                )
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._rolled_back(user_id, exc)

            if staged.is_err():
                # Releases the tenant lock
                await self.uow.rollback()
                return staged

            try:
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._rolled_back(user_id, exc)

        logger.info("Deleted user %s (%s)", user_id, staged.value.target_name)
        return staged

    async def _stage(
        self, user_id: UUID, reason: Optional[str], actor: Actor
    ) -> Result[DeletionSummary]:
        user = await self.uow.users.get_by_id(user_id)
        if not user:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))
        tenant_id = user.tenant_id

        await self.uow.tenants.lock(tenant_id)

        # Re-read under the tenant lock
        user = await self.uow.users.get_by_id(user_id)
        if not user:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))
        tenant = await self.uow.tenants.get_by_id(tenant_id)

        is_active_admin = user.role == UserRole.admin and user.status == UserStatus.active
        if (
            is_active_admin
            and tenant is not None
            and tenant.status == TenantStatus.active
            and await self.uow.users.count_active_admins(tenant_id) <= 1
        ):
            return Return.err(
                Error(
                    "LAST_ADMIN_PROTECTION",
                    "Cannot delete the last administrator of an active tenant",
                    reason=f"Tenant {tenant.name} would be left without an administrator",
                )
            )

        user_name = user.name
        tenant_label = f"{tenant.name} ({tenant_id})" if tenant else str(tenant_id)
        details = f"{user.role.value} of tenant {tenant_label}"
        if reason:
            details = f"{reason.strip()}; {details}"

        removed = {"users": await self.uow.users.delete(user_id)}
        ledger = AuditLedger(self.uow)
        sequence = await ledger.record(
            ledger.entry(
                AuditAction.delete_user,
                actor,
                target_id=str(user_id),
                target_name=user_name,
                details=details,
                target_type=AuditTargetType.user,
            )
        )
        return Return.ok(
            DeletionSummary(
                status="deleted",
                target_id=str(user_id),
                target_name=user_name,
                removed=removed,
                audit_sequence=sequence,
            )
        )

    @staticmethod
    def _rolled_back(user_id: UUID, exc: PersistenceError) -> Result:
        logger.error("Delete of user %s failed: %s", user_id, exc)
        return Return.err(
            Error(
                "PARTIAL_FAILURE",
                "User deletion failed and was rolled back",
                reason=str(exc),
            )
        )
