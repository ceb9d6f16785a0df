"""
Use Case: Tenant Lifecycle Transition

Moves a tenant between statuses (approve, reject, block, suspend, ban,
reactivate, deactivate). Every change is validated against the transition
table, committed together with exactly one audit entry, and announced to the
external notifier without waiting for delivery.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple
from uuid import UUID

from tenant_governance.app.services.audit_ledger import AuditLedger
from tenant_governance.app.services.notification_dispatcher import NotificationDispatcher
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import (
    Actor,
    NotificationEvent,
    NotificationEventType,
    Tenant,
    TenantStatus,
)
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.domain.lifecycle import (
    TenantTransition,
    TransitionPlan,
    plan_transition,
)
from tenant_governance.libs.result import Error, Result, Return

from .dtos import TransitionTenantResponse

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class TenantSnapshot:
    """Detached copy of the tenant fields a transition reads"""

    id: UUID
    name: str
    email: str
    status: TenantStatus
    version: int

    @classmethod
    def of(cls, tenant: Tenant) -> "TenantSnapshot":
        return cls(
            id=tenant.id,
            name=tenant.name,
            email=tenant.email,
            status=tenant.status,
            version=tenant.version,
        )


class TenantLifecycleUseCase:
    """
    Apply one lifecycle transition to a tenant.

    Business Logic:
    1. Re-read the tenant (fresh status and version)
    2. Fail with STALE_STATE if it no longer matches what the caller saw
    3. Validate the transition against the table
    4. Conditionally update status on the read version (compare-and-set)
    5. Record the audit entry in the same transaction
    6. Commit; any store failure rolls back both writes
    7. Enqueue the notification event (fire-and-forget)

    Steps 1-5 are bounded by timeout_seconds (TIMEOUT, nothing changed). The
    commit runs outside the deadline, so a reported outcome always matches
    what is stored.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: NotificationDispatcher,
        timeout_seconds: float = DEFAULT_TRANSITION_TIMEOUT_SECONDS,
        login_url: Optional[str] = None,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.timeout_seconds = timeout_seconds
        self.login_url = login_url

    async def execute(
        self,
        tenant_id: UUID,
        transition: TenantTransition,
        actor: Actor,
        reason: Optional[str] = None,
        expected_status: Optional[TenantStatus] = None,
        expected_version: Optional[int] = None,
        duration_days: Optional[int] = None,
        acknowledge_ban_reversal: bool = False,
    ) -> Result[TransitionTenantResponse]:
        """
        Execute a tenant lifecycle transition.

        Args:
            tenant_id: UUID of tenant to transition
            transition: Requested transition
            actor: Administrator performing the action
            reason: Justification (required except for approve/reactivate)
            expected_status: Status the caller validated against, if any
            expected_version: Tenant version the caller read, if any
            duration_days: Suspension length; sets suspension_expires_at
            acknowledge_ban_reversal: Required to reactivate a banned tenant

        Returns:
            Result[TransitionTenantResponse] with the new status

        Errors:
            - TENANT_NOT_FOUND: Tenant does not exist
            - INVALID_TRANSITION: Transition not allowed from current status
            - REASON_REQUIRED / INVALID_DURATION: Bad input
            - STALE_STATE: Status changed concurrently, retry with a fresh read
            - PERSISTENCE_ERROR: Store failed, nothing was changed
            - TIMEOUT: Read or write did not finish in time, nothing was changed
        """
        async with self.uow:
            try:
                # 1-5 bounded by the deadline; nothing is durable yet
                async with asyncio.timeout(self.timeout_seconds):
                    result, event = await self._stage(
                        tenant_id,
                        transition,
                        actor,
                        reason,
                        expected_status,
                        expected_version,
                        duration_days,
                        acknowledge_ban_reversal,
                    )
            except TimeoutError:
                await self.uow.rollback()
                logger.warning(
                    "Transition %s on tenant %s timed out after %ss, rolled back",
                    transition.value,
                    tenant_id,
                    self.timeout_seconds,
                )
                return Return.err(
                    Error(
                        "TIMEOUT",
                        f"Could not {transition.value} tenant within {self.timeout_seconds}s",
                    )
                )
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._aborted(tenant_id, transition, exc)

            if result.is_err():
                await self.uow.rollback()
                return result

            # 6. Commit outside the deadline so a commit in flight is never abandoned
            try:
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return self._aborted(tenant_id, transition, exc)

        response = result.value
        logger.info(
            "Tenant %s %s -> %s by %s",
            tenant_id,
            response.previous_status,
            response.status,
            actor.id,
        )

        # 7. Fire-and-forget
        self.dispatcher.dispatch(event)
        return result

    async def _stage(
        self,
        tenant_id: UUID,
        transition: TenantTransition,
        actor: Actor,
        reason: Optional[str],
        expected_status: Optional[TenantStatus],
        expected_version: Optional[int],
        duration_days: Optional[int],
        acknowledge_ban_reversal: bool,
    ) -> Tuple[Result[TransitionTenantResponse], Optional[NotificationEvent]]:
        # 1. Fresh read; the ORM row expires on rollback, so keep plain values
        tenant = await self.uow.tenants.get_by_id(tenant_id)
        if not tenant:
            return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found")), None
        current = TenantSnapshot.of(tenant)

        # 2. Optimistic check against what the caller observed
        if expected_status is not None and current.status != expected_status:
            return (
                self._stale(
                    transition,
                    f"expected {expected_status.value}, now {current.status.value}",
                ),
                None,
            )
        if expected_version is not None and current.version != expected_version:
            return (
                self._stale(
                    transition,
                    f"expected version {expected_version}, now {current.version}",
                ),
                None,
            )

        # 3. Validate against the transition table
        planned = plan_transition(
            current.status,
            transition,
            reason=reason,
            duration_days=duration_days,
            acknowledge_ban_reversal=acknowledge_ban_reversal,
        )
        if planned.is_err():
            return planned, None
        plan = planned.value

        now = utcnow()
        expires_at = None
        if plan.duration_days is not None:
            expires_at = now + timedelta(days=plan.duration_days)

        values = {
            "status": plan.target,
            "status_reason": plan.reason,
            "status_changed_at": now,
            "status_changed_by": actor.id,
            "suspension_expires_at": expires_at,
            "updated_at": now,
        }

        # 4. Compare-and-set on the version we validated
        if not await self.uow.tenants.compare_and_set(current.id, current.version, values):
            return (
                self._stale(
                    transition,
                    f"{current.status.value} at version {current.version} was superseded",
                ),
                None,
            )

        # 5. Audit entry in the same transaction
        ledger = AuditLedger(self.uow)
        sequence = await ledger.record(
            ledger.entry(
                plan.rule.audit_action,
                actor,
                target_id=str(current.id),
                target_name=current.name,
                details=plan.audit_details(),
            )
        )

        response = TransitionTenantResponse(
            tenant_id=str(current.id),
            previous_status=plan.source.value,
            status=plan.target.value,
            status_reason=plan.reason,
            status_changed_at=now.isoformat(),
            status_changed_by=actor.id,
            suspension_expires_at=expires_at.isoformat() if expires_at else None,
            audit_sequence=sequence,
        )
        return Return.ok(response), self._event(current, plan, expires_at)

    @staticmethod
    def _stale(transition: TenantTransition, detail: str) -> Result:
        return Return.err(
            Error(
                "STALE_STATE",
                f"Tenant changed concurrently: {detail}; re-read and retry {transition.value}",
            )
        )

    @staticmethod
    def _aborted(tenant_id: UUID, transition: TenantTransition, exc: PersistenceError) -> Result:
        logger.error("Transition %s on tenant %s aborted: %s", transition.value, tenant_id, exc)
        return Return.err(
            Error(
                "PERSISTENCE_ERROR",
                "Tenant status was not changed because the store is unavailable",
                reason=str(exc),
            )
        )

    def _event(
        self, tenant: TenantSnapshot, plan: TransitionPlan, expires_at
    ) -> NotificationEvent:
        payload = {
            "tenant_name": tenant.name,
            "tenant_email": tenant.email,
            "previous_status": plan.source.value,
            "status": plan.target.value,
        }
        if plan.reason:
            payload["reason"] = plan.reason
        if expires_at is not None:
            payload["suspension_expires_at"] = expires_at.isoformat()
        if plan.rule.notification is NotificationEventType.approval and self.login_url:
            payload["login_url"] = self.login_url

        return NotificationEvent(
            event_type=plan.rule.notification,
            tenant_id=tenant.id,
            payload=payload,
        )
