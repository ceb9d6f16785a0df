"""
Use Case: Expire Suspensions

Lifts time-boxed suspensions whose suspension_expires_at has passed. Goes
through the regular reactivate transition so every lift is validated,
audited and notified like a manual one. Banned tenants are never touched.
"""

import logging
from typing import Optional

from tenant_governance.app.services.notification_dispatcher import NotificationDispatcher
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import SYSTEM_ACTOR, Actor, TenantStatus
from tenant_governance.domain.lifecycle import TenantTransition
from tenant_governance.libs.result import Result, Return

from .dtos import ExpireSuspensionsResponse
from .tenant_lifecycle_use_case import (
    DEFAULT_TRANSITION_TIMEOUT_SECONDS,
    TenantLifecycleUseCase,
)

logger = logging.getLogger(__name__)


class ExpireSuspensionsUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: NotificationDispatcher,
        timeout_seconds: float = DEFAULT_TRANSITION_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.lifecycle = TenantLifecycleUseCase(uow, dispatcher, timeout_seconds)

    async def execute(self, actor: Optional[Actor] = None) -> Result[ExpireSuspensionsResponse]:
        actor = actor or SYSTEM_ACTOR
        now = utcnow()

        async with self.uow:
            expired = await self.uow.tenants.get_expired_suspensions(now)
            candidates = [
                (tenant.id, tenant.version, tenant.suspension_expires_at)
                for tenant in expired
            ]

        reactivated, skipped = [], []
        for tenant_id, version, expires_at in candidates:
            result = await self.lifecycle.execute(
                tenant_id,
                TenantTransition.reactivate,
                actor,
                reason=f"Suspension expired at {expires_at.isoformat()}",
                expected_status=TenantStatus.suspended,
                expected_version=version,
            )
            if result.is_ok():
                reactivated.append(str(tenant_id))
            else:
                # Changed since the sweep read it, or the store failed; next sweep retries
                logger.warning(
                    "Could not lift suspension of tenant %s: %s",
                    tenant_id,
                    result.error.code,
                )
                skipped.append(str(tenant_id))

        if reactivated:
            logger.info("Lifted %d expired suspension(s)", len(reactivated))
        return Return.ok(ExpireSuspensionsResponse(reactivated=reactivated, skipped=skipped))
