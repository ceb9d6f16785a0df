"""
Use Case: Update Tenant Profile

Superadmin edits a tenant's name, email or phone. Status is never touched
here; it only moves through lifecycle transitions.
"""

from uuid import UUID

from tenant_governance.app.services.audit_ledger import AuditLedger
from tenant_governance.app.services.edit_history_ledger import EditHistoryLedger
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import utcnow
from tenant_governance.domain.entities import Actor, AuditAction
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import TenantInfo, UpdateTenantCommand, UpdateTenantResponse

PROFILE_FIELDS = ("name", "email", "phone")


class UpdateTenantUseCase:
    """
    Business Logic:
    1. Load tenant
    2. Diff current and requested profile
    3. No change: succeed without an audit entry
    4. Save and record update_tenant with the readable diff in details
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, command: UpdateTenantCommand, actor: Actor
    ) -> Result[UpdateTenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            before = {field: getattr(tenant, field) for field in PROFILE_FIELDS}
            after = dict(before)
            after.update(command.model_dump(exclude_none=True))
            changes = EditHistoryLedger.diff(before, after)

            info = TenantInfo(
                id=str(tenant.id),
                name=tenant.name,
                email=tenant.email,
                status=tenant.status.value,
            )
            if not changes:
                return Return.ok(
                    UpdateTenantResponse(tenant=info, changed_fields=[], audit_sequence=None)
                )

            # Snapshot the name the tenant had when the action was taken
            previous_name = tenant.name
            for change in changes:
                setattr(tenant, change.field, change.new_value)
            tenant.updated_at = utcnow()

            details = "; ".join(
                f"{c.field}: {c.old_value!r} -> {c.new_value!r}" for c in changes
            )
            try:
                tenant = await self.uow.tenants.update_profile(tenant)
                ledger = AuditLedger(self.uow)
                sequence = await ledger.record(
                    ledger.entry(
                        AuditAction.update_tenant,
                        actor,
                        target_id=str(tenant.id),
                        target_name=previous_name,
                        details=details,
                    )
                )
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Tenant was not updated", reason=str(exc))
                )

            return Return.ok(
                UpdateTenantResponse(
                    tenant=TenantInfo(
                        id=str(tenant.id),
                        name=tenant.name,
                        email=tenant.email,
                        status=tenant.status.value,
                    ),
                    changed_fields=[c.field for c in changes],
                    audit_sequence=sequence,
                )
            )
