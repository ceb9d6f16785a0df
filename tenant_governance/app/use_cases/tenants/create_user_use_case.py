"""
Use Case: Create User

Superadmin adds a user to an existing tenant.
"""

from uuid import UUID

from tenant_governance.app.services.audit_ledger import AuditLedger
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.entities import (
    Actor,
    AuditAction,
    AuditTargetType,
    User,
    UserRole,
)
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import CreateUserCommand, CreateUserResponse


class CreateUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, command: CreateUserCommand, actor: Actor
    ) -> Result[CreateUserResponse]:
        """
        Errors:
            - INVALID_ROLE: role is not admin, manager or staff
            - TENANT_NOT_FOUND: Tenant does not exist
            - EMAIL_ALREADY_EXISTS: email is taken
            - PERSISTENCE_ERROR: store failed, nothing was created
        """
        async with self.uow:
            try:
                role = UserRole(command.role)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {command.role}. Must be one of: admin, manager, staff",
                    )
                )

            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            email = command.email.strip().lower()
            if await self.uow.users.get_by_email(email):
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            try:
                user = await self.uow.users.create(
                    User(tenant_id=tenant.id, name=command.name.strip(), email=email, role=role)
                )
                ledger = AuditLedger(self.uow)
                sequence = await ledger.record(
                    ledger.entry(
                        AuditAction.create_user,
                        actor,
                        target_id=str(user.id),
                        target_name=user.name,
                        details=f"{role.value} in tenant {tenant.name} ({tenant.id})",
                        target_type=AuditTargetType.user,
                    )
                )
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return Return.err(
                    Error("PERSISTENCE_ERROR", "User was not created", reason=str(exc))
                )

            return Return.ok(
                CreateUserResponse(
                    user_id=str(user.id),
                    tenant_id=str(tenant.id),
                    role=role.value,
                    audit_sequence=sequence,
                )
            )
