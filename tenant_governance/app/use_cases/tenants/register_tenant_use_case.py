"""
Use Case: Register Tenant

A business signs up. The tenant starts in pending_approval with its first
administrator and waits for a superadmin to approve or reject it.
"""

import logging

from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.entities import Tenant, TenantStatus, User, UserRole
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import RegisterTenantCommand, RegisterTenantResponse, TenantInfo

logger = logging.getLogger(__name__)


class RegisterTenantUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterTenantCommand) -> Result[RegisterTenantResponse]:
        """
        Errors:
            - EMAIL_ALREADY_EXISTS: admin email is already registered
            - PERSISTENCE_ERROR: store failed, nothing was created
        """
        async with self.uow:
            admin_email = command.admin_email.strip().lower()
            if await self.uow.users.get_by_email(admin_email):
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            try:
                tenant = await self.uow.tenants.create(
                    Tenant(
                        name=command.tenant_name.strip(),
                        email=command.tenant_email.strip().lower(),
                        phone=command.tenant_phone,
                        status=TenantStatus.pending_approval,
                    )
                )
                admin = await self.uow.users.create(
                    User(
                        tenant_id=tenant.id,
                        name=command.admin_name.strip(),
                        email=admin_email,
                        role=UserRole.admin,
                    )
                )
                await self.uow.commit()
            except PersistenceError as exc:
                await self.uow.rollback()
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Registration failed", reason=str(exc))
                )

            logger.info("Registered tenant %s (%s), pending approval", tenant.id, tenant.name)
            return Return.ok(
                RegisterTenantResponse(
                    tenant=TenantInfo(
                        id=str(tenant.id),
                        name=tenant.name,
                        email=tenant.email,
                        status=tenant.status.value,
                    ),
                    admin_user_id=str(admin.id),
                )
            )
