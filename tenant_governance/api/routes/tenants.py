"""
Tenant API Routes

Public self-registration. New tenants wait for superadmin approval.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from tenant_governance.api.error import raise_for_error
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.app.use_cases.tenants import (
    RegisterTenantCommand,
    RegisterTenantResponse,
    RegisterTenantUseCase,
)
from tenant_governance.depends import get_unit_of_work

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class RegisterTenantRequest(BaseModel):
    """
    Register tenant HTTP request payload

    The business and its first administrator.
    """

    tenant_name: str = Field(..., min_length=1, max_length=255)
    tenant_email: EmailStr
    tenant_phone: Optional[str] = Field(None, max_length=50)
    admin_name: str = Field(..., min_length=1, max_length=255)
    admin_email: EmailStr


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterTenantResponse,
)
async def register_tenant(
    request: RegisterTenantRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register Tenant

    Creates a tenant in pending_approval together with its admin user.

    Raises:
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: Validation error
        - 503 Service Unavailable: PERSISTENCE_ERROR
    """
    command = RegisterTenantCommand(**request.model_dump())

    use_case = RegisterTenantUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
