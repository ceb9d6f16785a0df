"""
Admin API Routes - Superadmin Console

Tenant lifecycle transitions, profile edits, user provisioning and confirmed
deletions. Every route requires a superadmin JWT and every state change is
recorded in the audit ledger.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenant_governance.api.error import raise_for_error
from tenant_governance.app.services.notification_dispatcher import NotificationDispatcher
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.app.use_cases.deletion import (
    DeleteTenantUseCase,
    DeleteUserUseCase,
    DeletionSummary,
)
from tenant_governance.app.use_cases.lifecycle import (
    ExpireSuspensionsResponse,
    ExpireSuspensionsUseCase,
    TenantLifecycleUseCase,
    TransitionTenantResponse,
)
from tenant_governance.app.use_cases.tenants import (
    CreateUserCommand,
    CreateUserResponse,
    CreateUserUseCase,
    UpdateTenantCommand,
    UpdateTenantResponse,
    UpdateTenantUseCase,
)
from tenant_governance.depends import get_dispatcher, get_unit_of_work, require_superadmin
from tenant_governance.domain.entities import Actor, TenantStatus
from tenant_governance.domain.lifecycle import TenantTransition

router = APIRouter(prefix="/admin", tags=["Admin"])


class TransitionRequest(BaseModel):
    """Lifecycle transition payload; approve and reactivate may omit reason"""

    reason: Optional[str] = Field(None, max_length=2000)
    expected_status: Optional[TenantStatus] = None
    expected_version: Optional[int] = Field(None, ge=1)
    duration_days: Optional[int] = None
    acknowledge_ban_reversal: bool = False


class UpdateTenantRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: str = "staff"


class ConfirmedDeletionRequest(BaseModel):
    """The operator must type DELETE exactly"""

    confirmation: str = ""
    reason: Optional[str] = Field(None, max_length=2000)


@router.post(
    "/tenants/expire-suspensions",
    status_code=status.HTTP_200_OK,
    response_model=ExpireSuspensionsResponse,
)
async def expire_suspensions(
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Expire Suspensions

    Reactivates every suspended tenant whose suspension_expires_at has
    passed. Each lift is audited as reactivate_tenant by the system actor.
    """
    use_case = ExpireSuspensionsUseCase(
        uow, dispatcher, timeout_seconds=ApplicationConfig.TRANSITION_TIMEOUT_SECONDS
    )
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/users",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateUserResponse,
)
async def create_user(
    tenant_id: UUID,
    request: CreateUserRequest,
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create User

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS
    """
    use_case = CreateUserUseCase(uow)
    result = await use_case.execute(tenant_id, CreateUserCommand(**request.model_dump()), actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/{transition}",
    status_code=status.HTTP_200_OK,
    response_model=TransitionTenantResponse,
)
async def transition_tenant(
    tenant_id: UUID,
    transition: TenantTransition,
    request: Optional[TransitionRequest] = None,
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Transition Tenant

    approve, reject, block, suspend, ban, reactivate or deactivate a tenant.
    Send expected_status (and optionally expected_version) from the view the
    operator acted on to get STALE_STATE instead of overwriting a concurrent
    change.

    Raises:
        - 400 Bad Request: INVALID_TRANSITION, REASON_REQUIRED, INVALID_DURATION
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: STALE_STATE
        - 503 Service Unavailable: PERSISTENCE_ERROR (nothing changed)
        - 504 Gateway Timeout: TIMEOUT (re-read before retrying)
    """
    request = request or TransitionRequest()

    use_case = TenantLifecycleUseCase(
        uow,
        dispatcher,
        timeout_seconds=ApplicationConfig.TRANSITION_TIMEOUT_SECONDS,
        login_url=ApplicationConfig.PLATFORM_LOGIN_URL or None,
    )
    result = await use_case.execute(
        tenant_id,
        transition,
        actor,
        reason=request.reason,
        expected_status=request.expected_status,
        expected_version=request.expected_version,
        duration_days=request.duration_days,
        acknowledge_ban_reversal=request.acknowledge_ban_reversal,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/tenants/{tenant_id}",
    status_code=status.HTTP_200_OK,
    response_model=UpdateTenantResponse,
)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantRequest,
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Update tenant profile (name, email, phone). Status is not editable here."""
    use_case = UpdateTenantUseCase(uow)
    result = await use_case.execute(
        tenant_id, UpdateTenantCommand(**request.model_dump()), actor
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/tenants/{tenant_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeletionSummary,
)
async def delete_tenant(
    tenant_id: UUID,
    request: ConfirmedDeletionRequest,
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Tenant

    Permanently removes the tenant, its users, sales orders and invoices.
    Audit and edit history are kept.

    Raises:
        - 400 Bad Request: CONFIRMATION_MISMATCH
        - 404 Not Found: TENANT_NOT_FOUND
        - 503 Service Unavailable: PARTIAL_FAILURE (nothing was deleted)
    """
    use_case = DeleteTenantUseCase(
        uow, timeout_seconds=ApplicationConfig.CASCADE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(tenant_id, request.confirmation, request.reason, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeletionSummary,
)
async def delete_user(
    user_id: UUID,
    request: ConfirmedDeletionRequest,
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete User

    Raises:
        - 400 Bad Request: CONFIRMATION_MISMATCH
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: LAST_ADMIN_PROTECTION
    """
    use_case = DeleteUserUseCase(uow, timeout_seconds=ApplicationConfig.CASCADE_TIMEOUT_SECONDS)
    result = await use_case.execute(user_id, request.confirmation, request.reason, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
