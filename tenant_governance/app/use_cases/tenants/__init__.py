"""Tenant administration use cases."""

from .create_user_use_case import CreateUserUseCase
from .dtos import (
    CreateUserCommand,
    CreateUserResponse,
    RegisterTenantCommand,
    RegisterTenantResponse,
    TenantInfo,
    UpdateTenantCommand,
    UpdateTenantResponse,
)
from .register_tenant_use_case import RegisterTenantUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "RegisterTenantUseCase",
    "RegisterTenantCommand",
    "RegisterTenantResponse",
    "UpdateTenantUseCase",
    "UpdateTenantCommand",
    "UpdateTenantResponse",
    "CreateUserUseCase",
    "CreateUserCommand",
    "CreateUserResponse",
    "TenantInfo",
]
