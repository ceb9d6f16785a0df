"""Tenant lifecycle use cases."""

from .dtos import ExpireSuspensionsResponse, TransitionTenantResponse
from .expire_suspensions_use_case import ExpireSuspensionsUseCase
from .tenant_lifecycle_use_case import TenantLifecycleUseCase

__all__ = [
    "TenantLifecycleUseCase",
    "TransitionTenantResponse",
    "ExpireSuspensionsUseCase",
    "ExpireSuspensionsResponse",
]
