"""Confirmed, audited permanent deletions."""

from .delete_tenant_use_case import DeleteTenantUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import DeletionSummary

__all__ = ["DeleteTenantUseCase", "DeleteUserUseCase", "DeletionSummary"]
