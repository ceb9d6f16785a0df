"""
Lifecycle Use Case DTOs
"""

from typing import List, Optional

from pydantic import BaseModel


class TransitionTenantResponse(BaseModel):
    """Response for TenantLifecycleUseCase"""

    tenant_id: str
    previous_status: str
    status: str
    status_reason: Optional[str]
    status_changed_at: str
    status_changed_by: str
    suspension_expires_at: Optional[str]
    audit_sequence: int


class ExpireSuspensionsResponse(BaseModel):
    """Response for ExpireSuspensionsUseCase"""

    reactivated: List[str]
    skipped: List[str]
