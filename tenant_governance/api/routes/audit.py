"""
Audit API Routes

Read-only access to the audit ledger. There is no write or delete route.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tenant_governance.api.error import raise_for_error
from tenant_governance.app.services.audit_ledger import AuditQuery
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.app.use_cases.audit import (
    AuditEntriesResponse,
    GetAuditEntriesUseCase,
)
from tenant_governance.depends import get_unit_of_work, require_superadmin
from tenant_governance.domain.entities import Actor, AuditAction

router = APIRouter(prefix="/admin", tags=["Audit"])


@router.get(
    "/audit-logs",
    status_code=status.HTTP_200_OK,
    response_model=AuditEntriesResponse,
)
async def get_audit_logs(
    actor: Actor = Depends(require_superadmin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    action: Optional[AuditAction] = Query(None, description="Exact action verb"),
    search: Optional[str] = Query(
        None, description="Substring of target name, actor name or details"
    ),
    start: Optional[datetime] = Query(None, description="Inclusive lower bound (UTC)"),
    end: Optional[datetime] = Query(None, description="Inclusive upper bound (UTC)"),
    target_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """
    Get Audit Logs

    Filters combine with AND. Results are newest first; total counts all
    matches regardless of the page window.

    Raises:
        - 400 Bad Request: INVALID_DATE_RANGE
        - 403 Forbidden: INSUFFICIENT_ROLE
    """
    filters = AuditQuery(
        action=action, search=search, start=start, end=end, target_id=target_id
    )

    use_case = GetAuditEntriesUseCase(uow)
    result = await use_case.execute(filters, limit=limit, offset=offset)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
