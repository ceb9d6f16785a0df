"""
Use Case: Get Audit Entries

Filtered, paginated view of the audit ledger for the superadmin console.
"""

import logging

from tenant_governance.app.services.audit_ledger import AuditLedger, AuditQuery
from tenant_governance.app.services.unit_of_work import UnitOfWork
from tenant_governance.domain.base import as_naive_utc
from tenant_governance.domain.exceptions import PersistenceError
from tenant_governance.libs.result import Error, Result, Return

from .dtos import AuditEntriesResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 500


class GetAuditEntriesUseCase:
    """
    Business Rules:
    - Newest entries first
    - total counts every match, independent of the page
    - A window past the last match is an empty page, not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, filters: AuditQuery, limit: int = 100, offset: int = 0
    ) -> Result[AuditEntriesResponse]:
        if limit < 1 or limit > MAX_PAGE_SIZE or offset < 0:
            return Return.err(
                Error(
                    "INVALID_PAGINATION",
                    f"limit must be 1..{MAX_PAGE_SIZE} and offset must not be negative",
                )
            )
        start, end = as_naive_utc(filters.start), as_naive_utc(filters.end)
        if start and end and start > end:
            return Return.err(
                Error("INVALID_DATE_RANGE", "start must not be after end")
            )

        async with self.uow:
            try:
                matches = await AuditLedger(self.uow).query(filters)
            except PersistenceError as exc:
                logger.error("Audit query failed: %s", exc)
                return Return.err(
                    Error("PERSISTENCE_ERROR", "Audit log is unavailable", reason=str(exc))
                )

        return Return.ok(
            AuditEntriesResponse(
                entries=matches[offset : offset + limit],
                total=len(matches),
                limit=limit,
                offset=offset,
            )
        )
