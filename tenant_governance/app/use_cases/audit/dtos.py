"""
Audit Query DTOs
"""

from typing import List

from pydantic import BaseModel

from tenant_governance.app.services.audit_ledger import AuditRecord


class AuditEntriesResponse(BaseModel):
    entries: List[AuditRecord]
    total: int
    limit: int
    offset: int
