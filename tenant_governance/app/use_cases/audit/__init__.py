from .dtos import AuditEntriesResponse
from .get_audit_entries_use_case import GetAuditEntriesUseCase

__all__ = ["AuditEntriesResponse", "GetAuditEntriesUseCase"]
