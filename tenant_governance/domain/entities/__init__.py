"""
Tenant Governance Domain Entities

Each entity in its own file.
"""

from .enums import (
    AuditAction,
    AuditTargetType,
    DocumentType,
    NotificationEventType,
    TenantStatus,
    UserRole,
    UserStatus,
)

from .actor import SUPERADMIN_ROLE, SYSTEM_ACTOR, Actor
from .tenant import Tenant
from .user import User
from .sales_order import SalesOrder
from .invoice import Invoice
from .audit_log_entry import AuditLogEntry
from .edit_history_entry import EditHistoryEntry
from .notification_event import NotificationEvent

__all__ = [
    # Enums
    "AuditAction",
    "AuditTargetType",
    "DocumentType",
    "NotificationEventType",
    "TenantStatus",
    "UserRole",
    "UserStatus",
    # Value objects
    "Actor",
    "SUPERADMIN_ROLE",
    "SYSTEM_ACTOR",
    "NotificationEvent",
    # Entities
    "Tenant",
    "User",
    "SalesOrder",
    "Invoice",
    "AuditLogEntry",
    "EditHistoryEntry",
]
