"""
Tenant Governance Domain Enums

All enumeration types used across domain entities. The string values are
part of the external contract and must not be renamed.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Standing of a business tenant on the platform"""

    pending_approval = "pending_approval"
    active = "active"
    rejected = "rejected"
    blocked = "blocked"
    suspended = "suspended"
    banned = "banned"
    inactive = "inactive"


class UserRole(str, Enum):
    """Role of a user inside their tenant"""

    admin = "admin"
    manager = "manager"
    staff = "staff"


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class AuditAction(str, Enum):
    """Administrative verbs recorded in the audit ledger"""

    approve_tenant = "approve_tenant"
    reject_tenant = "reject_tenant"
    block_tenant = "block_tenant"
    suspend_tenant = "suspend_tenant"
    ban_tenant = "ban_tenant"
    reactivate_tenant = "reactivate_tenant"
    delete_tenant = "delete_tenant"
    delete_user = "delete_user"
    create_user = "create_user"
    update_tenant = "update_tenant"


class AuditTargetType(str, Enum):
    tenant = "tenant"
    user = "user"


class DocumentType(str, Enum):
    """Business documents that keep an edit history"""

    sales_order = "sales_order"
    invoice = "invoice"


class NotificationEventType(str, Enum):
    """Events handed to the external notifier"""

    approval = "approval"
    suspension = "suspension"
    rejection = "rejection"
    reactivation = "reactivation"
