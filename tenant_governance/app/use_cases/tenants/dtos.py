"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for tenant administration.
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class RegisterTenantCommand(BaseModel):
    """Input for register tenant use case"""

    tenant_name: str
    tenant_email: str
    tenant_phone: Optional[str] = None
    admin_name: str
    admin_email: str


class UpdateTenantCommand(BaseModel):
    """Profile fields to change; None means unchanged"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CreateUserCommand(BaseModel):
    """Input for create user use case"""

    name: str
    email: str
    role: str = "staff"


# ============================================================================
# Response DTOs
# ============================================================================


class TenantInfo(BaseModel):
    id: str
    name: str
    email: str
    status: str


class RegisterTenantResponse(BaseModel):
    """Response for register tenant use case"""

    tenant: TenantInfo
    admin_user_id: str


class UpdateTenantResponse(BaseModel):
    """Response for update tenant use case"""

    tenant: TenantInfo
    changed_fields: List[str]
    audit_sequence: Optional[int]


class CreateUserResponse(BaseModel):
    """Response for create user use case"""

    user_id: str
    tenant_id: str
    role: str
    audit_sequence: int
