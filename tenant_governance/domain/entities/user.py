"""
User Entity

A person working inside exactly one tenant.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - belongs to a single tenant.

    Business Rules:
    - Email must be unique across all users
    - An active tenant must keep at least one admin
    - Removed together with its tenant on cascade deletion
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    role: UserRole = Field(default=UserRole.staff)
    status: UserStatus = Field(default=UserStatus.active)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_tenant_role", "tenant_id", "role"),)
