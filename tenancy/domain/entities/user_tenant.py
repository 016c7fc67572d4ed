"""
UserTenant Entity

Links a user to a tenant with a tenant-scoped role.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenancy.domain.base import utcnow

from .enums import UserRole


class UserTenant(SQLModel, table=True):
    """
    UserTenant entity - user-tenant relationship.

    Business Rules:
    - (user_id, tenant_id) is unique; writes are upserts (last writer wins)
    - Inactive relationships do not grant access
    - Super admins need no stored relationship
    """

    __tablename__ = "user_tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    role: UserRole = Field(default=UserRole.tenant_admin)
    is_active: bool = Field(default=True)

    relationship_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_tenant_pair", "user_id", "tenant_id", unique=True),
    )
