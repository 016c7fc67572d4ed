"""
User Entities

User is an identity that can belong to several tenants. AdminUser marks the
platform-level administrators.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from tenancy.domain.base import utcnow

from .enums import UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - login identity.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - must_change_password is set for generated temporary credentials
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    system_role: UserRole = Field(default=UserRole.tenant_user)
    status: UserStatus = Field(default=UserStatus.active)
    must_change_password: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class AdminUser(SQLModel, table=True):
    """
    AdminUser entity - platform administrator membership.

    Business Rules:
    - Only active rows grant the privileged bypass
    - role is super_admin or platform_admin
    """

    __tablename__ = "admin_users"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    role: UserRole = Field(default=UserRole.super_admin)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    deactivated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
