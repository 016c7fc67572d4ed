"""
System role resolution.

The single place that decides whether a user is a platform administrator.
Only an active admin_users row grants super_admin/platform_admin; an admin
role stored on the user row alone grants nothing.
"""

from typing import Optional

from tenancy.domain.entities import AdminUser, User, UserRole
from tenancy.domain.permissions import is_system_admin_role


def resolve_system_role(user: User, admin: Optional[AdminUser]) -> UserRole:
    if admin is not None:
        if admin.is_active and is_system_admin_role(admin.role):
            return UserRole(admin.role)
        return UserRole.tenant_user

    role = UserRole(user.system_role)
    if is_system_admin_role(role):
        return UserRole.tenant_user
    return role


def is_super_admin(user: User, admin: Optional[AdminUser]) -> bool:
    return resolve_system_role(user, admin) == UserRole.super_admin
