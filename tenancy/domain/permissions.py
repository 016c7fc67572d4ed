"""
Permission resolution.

Static role -> permission table plus the RBAC context derived from a user's
system role and tenant role. Everything here is pure: a missing permission
is reported as False, never as an exception.
"""

from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel

from tenancy.domain.entities.enums import UserRole


class Permission(str, Enum):
    """Permissions keyed as resource:action"""

    # System-wide
    SYSTEM_ADMIN = "system:admin"
    SYSTEM_CONFIG = "system:config"
    SYSTEM_METRICS = "system:metrics"

    # Tenant management
    TENANT_CREATE = "tenant:create"
    TENANT_READ = "tenant:read"
    TENANT_UPDATE = "tenant:update"
    TENANT_DELETE = "tenant:delete"
    TENANT_CONFIG = "tenant:config"

    # User management
    USER_CREATE = "user:create"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"
    USER_INVITE = "user:invite"

    # Admin management
    ADMIN_CREATE = "admin:create"
    ADMIN_READ = "admin:read"
    ADMIN_UPDATE = "admin:update"
    ADMIN_DELETE = "admin:delete"

    # Billing
    BILLING_READ = "billing:read"
    BILLING_UPDATE = "billing:update"
    BILLING_ADMIN = "billing:admin"

    # Analytics
    ANALYTICS_READ = "analytics:read"
    ANALYTICS_EXPORT = "analytics:export"
    ANALYTICS_ADMIN = "analytics:admin"

    # API access
    API_READ = "api:read"
    API_WRITE = "api:write"
    API_ADMIN = "api:admin"


ROLE_PERMISSIONS = {
    UserRole.super_admin: [
        Permission.SYSTEM_ADMIN,
        Permission.SYSTEM_CONFIG,
        Permission.SYSTEM_METRICS,
        Permission.TENANT_CREATE,
        Permission.TENANT_READ,
        Permission.TENANT_UPDATE,
        Permission.TENANT_DELETE,
        Permission.TENANT_CONFIG,
        Permission.USER_CREATE,
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.USER_DELETE,
        Permission.USER_INVITE,
        Permission.ADMIN_CREATE,
        Permission.ADMIN_READ,
        Permission.ADMIN_UPDATE,
        Permission.ADMIN_DELETE,
        Permission.BILLING_ADMIN,
        Permission.ANALYTICS_ADMIN,
        Permission.API_ADMIN,
    ],
    UserRole.platform_admin: [
        Permission.TENANT_CREATE,
        Permission.TENANT_READ,
        Permission.TENANT_UPDATE,
        Permission.TENANT_CONFIG,
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.USER_INVITE,
        Permission.ADMIN_READ,
        Permission.BILLING_READ,
        Permission.BILLING_UPDATE,
        Permission.ANALYTICS_READ,
        Permission.ANALYTICS_EXPORT,
        Permission.API_READ,
    ],
    UserRole.tenant_admin: [
        Permission.TENANT_READ,
        Permission.TENANT_UPDATE,
        Permission.USER_CREATE,
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.USER_DELETE,
        Permission.USER_INVITE,
        Permission.BILLING_READ,
        Permission.ANALYTICS_READ,
        Permission.ANALYTICS_EXPORT,
        Permission.API_READ,
        Permission.API_WRITE,
    ],
    UserRole.tenant_user: [
        Permission.USER_READ,
        Permission.ANALYTICS_READ,
        Permission.API_READ,
    ],
    UserRole.farmer: [
        Permission.USER_READ,
        Permission.ANALYTICS_READ,
    ],
    UserRole.dealer: [
        Permission.USER_READ,
        Permission.USER_UPDATE,
        Permission.ANALYTICS_READ,
    ],
}

SYSTEM_ADMIN_ROLES = (UserRole.super_admin, UserRole.platform_admin)

CRUD_ACTIONS = ("create", "read", "update", "delete")

RoleLike = Union[UserRole, str, None]
PermissionLike = Union[Permission, str]


def _role(role: RoleLike) -> Optional[UserRole]:
    if role is None or isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return None


def _key(permission: PermissionLike) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


def get_permissions_for_role(role: RoleLike) -> FrozenSet[str]:
    """Permission keys granted by a single role; unknown roles grant nothing"""
    resolved = _role(role)
    if resolved is None:
        return frozenset()
    return frozenset(p.value for p in ROLE_PERMISSIONS.get(resolved, []))


def resolve_permissions(user_role: RoleLike, tenant_role: RoleLike = None) -> FrozenSet[str]:
    """
    Effective permission set: union of the system role's and the tenant
    role's permissions. A tenant role never removes a system permission.
    """
    return get_permissions_for_role(user_role) | get_permissions_for_role(tenant_role)


def is_system_admin_role(role: RoleLike) -> bool:
    return _role(role) in SYSTEM_ADMIN_ROLES


class RBACContext(BaseModel):
    """Derived access context for one request; never persisted"""

    user_id: UUID
    user_role: UserRole
    tenant_id: Optional[UUID] = None
    tenant_role: Optional[UserRole] = None
    permissions: FrozenSet[str] = frozenset()

    def has_permission(self, permission: PermissionLike) -> bool:
        return _key(permission) in self.permissions

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return all(self.has_permission(p) for p in permissions)

    def has_role(self, roles: Iterable[RoleLike]) -> bool:
        wanted = {_role(r) for r in roles} - {None}
        return self.user_role in wanted or (
            self.tenant_role is not None and self.tenant_role in wanted
        )

    def can_access_resource(self, resource: str, action: str) -> bool:
        return self.has_permission(f"{resource}:{action}")

    def accessible_actions(self, resource: str) -> List[str]:
        return [a for a in CRUD_ACTIONS if self.can_access_resource(resource, a)]

    def can_access_tenant(self, target_tenant_id: Optional[UUID]) -> bool:
        if self.is_system_admin():
            return True
        return self.tenant_id is not None and self.tenant_id == target_tenant_id

    def is_system_admin(self) -> bool:
        return is_system_admin_role(self.user_role)

    def is_tenant_admin(self) -> bool:
        return self.has_role([UserRole.tenant_admin]) or self.is_system_admin()


def build_context(
    user_id: UUID,
    user_role: RoleLike,
    tenant_id: Optional[UUID] = None,
    tenant_role: RoleLike = None,
) -> RBACContext:
    """Build an RBAC context; unknown system roles degrade to tenant_user"""
    system_role = _role(user_role) or UserRole.tenant_user
    scoped_role = _role(tenant_role)
    return RBACContext(
        user_id=user_id,
        user_role=system_role,
        tenant_id=tenant_id,
        tenant_role=scoped_role,
        permissions=resolve_permissions(system_role, scoped_role),
    )
