"""
Unit tests for permission resolution and the RBAC context.
"""

from uuid import uuid4

from tenancy.domain.entities import UserRole
from tenancy.domain.permissions import (
    Permission,
    build_context,
    get_permissions_for_role,
    resolve_permissions,
)


def test_super_admin_has_every_tenant_permission():
    permissions = get_permissions_for_role(UserRole.super_admin)

    for permission in (
        Permission.TENANT_CREATE,
        Permission.TENANT_READ,
        Permission.TENANT_UPDATE,
        Permission.TENANT_DELETE,
        Permission.TENANT_CONFIG,
    ):
        assert permission.value in permissions


def test_platform_admin_cannot_delete_tenants():
    permissions = get_permissions_for_role(UserRole.platform_admin)

    assert Permission.TENANT_CREATE.value in permissions
    assert Permission.TENANT_DELETE.value not in permissions


def test_unknown_role_grants_nothing():
    assert get_permissions_for_role("janitor") == frozenset()
    assert get_permissions_for_role(None) == frozenset()


def test_effective_permissions_are_union_of_system_and_tenant_role():
    permissions = resolve_permissions(UserRole.tenant_user, UserRole.tenant_admin)

    assert Permission.API_READ.value in permissions  # from tenant_user
    assert Permission.TENANT_UPDATE.value in permissions  # from tenant_admin
    assert Permission.TENANT_DELETE.value not in permissions


def test_tenant_role_never_removes_system_permissions():
    permissions = resolve_permissions(UserRole.super_admin, UserRole.farmer)

    assert permissions == get_permissions_for_role(UserRole.super_admin)


def test_context_permission_checks():
    context = build_context(uuid4(), UserRole.tenant_user, uuid4(), UserRole.tenant_admin)

    assert context.has_permission(Permission.TENANT_READ)
    assert context.has_permission("tenant:update")
    assert not context.has_permission(Permission.TENANT_CREATE)
    assert context.has_any_permission([Permission.TENANT_CREATE, Permission.TENANT_READ])
    assert not context.has_all_permissions([Permission.TENANT_CREATE, Permission.TENANT_READ])
    assert context.has_role([UserRole.tenant_admin])
    assert context.is_tenant_admin()
    assert not context.is_system_admin()


def test_context_resource_actions():
    context = build_context(uuid4(), UserRole.tenant_user, uuid4(), UserRole.dealer)

    assert context.can_access_resource("user", "update")
    assert not context.can_access_resource("user", "delete")
    assert context.accessible_actions("user") == ["read", "update"]


def test_tenant_access_requires_matching_tenant_unless_system_admin():
    tenant_id = uuid4()
    member = build_context(uuid4(), UserRole.tenant_user, tenant_id, UserRole.tenant_admin)
    admin = build_context(uuid4(), UserRole.platform_admin)

    assert member.can_access_tenant(tenant_id)
    assert not member.can_access_tenant(uuid4())
    assert admin.can_access_tenant(uuid4())


def test_unknown_system_role_degrades_to_tenant_user():
    context = build_context(uuid4(), "root")

    assert context.user_role == UserRole.tenant_user
    assert context.permissions == get_permissions_for_role(UserRole.tenant_user)
