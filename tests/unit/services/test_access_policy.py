"""
Unit tests for system role resolution.
"""

from uuid import uuid4

from tenancy.app.services.access_policy import is_super_admin, resolve_system_role
from tenancy.domain.entities import AdminUser, UserRole


def test_active_admin_row_grants_its_role(make_user):
    user = make_user()
    admin = AdminUser(user_id=user.id, role=UserRole.platform_admin, is_active=True)

    assert resolve_system_role(user, admin) == UserRole.platform_admin
    assert not is_super_admin(user, admin)


def test_active_super_admin(make_user):
    user = make_user()
    admin = AdminUser(user_id=user.id, role=UserRole.super_admin, is_active=True)

    assert is_super_admin(user, admin)


def test_inactive_admin_row_grants_nothing(make_user):
    user = make_user(system_role=UserRole.super_admin)
    admin = AdminUser(user_id=user.id, role=UserRole.super_admin, is_active=False)

    assert resolve_system_role(user, admin) == UserRole.tenant_user
    assert not is_super_admin(user, admin)


def test_admin_role_on_user_row_alone_is_ignored(make_user):
    user = make_user(system_role=UserRole.super_admin)

    assert resolve_system_role(user, None) == UserRole.tenant_user


def test_non_admin_system_role_is_kept(make_user):
    user = make_user(id=uuid4(), system_role=UserRole.dealer)

    assert resolve_system_role(user, None) == UserRole.dealer
