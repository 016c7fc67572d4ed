"""
Unit tests for the Access Validator and RBAC context loading.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from tenancy.app.use_cases.access import (
    CreateUserTenantRelationshipUseCase,
    LoadRBACContextUseCase,
    ValidateMultipleTenantsUseCase,
    ValidateTenantAccessUseCase,
)
from tenancy.domain.entities import (
    AdminUser,
    TenantStatus,
    UserRole,
    UserStatus,
    UserTenant,
)
from tenancy.domain.permissions import Permission


def _wire(uow, user=None, admin=None, tenant=None, relationship=None):
    uow.users.get_by_id = AsyncMock(return_value=user)
    uow.admin_users.get_by_user_id = AsyncMock(return_value=admin)
    uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    uow.user_tenants.get_by_user_and_tenant = AsyncMock(return_value=relationship)


@pytest.mark.asyncio
async def test_active_relationship_is_valid(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    relationship = UserTenant(user_id=user.id, tenant_id=tenant.id, role=UserRole.tenant_admin)
    _wire(mock_uow, user, None, tenant, relationship)

    result = await ValidateTenantAccessUseCase(mock_uow).execute(user.id, tenant.id)

    status = result.value
    assert status.is_valid
    assert status.user_exists_in_auth
    assert status.relationship_exists and status.relationship_active
    assert status.role == "tenant_admin"
    assert status.issues == []
    assert not status.can_auto_fix


@pytest.mark.asyncio
async def test_missing_relationship_fixable_only_by_super_admin(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    _wire(mock_uow, user, None, tenant, None)

    status = (await ValidateTenantAccessUseCase(mock_uow).execute(user.id, tenant.id)).value

    assert not status.is_valid
    assert not status.can_auto_fix
    assert status.issues == ["relationship missing"]


@pytest.mark.asyncio
async def test_super_admin_is_valid_without_relationship(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    admin = AdminUser(user_id=user.id, role=UserRole.super_admin, is_active=True)
    _wire(mock_uow, user, admin, tenant, None)

    status = (await ValidateTenantAccessUseCase(mock_uow).execute(user.id, tenant.id)).value

    assert status.is_valid
    assert status.is_super_admin
    assert status.can_auto_fix
    assert status.issues == ["relationship missing"]


@pytest.mark.asyncio
async def test_inactive_relationship(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    relationship = UserTenant(user_id=user.id, tenant_id=tenant.id, is_active=False)
    _wire(mock_uow, user, None, tenant, relationship)

    status = (await ValidateTenantAccessUseCase(mock_uow).execute(user.id, tenant.id)).value

    assert not status.is_valid
    assert status.relationship_exists
    assert not status.relationship_active
    assert status.issues == ["relationship inactive"]


@pytest.mark.asyncio
async def test_unauthenticated_is_invalid(mock_uow):
    status = (await ValidateTenantAccessUseCase(mock_uow).execute(None, uuid4())).value

    assert not status.is_valid
    assert status.issues == ["not authenticated"]
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_and_disabled_users(mock_uow, make_user):
    _wire(mock_uow, None)
    status = (await ValidateTenantAccessUseCase(mock_uow).execute(uuid4(), uuid4())).value
    assert status.issues == ["user not found in auth"]
    assert not status.user_exists_in_auth

    _wire(mock_uow, make_user(status=UserStatus.disabled))
    status = (await ValidateTenantAccessUseCase(mock_uow).execute(uuid4(), uuid4())).value
    assert status.issues == ["user disabled"]
    assert not status.is_valid


@pytest.mark.asyncio
async def test_unknown_tenant(mock_uow, make_user):
    user = make_user()
    _wire(mock_uow, user, None, None)

    status = (await ValidateTenantAccessUseCase(mock_uow).execute(user.id, uuid4())).value

    assert status.issues == ["tenant not found"]
    assert not status.is_valid


def _uow_for(make_tenant, user, valid_ids, failing_id=None, slow_id=None):
    """Factory handing out a fresh mocked unit of work per call"""

    def factory():
        uow = MagicMock()
        uow.__aenter__ = AsyncMock(return_value=uow)
        uow.__aexit__ = AsyncMock(return_value=False)
        uow.users.get_by_id = AsyncMock(return_value=user)
        uow.admin_users.get_by_user_id = AsyncMock(return_value=None)

        async def get_tenant(tenant_id):
            if tenant_id == failing_id:
                raise ConnectionError("database unreachable")
            if tenant_id == slow_id:
                await asyncio.sleep(1)
            return make_tenant(id=tenant_id)

        async def get_relationship(user_id, tenant_id):
            if tenant_id in valid_ids:
                return UserTenant(user_id=user_id, tenant_id=tenant_id)
            return None

        uow.tenants.get_by_id = AsyncMock(side_effect=get_tenant)
        uow.user_tenants.get_by_user_and_tenant = AsyncMock(side_effect=get_relationship)
        return uow

    return factory


@pytest.mark.asyncio
async def test_batch_validation_isolates_failures(make_user, make_tenant):
    """One failing and one slow tenant never fail the batch"""
    # Arrange
    user = make_user()
    ok, missing, failing, slow = uuid4(), uuid4(), uuid4(), uuid4()
    factory = _uow_for(make_tenant, user, {ok}, failing_id=failing, slow_id=slow)
    use_case = ValidateMultipleTenantsUseCase(factory, item_timeout_seconds=0.05)

    # Act
    result = await use_case.execute(user.id, [ok, missing, failing, slow, ok])

    # Assert
    assert result.is_ok()
    response = result.value
    assert list(response.results) == [str(ok), str(missing), str(failing), str(slow)]
    assert response.valid_count == 1
    assert response.invalid_count == 3
    assert response.results[str(ok)].is_valid
    assert response.results[str(missing)].issues == ["relationship missing"]
    assert response.results[str(failing)].issues == ["validation failed: database unreachable"]
    assert response.results[str(slow)].issues == ["validation timed out"]


@pytest.mark.asyncio
async def test_super_admin_creates_relationship(mock_uow, make_user, make_tenant):
    actor, target, tenant = make_user(), make_user(email="farmer@greenfarms.in"), make_tenant()
    admin = AdminUser(user_id=actor.id, role=UserRole.super_admin, is_active=True)
    mock_uow.users.get_by_id = AsyncMock(side_effect=lambda uid: {actor.id: actor, target.id: target}.get(uid))
    mock_uow.admin_users.get_by_user_id = AsyncMock(return_value=admin)
    mock_uow.tenants.get_by_id = AsyncMock(return_value=tenant)
    mock_uow.user_tenants.upsert = AsyncMock(
        side_effect=lambda **kw: UserTenant(
            user_id=kw["user_id"], tenant_id=kw["tenant_id"], role=kw["role"], is_active=kw["is_active"]
        )
    )

    result = await CreateUserTenantRelationshipUseCase(mock_uow).execute(
        actor.id, tenant.id, role="farmer", target_user_id=target.id
    )

    assert result.is_ok()
    assert result.value.user_id == str(target.id)
    assert result.value.role == "farmer"
    assert result.value.is_active
    assert mock_uow.user_tenants.upsert.call_args.kwargs["metadata"]["created_via"] == "auto_fix"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_non_admin_cannot_create_relationship(mock_uow, make_user, make_tenant):
    actor = make_user()
    _wire(mock_uow, actor, None, make_tenant())
    mock_uow.user_tenants.upsert = AsyncMock()

    result = await CreateUserTenantRelationshipUseCase(mock_uow).execute(actor.id, uuid4())

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_PERMISSION"
    mock_uow.user_tenants.upsert.assert_not_called()


@pytest.mark.asyncio
async def test_relationship_rejects_system_roles(mock_uow):
    result = await CreateUserTenantRelationshipUseCase(mock_uow).execute(
        uuid4(), uuid4(), role="super_admin"
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_relationship_on_archived_tenant(mock_uow, make_user, make_tenant):
    actor = make_user()
    admin = AdminUser(user_id=actor.id, role=UserRole.super_admin, is_active=True)
    _wire(mock_uow, actor, admin, make_tenant(TenantStatus.archived))

    result = await CreateUserTenantRelationshipUseCase(mock_uow).execute(actor.id, uuid4())

    assert result.is_err()
    assert result.error.code == "TENANT_ARCHIVED"


@pytest.mark.asyncio
async def test_rbac_context_uses_active_tenant_role(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    relationship = UserTenant(user_id=user.id, tenant_id=tenant.id, role=UserRole.tenant_admin)
    _wire(mock_uow, user, None, tenant, relationship)

    context = (await LoadRBACContextUseCase(mock_uow).execute(user.id, tenant.id)).value

    assert context.tenant_id == tenant.id
    assert context.tenant_role == UserRole.tenant_admin
    assert context.has_permission(Permission.TENANT_UPDATE)
    assert context.can_access_tenant(tenant.id)


@pytest.mark.asyncio
async def test_rbac_context_ignores_inactive_relationship(mock_uow, make_user, make_tenant):
    user, tenant = make_user(), make_tenant()
    relationship = UserTenant(user_id=user.id, tenant_id=tenant.id, is_active=False)
    _wire(mock_uow, user, None, tenant, relationship)

    context = (await LoadRBACContextUseCase(mock_uow).execute(user.id, tenant.id)).value

    assert context.tenant_role is None
    assert not context.can_access_tenant(tenant.id)
    assert not context.has_permission(Permission.TENANT_READ)


@pytest.mark.asyncio
async def test_rbac_context_for_disabled_user(mock_uow, make_user):
    _wire(mock_uow, make_user(status=UserStatus.disabled))

    result = await LoadRBACContextUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "NOT_AUTHENTICATED"
