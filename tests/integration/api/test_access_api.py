import uuid

import pytest

from tenancy.domain.entities import UserRole


@pytest.mark.asyncio
async def test_member_has_valid_access(client, create_tenant, create_user, add_member, auth_headers):
    data = await create_tenant()
    tenant_id = data["tenant"]["id"]
    member = await create_user("admin@greenfarms.in")
    await add_member(member, uuid.UUID(tenant_id), role=UserRole.tenant_user)

    response = await client.get(f"/access/tenants/{tenant_id}", headers=auth_headers(member))

    assert response.status_code == 200
    body = response.json()
    assert body["is_valid"] is True
    assert body["relationship_exists"] is True
    assert body["relationship_active"] is True
    assert body["role"] == "tenant_user"
    assert body["issues"] == []


@pytest.mark.asyncio
async def test_inactive_relationship_is_invalid(
    client, create_tenant, create_user, add_member, auth_headers
):
    data = await create_tenant()
    tenant_id = data["tenant"]["id"]
    member = await create_user("admin@greenfarms.in")
    await add_member(member, uuid.UUID(tenant_id), is_active=False)

    response = await client.get(f"/access/tenants/{tenant_id}", headers=auth_headers(member))

    body = response.json()
    assert body["is_valid"] is False
    assert body["relationship_exists"] is True
    assert body["can_auto_fix"] is False
    assert "relationship inactive" in body["issues"]


@pytest.mark.asyncio
async def test_super_admin_bypass_without_relationship(
    client, create_tenant, super_admin, auth_headers
):
    data = await create_tenant()

    response = await client.get(
        f"/access/tenants/{data['tenant']['id']}", headers=auth_headers(super_admin)
    )

    body = response.json()
    assert body["is_valid"] is True
    assert body["is_super_admin"] is True
    assert body["relationship_exists"] is False
    assert body["can_auto_fix"] is True
    assert "relationship missing" in body["issues"]


@pytest.mark.asyncio
async def test_access_requires_authentication(client):
    response = await client.get(f"/access/tenants/{uuid.uuid4()}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_batch_validation(client, create_tenant, create_user, add_member, auth_headers):
    first = await create_tenant()
    second = await create_tenant(slug="other-farms", owner_email="owner@otherfarms.in")
    member = await create_user("admin@greenfarms.in")
    await add_member(member, uuid.UUID(first["tenant"]["id"]))
    missing = str(uuid.uuid4())

    response = await client.post(
        "/access/tenants/validate",
        json={
            "tenant_ids": [
                first["tenant"]["id"],
                second["tenant"]["id"],
                missing,
                first["tenant"]["id"],
            ]
        },
        headers=auth_headers(member),
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["results"]) == 3
    assert body["valid_count"] == 1
    assert body["invalid_count"] == 2
    assert body["results"][first["tenant"]["id"]]["is_valid"] is True
    assert "relationship missing" in body["results"][second["tenant"]["id"]]["issues"]
    assert "tenant not found" in body["results"][missing]["issues"]


@pytest.mark.asyncio
async def test_batch_validation_rejects_oversized_batch(client, super_admin, auth_headers):
    response = await client.post(
        "/access/tenants/validate",
        json={"tenant_ids": [str(uuid.uuid4()) for _ in range(101)]},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_super_admin_repairs_relationship(
    client, create_tenant, create_user, super_admin, auth_headers
):
    data = await create_tenant()
    tenant_id = data["tenant"]["id"]
    user = await create_user("admin@greenfarms.in")

    response = await client.post(
        f"/access/tenants/{tenant_id}/relationship",
        json={"role": "tenant_admin", "user_id": str(user.id)},
        headers=auth_headers(super_admin),
    )
    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(user.id),
        "tenant_id": tenant_id,
        "role": "tenant_admin",
        "is_active": True,
    }

    # Upsert: repeating the call changes the role in place
    response = await client.post(
        f"/access/tenants/{tenant_id}/relationship",
        json={"role": "tenant_user", "user_id": str(user.id)},
        headers=auth_headers(super_admin),
    )
    assert response.status_code == 200
    assert response.json()["role"] == "tenant_user"

    check = await client.get(f"/access/tenants/{tenant_id}", headers=auth_headers(user))
    assert check.json()["is_valid"] is True
    assert check.json()["role"] == "tenant_user"


@pytest.mark.asyncio
async def test_relationship_requires_super_admin(
    client, create_tenant, create_user, auth_headers
):
    data = await create_tenant()
    user = await create_user("admin@greenfarms.in")

    response = await client.post(
        f"/access/tenants/{data['tenant']['id']}/relationship",
        json={"role": "tenant_admin"},
        headers=auth_headers(user),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_PERMISSION"


@pytest.mark.asyncio
async def test_relationship_rejects_system_role(client, create_tenant, super_admin, auth_headers):
    data = await create_tenant()

    response = await client.post(
        f"/access/tenants/{data['tenant']['id']}/relationship",
        json={"role": "super_admin"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_relationship_unknown_user(client, create_tenant, super_admin, auth_headers):
    data = await create_tenant()

    response = await client.post(
        f"/access/tenants/{data['tenant']['id']}/relationship",
        json={"user_id": str(uuid.uuid4())},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"
