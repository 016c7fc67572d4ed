import uuid

import pytest
from sqlmodel import select

from tenancy.domain.entities import Lead, LeadStatus, Tenant, User, UserTenant


@pytest.mark.asyncio
async def test_convert_qualified_lead(client, db_session, create_lead, super_admin, auth_headers):
    lead = await create_lead()

    response = await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["tenant_slug"] == "green-farms"
    assert body["admin_provisioning_status"] == "completed"
    assert body["temp_password"]
    assert body["admin_user_id"]

    db_session.expire_all()
    tenant = (
        await db_session.exec(select(Tenant).where(Tenant.id == uuid.UUID(body["tenant_id"])))
    ).one()
    assert tenant.status.value == "trial"
    assert tenant.owner_email == "asha@greenfarms.in"

    stored_lead = (await db_session.exec(select(Lead).where(Lead.id == lead.id))).one()
    assert stored_lead.status == LeadStatus.converted
    assert stored_lead.converted_tenant_id == tenant.id

    admin = (
        await db_session.exec(select(User).where(User.email == "asha@greenfarms.in"))
    ).one()
    assert admin.must_change_password is True
    relationship = (
        await db_session.exec(
            select(UserTenant).where(
                UserTenant.user_id == admin.id, UserTenant.tenant_id == tenant.id
            )
        )
    ).one()
    assert relationship.role.value == "tenant_admin"
    assert relationship.is_active is True


@pytest.mark.asyncio
async def test_convert_links_existing_user_without_password(
    client, create_lead, create_user, super_admin, auth_headers
):
    existing = await create_user("asha@greenfarms.in")
    lead = await create_lead()

    response = await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["admin_user_id"] == str(existing.id)
    assert body["temp_password"] is None


@pytest.mark.asyncio
async def test_convert_twice_is_rejected(client, create_lead, super_admin, auth_headers):
    lead = await create_lead()
    headers = auth_headers(super_admin)
    await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=headers,
    )

    response = await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms Two", "tenant_slug": "green-farms-two"},
        headers=headers,
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "LEAD_NOT_QUALIFIED"


@pytest.mark.asyncio
async def test_convert_unqualified_lead(client, create_lead, super_admin, auth_headers):
    lead = await create_lead(status=LeadStatus.contacted)

    response = await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 422
    assert response.json()["error"]["reason"] == "lead status is contacted"


@pytest.mark.asyncio
async def test_convert_slug_conflict_leaves_lead_qualified(
    client, db_session, create_lead, create_tenant, super_admin, auth_headers
):
    await create_tenant(slug="green-farms")
    lead = await create_lead()

    response = await client.post(
        f"/leads/{lead.id}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "SLUG_CONFLICT"
    db_session.expire_all()
    stored = (await db_session.exec(select(Lead).where(Lead.id == lead.id))).one()
    assert stored.status == LeadStatus.qualified


@pytest.mark.asyncio
async def test_convert_unknown_lead(client, super_admin, auth_headers):
    response = await client.post(
        f"/leads/{uuid.uuid4()}/convert",
        json={"tenant_name": "Green Farms", "tenant_slug": "green-farms"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "LEAD_NOT_FOUND"
