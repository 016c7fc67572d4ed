import uuid

import pytest

from tenancy.domain.entities import UserRole


@pytest.fixture
def tenant_admin_setup(create_tenant, create_user, add_member, auth_headers):
    async def _setup():
        data = await create_tenant()
        admin = await create_user("admin@greenfarms.in")
        await add_member(admin, uuid.UUID(data["tenant"]["id"]), role=UserRole.tenant_admin)
        return data, auth_headers(admin)

    return _setup


@pytest.mark.asyncio
async def test_tenant_onboarding_workflow_has_six_pending_steps(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()

    response = await client.get(f"/tenants/{data['tenant']['id']}/onboarding", headers=headers)

    assert response.status_code == 200
    workflow = response.json()
    assert workflow["id"] == data["workflow_id"]
    assert workflow["status"] == "in_progress"
    assert workflow["current_step"] == 1
    assert workflow["total_steps"] == 6
    assert workflow["progress_percent"] == 0
    assert [s["step_number"] for s in workflow["steps"]] == [1, 2, 3, 4, 5, 6]
    assert all(s["step_status"] == "pending" for s in workflow["steps"])


@pytest.mark.asyncio
async def test_create_workflow_is_idempotent(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()

    response = await client.post(
        "/onboarding/workflows", json={"tenant_id": data["tenant"]["id"]}, headers=headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["created"] is False
    assert body["workflow"]["id"] == data["workflow_id"]


@pytest.mark.asyncio
async def test_create_workflow_unknown_tenant(client, super_admin, auth_headers):
    response = await client.post(
        "/onboarding/workflows",
        json={"tenant_id": str(uuid.uuid4())},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_walk_through_all_steps(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()
    workflow_id = data["workflow_id"]

    for number in (1, 2, 4, 6):
        response = await client.post(
            f"/onboarding/workflows/{workflow_id}/steps/{number}",
            json={"status": "completed", "step_data": {"note": f"step {number}"}},
            headers=headers,
        )
        assert response.status_code == 200, response.text

    workflow = response.json()
    assert workflow["status"] == "in_progress"
    assert workflow["current_step"] == 3

    for number in (3, 5):
        response = await client.post(
            f"/onboarding/workflows/{workflow_id}/steps/{number}",
            json={"status": "skipped"},
            headers=headers,
        )
        assert response.status_code == 200, response.text

    workflow = response.json()
    assert workflow["status"] == "completed"
    assert workflow["completed_at"] is not None
    assert workflow["current_step"] == workflow["total_steps"]
    assert workflow["progress_percent"] == 100
    assert workflow["version"] == 7
    first = workflow["steps"][0]
    assert first["step_data"]["note"] == "step 1"
    assert first["step_data"]["estimated_minutes"] == 15

    response = await client.post(
        f"/onboarding/workflows/{workflow_id}/steps/1",
        json={"status": "in_progress"},
        headers=headers,
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "WORKFLOW_COMPLETED"


@pytest.mark.asyncio
async def test_failed_step_requires_validation_errors(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()
    url = f"/onboarding/workflows/{data['workflow_id']}/steps/1"

    response = await client.post(url, json={"status": "failed"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERRORS_REQUIRED"

    response = await client.post(
        url,
        json={"status": "failed", "validation_errors": ["GST certificate missing"]},
        headers=headers,
    )
    assert response.status_code == 200
    step = response.json()["steps"][0]
    assert step["step_status"] == "failed"
    assert step["validation_errors"] == ["GST certificate missing"]


@pytest.mark.asyncio
async def test_invalid_step_status_and_number(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()
    workflow_id = data["workflow_id"]

    response = await client.post(
        f"/onboarding/workflows/{workflow_id}/steps/1", json={"status": "done"}, headers=headers
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STEP_STATUS"

    response = await client.post(
        f"/onboarding/workflows/{workflow_id}/steps/7",
        json={"status": "completed"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STEP_NUMBER"


@pytest.mark.asyncio
async def test_pause_blocks_advances_until_resumed(client, tenant_admin_setup):
    data, headers = await tenant_admin_setup()
    workflow_id = data["workflow_id"]

    response = await client.post(f"/onboarding/workflows/{workflow_id}/pause", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "paused"

    response = await client.post(
        f"/onboarding/workflows/{workflow_id}/steps/1",
        json={"status": "completed"},
        headers=headers,
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "WORKFLOW_PAUSED"

    response = await client.post(f"/onboarding/workflows/{workflow_id}/resume", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"

    response = await client.post(
        f"/onboarding/workflows/{workflow_id}/steps/1",
        json={"status": "completed"},
        headers=headers,
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_workflow_of_other_tenant_is_denied(
    client, tenant_admin_setup, create_tenant
):
    _, headers = await tenant_admin_setup()
    other = await create_tenant(slug="other-farms", owner_email="owner@otherfarms.in")

    response = await client.get(
        f"/onboarding/workflows/{other['workflow_id']}", headers=headers
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_workflow(client, super_admin, auth_headers):
    response = await client.get(
        f"/onboarding/workflows/{uuid.uuid4()}", headers=auth_headers(super_admin)
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "WORKFLOW_NOT_FOUND"
