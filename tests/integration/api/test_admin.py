import pytest
from httpx import AsyncClient

from tests.fixtures.auth_headers import ADMIN_HEADERS, bearer


@pytest.mark.asyncio
async def test_grant_master_requires_admin_key(client: AsyncClient, register):
    auth = await register("acme_owner")
    path = f"/admin/users/{auth['identity']['id']}/master"

    missing = await client.post(path)
    wrong = await client.post(path, headers={"X-Admin-API-Key": "nope"})

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHORIZED"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_grant_and_revoke_master(client: AsyncClient, register):
    auth = await register("acme_owner")
    path = f"/admin/users/{auth['identity']['id']}/master"

    granted = await client.post(path, headers=ADMIN_HEADERS)
    revoked = await client.post(path, json={"is_master": False}, headers=ADMIN_HEADERS)
    unknown = await client.post(
        "/admin/users/99999999-9999-9999-9999-999999999999/master", headers=ADMIN_HEADERS
    )

    assert granted.json() == {"user_id": auth["identity"]["id"], "is_master": True}
    assert revoked.json()["is_master"] is False
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_master_lists_companies(client: AsyncClient, register, login_as_master):
    acme = await register("acme_owner")
    await register("globex_owner")

    refused = await client.get("/admin/tenants", headers=bearer(acme))
    master = await login_as_master("acme_owner", acme)
    listed = await client.get("/admin/tenants", headers=bearer(master))

    assert refused.status_code == 403
    assert sorted(tenant["name"] for tenant in listed.json()["tenants"]) == ["Acme Corp", "Globex"]


@pytest.mark.asyncio
async def test_master_grants_feature_access(client: AsyncClient, register, login_as_master, test_data):
    acme = await register("acme_owner")
    globex = await register("globex_owner")
    master = await login_as_master("acme_owner", acme)
    path = f"/admin/tenants/{globex['tenant']['id']}/access"

    updated = await client.put(
        path,
        json={"access_flags": {"problem": True, "financials": True}},
        headers=bearer(master),
    )
    own_view = await client.get(path, headers=bearer(globex))
    me = await client.get("/users/me", headers=bearer(globex))

    assert updated.status_code == 200
    assert own_view.json()["access_flags"]["financials"] is True
    assert own_view.json()["access_flags"]["customers"] is False
    assert me.json()["tenant"]["access_flags"]["financials"] is True


@pytest.mark.asyncio
async def test_access_flag_edits_are_validated(client: AsyncClient, register, login_as_master):
    acme = await register("acme_owner")
    path = f"/admin/tenants/{acme['tenant']['id']}/access"

    member = await client.put(path, json={"access_flags": {}}, headers=bearer(acme))
    master = await login_as_master("acme_owner", acme)
    unknown_area = await client.put(
        path, json={"access_flags": {"payroll": True}}, headers=bearer(master)
    )

    assert member.status_code == 403
    assert unknown_area.status_code == 400
    assert unknown_area.json()["error"]["code"] == "INVALID_ACCESS_AREA"
