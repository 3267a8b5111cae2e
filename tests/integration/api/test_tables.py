import pytest
from httpx import AsyncClient

from tests.fixtures.auth_headers import bearer
from tests.utils.json_compare import exclude_keys

STORE_COLUMNS = {"id", "created_at", "updated_at"}


@pytest.mark.asyncio
async def test_crud_round_trip(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    tenant_id = auth["tenant"]["id"]
    channel = test_data.get_copy("channel")

    created = await client.post(
        "/tables/channels",
        json={"row": {**channel, "tenant_id": tenant_id}},
        headers=bearer(auth),
    )
    assert created.status_code == 201
    row = created.json()["data"][0]
    assert exclude_keys(row, STORE_COLUMNS) == {**channel, "tenant_id": tenant_id}

    updated = await client.patch(
        "/tables/channels",
        params={"id": row["id"], "tenant_id": tenant_id},
        json={"patch": {"objective": "Acquisition"}},
        headers=bearer(auth),
    )
    assert updated.status_code == 200

    listed = await client.get(
        "/tables/channels", params={"tenant_id": tenant_id}, headers=bearer(auth)
    )
    assert [item["objective"] for item in listed.json()["data"]] == ["Acquisition"]

    deleted = await client.delete(
        "/tables/channels",
        params={"id": row["id"], "tenant_id": tenant_id},
        headers=bearer(auth),
    )
    assert deleted.status_code == 200

    listed = await client.get(
        "/tables/channels", params={"tenant_id": tenant_id}, headers=bearer(auth)
    )
    assert listed.json()["data"] == []


@pytest.mark.asyncio
async def test_select_filters_by_column(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    tenant_id = auth["tenant"]["id"]
    for status in ("to_do", "doing", "doing"):
        task = {**test_data.get_copy("task"), "status": status, "tenant_id": tenant_id}
        await client.post("/tables/tasks", json={"row": task}, headers=bearer(auth))

    response = await client.get(
        "/tables/tasks", params={"tenant_id": tenant_id, "status": "doing"}, headers=bearer(auth)
    )

    assert [task["status"] for task in response.json()["data"]] == ["doing", "doing"]


@pytest.mark.asyncio
async def test_tenant_filter_is_required(client: AsyncClient, register):
    auth = await register("acme_owner")

    response = await client.get("/tables/tasks", headers=bearer(auth))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_TENANT_FILTER"


@pytest.mark.asyncio
async def test_companies_cannot_see_each_other(client: AsyncClient, register, test_data):
    acme = await register("acme_owner")
    globex = await register("globex_owner")
    await client.post(
        "/tables/channels",
        json={"row": {**test_data.get_copy("channel"), "tenant_id": acme["tenant"]["id"]}},
        headers=bearer(acme),
    )

    read = await client.get(
        "/tables/channels", params={"tenant_id": acme["tenant"]["id"]}, headers=bearer(globex)
    )
    write = await client.post(
        "/tables/channels",
        json={"row": {**test_data.get_copy("channel"), "tenant_id": acme["tenant"]["id"]}},
        headers=bearer(globex),
    )
    own = await client.get(
        "/tables/channels", params={"tenant_id": globex["tenant"]["id"]}, headers=bearer(globex)
    )

    assert read.status_code == 403
    assert read.json()["error"]["code"] == "TENANT_FORBIDDEN"
    assert write.status_code == 403
    assert own.json()["data"] == []


@pytest.mark.asyncio
async def test_update_without_id_is_rejected(client: AsyncClient, register):
    auth = await register("acme_owner")

    response = await client.patch(
        "/tables/tasks",
        params={"tenant_id": auth["tenant"]["id"]},
        json={"patch": {"status": "done"}},
        headers=bearer(auth),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_ID_FILTER"


@pytest.mark.asyncio
async def test_tenant_column_cannot_be_patched(client: AsyncClient, register, test_data):
    acme = await register("acme_owner")
    globex = await register("globex_owner")
    tenant_id = acme["tenant"]["id"]
    created = await client.post(
        "/tables/tasks",
        json={"row": {**test_data.get_copy("task"), "tenant_id": tenant_id}},
        headers=bearer(acme),
    )

    response = await client.patch(
        "/tables/tasks",
        params={"id": created.json()["data"][0]["id"], "tenant_id": tenant_id},
        json={"patch": {"tenant_id": globex["tenant"]["id"]}},
        headers=bearer(acme),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "IMMUTABLE_COLUMN"


@pytest.mark.asyncio
async def test_unknown_table_and_invalid_row(client: AsyncClient, register):
    auth = await register("acme_owner")
    tenant_id = auth["tenant"]["id"]

    unknown = await client.get(
        "/tables/payroll", params={"tenant_id": tenant_id}, headers=bearer(auth)
    )
    invalid = await client.post(
        "/tables/financial_entries",
        json={"row": {"name": "Rent", "tenant_id": tenant_id}},
        headers=bearer(auth),
    )

    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "UNKNOWN_TABLE"
    assert invalid.status_code == 400
    assert invalid.json()["error"]["code"] == "INVALID_ROW"


@pytest.mark.asyncio
async def test_filter_on_unknown_column_is_rejected(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    tenant_id = auth["tenant"]["id"]
    created = await client.post(
        "/tables/channels",
        json={"row": {**test_data.get_copy("channel"), "tenant_id": tenant_id}},
        headers=bearer(auth),
    )
    row_id = created.json()["data"][0]["id"]

    select = await client.get(
        "/tables/channels",
        params={"tenant_id": tenant_id, "bogus": "x"},
        headers=bearer(auth),
    )
    update = await client.patch(
        "/tables/channels",
        params={"id": row_id, "tenant_id": tenant_id, "bogus": "x"},
        json={"patch": {"objective": "Retention"}},
        headers=bearer(auth),
    )
    delete = await client.delete(
        "/tables/channels",
        params={"id": row_id, "tenant_id": tenant_id, "bogus": "x"},
        headers=bearer(auth),
    )

    for response in (select, update, delete):
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNKNOWN_COLUMN"

    listed = await client.get(
        "/tables/channels", params={"tenant_id": tenant_id}, headers=bearer(auth)
    )
    assert [item["id"] for item in listed.json()["data"]] == [row_id]


@pytest.mark.asyncio
async def test_master_reads_other_company(client: AsyncClient, register, login_as_master, test_data):
    acme = await register("acme_owner")
    globex = await register("globex_owner")
    await client.post(
        "/tables/financial_entries",
        json={"row": {**test_data.get_copy("financial_entry"), "tenant_id": globex["tenant"]["id"]}},
        headers=bearer(globex),
    )
    master = await login_as_master("acme_owner", acme)

    response = await client.get(
        "/tables/financial_entries",
        params={"tenant_id": globex["tenant"]["id"]},
        headers=bearer(master),
    )

    assert response.status_code == 200
    assert [entry["name"] for entry in response.json()["data"]] == ["Seed round"]
