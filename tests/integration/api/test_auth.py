import pytest
from httpx import AsyncClient

from tests.fixtures.auth_headers import bearer
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_register_opens_a_company(client: AsyncClient, register):
    auth = await register("acme_owner")

    assert auth["access_token"]
    assert exclude_keys(auth["identity"], {"id", "tenant_id", "avatar_url"}) == {
        "email": "ana@acme.com",
        "name": "Ana Ortiz",
        "is_master": False,
    }
    assert auth["tenant"]["name"] == "Acme Corp"
    assert auth["tenant"]["access_flags"]["problem"] is True
    assert auth["tenant"]["access_flags"]["financials"] is False
    assert auth["identity"]["tenant_id"] == auth["tenant"]["id"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, register, test_data):
    await register("acme_owner")

    response = await client.post("/auth/register", json=test_data.get_copy("acme_owner"))

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_register_validates_payload(client: AsyncClient, test_data):
    payload = test_data.get_copy("acme_owner")
    payload["password"] = "short"

    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_and_wrong_password(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    account = test_data.get("acme_owner")

    ok = await client.post(
        "/auth/login", json={"email": account["email"], "password": account["password"]}
    )
    wrong = await client.post(
        "/auth/login", json={"email": account["email"], "password": "NotThePassword"}
    )

    assert ok.status_code == 200
    assert ok.json()["identity"]["id"] == auth["identity"]["id"]
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_me_returns_identity_and_company(client: AsyncClient, register):
    auth = await register("acme_owner")

    response = await client.get("/users/me", headers=bearer(auth))

    assert response.status_code == 200
    data = response.json()
    assert data["identity"] == auth["identity"]
    assert data["tenant"] == auth["tenant"]


@pytest.mark.asyncio
async def test_me_rejects_invalid_token(client: AsyncClient):
    response = await client.get("/users/me", headers={"Authorization": "Bearer invalid"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, register):
    auth = await register("acme_owner")

    response = await client.patch("/users/me", json={"name": "Ana O."}, headers=bearer(auth))
    blank = await client.patch("/users/me", json={"name": "  "}, headers=bearer(auth))

    assert response.status_code == 200
    assert response.json()["name"] == "Ana O."
    assert blank.status_code == 400
    assert blank.json()["error"]["code"] == "INVALID_NAME"


@pytest.mark.asyncio
async def test_change_password_then_sign_in_with_new_one(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    account = test_data.get("acme_owner")

    response = await client.patch(
        "/users/me/password",
        json={"current_password": account["password"], "new_password": "BrandNewPass456!"},
        headers=bearer(auth),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "success"

    old = await client.post(
        "/auth/login", json={"email": account["email"], "password": account["password"]}
    )
    new = await client.post(
        "/auth/login", json={"email": account["email"], "password": "BrandNewPass456!"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_change_password_rejections(client: AsyncClient, register, test_data):
    auth = await register("acme_owner")
    account = test_data.get("acme_owner")

    wrong = await client.patch(
        "/users/me/password",
        json={"current_password": "WrongPass999", "new_password": "BrandNewPass456!"},
        headers=bearer(auth),
    )
    unchanged = await client.patch(
        "/users/me/password",
        json={"current_password": account["password"], "new_password": account["password"]},
        headers=bearer(auth),
    )
    short = await client.patch(
        "/users/me/password",
        json={"current_password": account["password"], "new_password": "short"},
        headers=bearer(auth),
    )
    anonymous = await client.patch(
        "/users/me/password",
        json={"current_password": account["password"], "new_password": "BrandNewPass456!"},
    )

    assert wrong.status_code == 400
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert unchanged.status_code == 400
    assert unchanged.json()["error"]["code"] == "PASSWORD_UNCHANGED"
    assert short.status_code == 422
    assert anonymous.status_code in (401, 403)
