import pytest

from src.app.services.session_context import SessionContext
from src.app.services.session_service import IAuthClient, SessionService
from src.app.use_cases.auth import AuthResponse, IdentityInfo, TenantInfo
from src.app.use_cases.tenants import SwitchTenantResponse
from src.app.use_cases.users import ChangePasswordResponse, ContextResponse
from src.libs.result import Error, Return
from tests.fixtures.tenant_ids import ACME, GLOBEX


def _identity(is_master=False):
    return IdentityInfo(
        id="u-9", email="root@hq.com", name="Root", tenant_id=ACME, is_master=is_master
    )


def _tenant(tenant_id=ACME, name="Acme"):
    return TenantInfo(id=tenant_id, name=name, access_flags={"problem": True})


class FakeAuthClient(IAuthClient):
    def __init__(self, is_master=False):
        self.is_master = is_master
        self.me_error = None
        self.switched_to = []
        self.password = "secret-pass"

    async def login(self, email, password):
        if password != "secret-pass":
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))
        return Return.ok(
            AuthResponse(access_token="token", identity=_identity(self.is_master), tenant=_tenant())
        )

    async def register(self, name, email, password, company_name):
        return Return.ok(
            AuthResponse(
                access_token="fresh",
                identity=IdentityInfo(id="u-2", email=email, name=name, tenant_id=GLOBEX),
                tenant=_tenant(GLOBEX, company_name),
            )
        )

    async def me(self, token):
        if self.me_error:
            return Return.err(self.me_error)
        return Return.ok(ContextResponse(identity=_identity(self.is_master), tenant=_tenant()))

    async def switch_tenant(self, token, tenant_id):
        self.switched_to.append(tenant_id)
        return Return.ok(
            SwitchTenantResponse(acting_tenant=_tenant(tenant_id, "Globex"), home_tenant_id=ACME)
        )

    async def change_password(self, token, current_password, new_password):
        if current_password != self.password:
            return Return.err(Error("INVALID_CREDENTIALS", "Current password is incorrect"))
        self.password = new_password
        return Return.ok(ChangePasswordResponse(status="success", message="Password changed"))


@pytest.mark.asyncio
async def test_sign_in_populates_session():
    session = SessionContext()
    service = SessionService(session, FakeAuthClient())

    result = await service.sign_in("root@hq.com", "secret-pass")

    assert result.is_ok()
    assert session.identity.email == "root@hq.com"
    assert session.access_token == "token"
    assert session.access_flags == {"problem": True}


@pytest.mark.asyncio
async def test_failed_sign_in_leaves_session_empty():
    session = SessionContext()
    result = await SessionService(session, FakeAuthClient()).sign_in("root@hq.com", "wrong")

    assert result.error.code == "INVALID_CREDENTIALS"
    assert session.is_authenticated is False


@pytest.mark.asyncio
async def test_register_signs_in_to_new_company():
    session = SessionContext()
    await SessionService(session, FakeAuthClient()).register(
        "Bea", "bea@globex.com", "secret-pass", "Globex"
    )

    assert session.get_tenant_reference().value == GLOBEX


@pytest.mark.asyncio
async def test_refresh_with_expired_token_signs_out():
    session = SessionContext()
    client = FakeAuthClient()
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")
    client.me_error = Error("NOT_AUTHENTICATED", "Token expired")

    result = await service.refresh()

    assert result.is_err()
    assert session.is_authenticated is False


@pytest.mark.asyncio
async def test_refresh_keeps_acting_tenant_for_master():
    session = SessionContext()
    service = SessionService(session, FakeAuthClient(is_master=True))
    await service.sign_in("root@hq.com", "secret-pass")
    await service.act_as_tenant(GLOBEX)

    await service.refresh()

    assert session.get_tenant_reference().value == GLOBEX


@pytest.mark.asyncio
async def test_refresh_while_acting_notifies_once_with_acting_tenant():
    session = SessionContext()
    service = SessionService(session, FakeAuthClient(is_master=True))
    await service.sign_in("root@hq.com", "secret-pass")
    await service.act_as_tenant(GLOBEX)
    seen = []
    session.subscribe(lambda context: seen.append(context.get_tenant_reference().value))

    await service.refresh()

    assert seen == [GLOBEX]


@pytest.mark.asyncio
async def test_refresh_drops_override_once_master_is_revoked():
    session = SessionContext()
    client = FakeAuthClient(is_master=True)
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")
    await service.act_as_tenant(GLOBEX)
    client.is_master = False

    await service.refresh()

    assert session.acting_tenant_id is None
    assert session.get_tenant_reference().value == ACME


@pytest.mark.asyncio
async def test_act_as_tenant_requires_master():
    session = SessionContext()
    client = FakeAuthClient()
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")

    result = await service.act_as_tenant(GLOBEX)

    assert result.error.code == "NOT_PRIVILEGED"
    assert client.switched_to == []


@pytest.mark.asyncio
async def test_act_as_tenant_then_return_home():
    session = SessionContext()
    client = FakeAuthClient(is_master=True)
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")

    result = await service.act_as_tenant(GLOBEX)
    assert result.value == GLOBEX
    assert client.switched_to == [GLOBEX]

    service.return_home()
    assert session.get_tenant_reference().value == ACME


@pytest.mark.asyncio
async def test_sign_out_clears_session():
    session = SessionContext()
    service = SessionService(session, FakeAuthClient())
    await service.sign_in("root@hq.com", "secret-pass")

    service.sign_out()

    assert session.identity is None
    assert session.access_token is None


@pytest.mark.asyncio
async def test_change_password_keeps_session():
    session = SessionContext()
    client = FakeAuthClient()
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")

    result = await service.change_password("secret-pass", "another-pass")

    assert result.is_ok()
    assert client.password == "another-pass"
    assert session.access_token == "token"


@pytest.mark.asyncio
async def test_change_password_rejects_same_password_before_calling_server():
    session = SessionContext()
    client = FakeAuthClient()
    service = SessionService(session, client)
    await service.sign_in("root@hq.com", "secret-pass")
    client.password = "server-side"

    result = await service.change_password("secret-pass", "secret-pass")

    assert result.error.code == "PASSWORD_UNCHANGED"
    assert client.password == "server-side"


@pytest.mark.asyncio
async def test_change_password_requires_sign_in():
    result = await SessionService(SessionContext(), FakeAuthClient()).change_password(
        "secret-pass", "another-pass"
    )

    assert result.error.code == "NOT_AUTHENTICATED"
