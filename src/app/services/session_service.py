"""
Sign-in, sign-out and acting-as-tenant flows over a SessionContext.
"""

import logging
from abc import ABC, abstractmethod

from src.app.services.session_context import (
    NOT_AUTHENTICATED,
    NOT_PRIVILEGED,
    Identity,
    SessionContext,
)
from src.app.use_cases.auth import AuthResponse
from src.app.use_cases.tenants import SwitchTenantResponse
from src.app.use_cases.users import ChangePasswordResponse, ContextResponse
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class IAuthClient(ABC):
    """Remote side of the session flows"""

    @abstractmethod
    async def login(self, email: str, password: str) -> Result[AuthResponse]:
        pass

    @abstractmethod
    async def register(
        self, name: str, email: str, password: str, company_name: str
    ) -> Result[AuthResponse]:
        pass

    @abstractmethod
    async def me(self, token: str) -> Result[ContextResponse]:
        pass

    @abstractmethod
    async def switch_tenant(self, token: str, tenant_id: str) -> Result[SwitchTenantResponse]:
        pass

    @abstractmethod
    async def change_password(
        self, token: str, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        pass


class SessionService:
    def __init__(self, session: SessionContext, auth_client: IAuthClient):
        self.session = session
        self.auth_client = auth_client

    def _apply(self, auth: AuthResponse) -> Identity:
        identity = Identity.model_validate(auth.identity.model_dump())
        self.session.set_identity(
            identity,
            access_token=auth.access_token,
            access_flags=auth.tenant.access_flags,
        )
        return identity

    async def sign_in(self, email: str, password: str) -> Result[Identity]:
        result = await self.auth_client.login(email, password)
        if result.is_err():
            logger.info(f"Sign-in refused: {result.error.code}")
            return result
        return Return.ok(self._apply(result.value))

    async def register(
        self, name: str, email: str, password: str, company_name: str
    ) -> Result[Identity]:
        result = await self.auth_client.register(name, email, password, company_name)
        if result.is_err():
            return result
        return Return.ok(self._apply(result.value))

    def sign_out(self) -> None:
        self.session.set_identity(None)

    async def change_password(
        self, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """The session and its token are left as they are"""
        token = self.session.access_token
        if not self.session.is_authenticated or not token:
            return Return.err(Error(NOT_AUTHENTICATED, "Nobody is signed in"))
        if new_password == current_password:
            return Return.err(
                Error(
                    "PASSWORD_UNCHANGED",
                    "New password must be different from the current one",
                )
            )
        return await self.auth_client.change_password(token, current_password, new_password)

    async def refresh(self) -> Result[Identity]:
        """Reload identity and access flags; an expired token signs out"""
        token = self.session.access_token
        if not self.session.is_authenticated or not token:
            return Return.err(Error(NOT_AUTHENTICATED, "Nobody is signed in"))

        result = await self.auth_client.me(token)
        if result.is_err():
            if result.error.code == NOT_AUTHENTICATED:
                self.sign_out()
            return result

        acting = self.session.acting_tenant_id
        identity = Identity.model_validate(result.value.identity.model_dump())
        self.session.set_identity(
            identity,
            access_token=token,
            access_flags=result.value.tenant.access_flags,
            acting_tenant_id=acting,
        )
        return Return.ok(identity)

    async def act_as_tenant(self, tenant_id: str) -> Result[str]:
        """Record the switch server side, then set the local override"""
        if not self.session.is_authenticated:
            return Return.err(Error(NOT_AUTHENTICATED, "Nobody is signed in"))
        if not self.session.is_master:
            return Return.err(Error(NOT_PRIVILEGED, "Only master users can switch company"))

        result = await self.auth_client.switch_tenant(self.session.access_token, str(tenant_id))
        if result.is_err():
            return result
        return self.session.switch_tenant(result.value.acting_tenant.id)

    def return_home(self) -> None:
        self.session.clear_tenant_override()
