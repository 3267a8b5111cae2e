"""
Client for the table service's auth, profile and admin endpoints.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from src.app.services.session_service import IAuthClient
from src.app.use_cases.admin import AccessFlagsResponse, ListTenantsResponse
from src.app.use_cases.auth import AuthResponse
from src.app.use_cases.tenants import SwitchTenantResponse
from src.app.use_cases.users import ChangePasswordResponse, ContextResponse
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class AuthClient(IAuthClient):
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _call(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Result[Dict[str, Any]]:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = await self.client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {path} failed: {exc!r}")
            return Return.err(Error("NETWORK_ERROR", str(exc) or exc.__class__.__name__))

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            if isinstance(error, dict):
                return Return.err(Error(error.get("code", "HTTP_ERROR"), error.get("message", "")))
            if response.status_code == 401:
                return Return.err(Error("NOT_AUTHENTICATED", "Invalid or expired token"))
            return Return.err(Error("HTTP_ERROR", f"HTTP {response.status_code}"))
        return Return.ok(body)

    async def register(
        self, name: str, email: str, password: str, company_name: str
    ) -> Result[AuthResponse]:
        result = await self._call(
            "POST",
            "/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "company_name": company_name,
            },
        )
        if result.is_err():
            return result
        return Return.ok(AuthResponse.model_validate(result.value))

    async def login(self, email: str, password: str) -> Result[AuthResponse]:
        result = await self._call(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        if result.is_err():
            return result
        return Return.ok(AuthResponse.model_validate(result.value))

    async def me(self, token: str) -> Result[ContextResponse]:
        result = await self._call("GET", "/users/me", token=token)
        if result.is_err():
            return result
        return Return.ok(ContextResponse.model_validate(result.value))

    async def switch_tenant(self, token: str, tenant_id: str) -> Result[SwitchTenantResponse]:
        result = await self._call(
            "POST", "/tenants/switch", token=token, json={"tenant_id": tenant_id}
        )
        if result.is_err():
            return result
        return Return.ok(SwitchTenantResponse.model_validate(result.value))

    async def change_password(
        self, token: str, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        result = await self._call(
            "PATCH",
            "/users/me/password",
            token=token,
            json={"current_password": current_password, "new_password": new_password},
        )
        if result.is_err():
            return result
        return Return.ok(ChangePasswordResponse.model_validate(result.value))

    async def list_tenants(self, token: str) -> Result[ListTenantsResponse]:
        result = await self._call("GET", "/admin/tenants", token=token)
        if result.is_err():
            return result
        return Return.ok(ListTenantsResponse.model_validate(result.value))

    async def get_access_flags(self, token: str, tenant_id: str) -> Result[AccessFlagsResponse]:
        result = await self._call("GET", f"/admin/tenants/{tenant_id}/access", token=token)
        if result.is_err():
            return result
        return Return.ok(AccessFlagsResponse.model_validate(result.value))

    async def update_access_flags(
        self, token: str, tenant_id: str, access_flags: Dict[str, bool]
    ) -> Result[AccessFlagsResponse]:
        result = await self._call(
            "PUT",
            f"/admin/tenants/{tenant_id}/access",
            token=token,
            json={"access_flags": access_flags},
        )
        if result.is_err():
            return result
        return Return.ok(AccessFlagsResponse.model_validate(result.value))
