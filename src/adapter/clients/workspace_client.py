"""
Wiring of the workspace client from ApplicationConfig.

    async with WorkspaceClient.from_config(ApplicationConfig) as workspace:
        await workspace.sessions.sign_in(email, password)
        problems = workspace.controller("problem")
        await problems.load()
"""

import logging
from typing import Optional

import httpx

from src.adapter.clients.auth_client import AuthClient
from src.adapter.clients.http_tabular_store import HttpTabularStore
from src.adapter.services.file_session_storage import FileSessionStorage
from src.app.controllers import CollectionController, controller_for
from src.app.services.access_gate import RouteDecision, resolve_route
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.session_service import SessionService
from src.app.services.session_storage import ISessionStorage

logger = logging.getLogger(__name__)


class WorkspaceClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        storage: Optional[ISessionStorage] = None,
    ):
        self.http = http
        self.session = SessionContext(storage)
        self.notifier = Notifier()
        self.store = HttpTabularStore(http, lambda: self.session.access_token)
        self.auth = AuthClient(http)
        self.sessions = SessionService(self.session, self.auth)

    @classmethod
    def from_config(cls, config) -> "WorkspaceClient":
        http = httpx.AsyncClient(
            base_url=config.STORE_API_URL + (config.API_PREFIX or ""),
            timeout=config.STORE_TIMEOUT_SECONDS,
        )
        storage = FileSessionStorage(config.SESSION_STORAGE_PATH, config.SESSION_STORAGE_KEY)
        logger.debug(f"Workspace client for {config.STORE_API_URL}")
        return cls(http, storage)

    def controller(self, entity_type) -> CollectionController:
        return controller_for(entity_type, self.store, self.session, self.notifier)

    def route(self, path: str) -> RouteDecision:
        return resolve_route(path, self.session)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "WorkspaceClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
