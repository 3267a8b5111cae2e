import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.notifier import Notifier
from src.app.services.session_context import Identity, SessionContext
from tests.fixtures.in_memory_store import InMemoryTabularStore
from tests.fixtures.tenant_ids import ACME


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock()
    uow.tenants.list_all = AsyncMock(return_value=[])
    uow.tenants.create = AsyncMock(side_effect=lambda tenant: tenant)
    uow.tenants.update = AsyncMock(side_effect=lambda tenant: tenant)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.get_by_tenant_paginated = AsyncMock(return_value=([], None))

    uow.records = MagicMock()
    uow.records.select = AsyncMock()
    uow.records.insert = AsyncMock()
    uow.records.update = AsyncMock()
    uow.records.delete = AsyncMock()
    return uow


@pytest.fixture
def member_identity():
    return Identity(
        id="u-1", email="ana@acme.com", name="Ana", tenant_id=ACME, is_master=False
    )


@pytest.fixture
def master_identity():
    return Identity(
        id="u-9", email="root@hq.com", name="Root", tenant_id=ACME, is_master=True
    )


@pytest.fixture
def session(member_identity):
    context = SessionContext()
    context.set_identity(member_identity, access_token="token", access_flags={"problem": True})
    return context


@pytest.fixture
def store():
    return InMemoryTabularStore()


@pytest.fixture
def notifier():
    return Notifier()
