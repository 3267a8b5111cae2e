from uuid import UUID, uuid4

import pytest

from src.app.repositories.tabular_store import StoreResponse
from src.app.use_cases.caller import Caller
from src.app.use_cases.tables import (
    DeleteRowsUseCase,
    InsertRowUseCase,
    SelectRowsUseCase,
    UpdateRowsUseCase,
)
from tests.fixtures.tenant_ids import ACME, GLOBEX


@pytest.fixture
def member():
    return Caller(user_id=uuid4(), tenant_id=UUID(ACME))


@pytest.fixture
def master():
    return Caller(user_id=uuid4(), tenant_id=UUID(ACME), is_master=True)


@pytest.mark.asyncio
async def test_select_requires_tenant_filter(mock_uow, member):
    result = await SelectRowsUseCase(mock_uow).execute(member, "tasks", {})

    assert result.error.code == "MISSING_TENANT_FILTER"
    mock_uow.records.select.assert_not_called()


@pytest.mark.asyncio
async def test_select_rejects_malformed_tenant(mock_uow, member):
    result = await SelectRowsUseCase(mock_uow).execute(member, "tasks", {"tenant_id": "acme"})

    assert result.error.code == "INVALID_TENANT_ID"


@pytest.mark.asyncio
async def test_member_cannot_read_other_company(mock_uow, member):
    result = await SelectRowsUseCase(mock_uow).execute(member, "tasks", {"tenant_id": GLOBEX})

    assert result.error.code == "TENANT_FORBIDDEN"
    mock_uow.records.select.assert_not_called()


@pytest.mark.asyncio
async def test_master_reads_any_company(mock_uow, master):
    mock_uow.records.select.return_value = StoreResponse.success([{"id": 1, "tenant_id": GLOBEX}])

    result = await SelectRowsUseCase(mock_uow).execute(
        master, "tasks", {"tenant_id": GLOBEX, "status": "doing"}
    )

    assert result.value == [{"id": 1, "tenant_id": GLOBEX}]
    mock_uow.records.select.assert_awaited_once_with(
        "tasks", {"tenant_id": GLOBEX, "status": "doing"}
    )


@pytest.mark.asyncio
async def test_store_error_is_passed_through(mock_uow, member):
    mock_uow.records.select.return_value = StoreResponse.failure("NO_ROWS", "No rows")

    result = await SelectRowsUseCase(mock_uow).execute(member, "problems", {"tenant_id": ACME})

    assert result.error.code == "NO_ROWS"


@pytest.mark.asyncio
async def test_insert_commits_normalized_tenant(mock_uow, member):
    mock_uow.records.insert.return_value = StoreResponse.success(
        [{"id": 5, "name": "Email", "tenant_id": ACME}]
    )

    result = await InsertRowUseCase(mock_uow).execute(
        member, "channels", {"name": "Email", "tenant_id": ACME.upper()}
    )

    assert result.value[0]["id"] == 5
    mock_uow.records.insert.assert_awaited_once_with(
        "channels", {"name": "Email", "tenant_id": ACME}
    )
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_insert_failure_does_not_commit(mock_uow, member):
    mock_uow.records.insert.return_value = StoreResponse.failure("INVALID_ROW", "bad")

    result = await InsertRowUseCase(mock_uow).execute(member, "channels", {"tenant_id": ACME})

    assert result.error.code == "INVALID_ROW"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_and_delete_need_record_id(mock_uow, member):
    update = await UpdateRowsUseCase(mock_uow).execute(
        member, "tasks", {"title": "x"}, {"tenant_id": ACME}
    )
    delete = await DeleteRowsUseCase(mock_uow).execute(member, "tasks", {"tenant_id": ACME})

    assert update.error.code == "MISSING_ID_FILTER"
    assert delete.error.code == "MISSING_ID_FILTER"
    mock_uow.records.update.assert_not_called()
    mock_uow.records.delete.assert_not_called()


@pytest.mark.asyncio
async def test_update_targets_one_record_of_the_tenant(mock_uow, member):
    mock_uow.records.update.return_value = StoreResponse.success()

    result = await UpdateRowsUseCase(mock_uow).execute(
        member, "problems", {"description": "Slow onboarding"}, {"id": "42", "tenant_id": ACME}
    )

    assert result.is_ok()
    mock_uow.records.update.assert_awaited_once_with(
        "problems", {"description": "Slow onboarding"}, {"id": "42", "tenant_id": ACME}
    )
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_commits(mock_uow, master):
    mock_uow.records.delete.return_value = StoreResponse.success()

    result = await DeleteRowsUseCase(mock_uow).execute(
        master, "tasks", {"id": 7, "tenant_id": GLOBEX}
    )

    assert result.is_ok()
    mock_uow.commit.assert_awaited_once()
