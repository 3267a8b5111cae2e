from uuid import uuid4

import bcrypt
import pytest

from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_register_creates_user_and_company(mock_uow):
    """A new user gets a company of their own with only the problem area open"""
    mock_uow.users.get_by_email.return_value = None

    result = await RegisterUseCase(mock_uow).execute(
        RegisterCommand(
            name="Ada Lovelace",
            email="ada@engines.io",
            password="analytical",
            company_name="Engines Ltd",
        )
    )

    assert result.is_ok()
    auth = result.value
    assert auth.access_token
    assert auth.identity.email == "ada@engines.io"
    assert auth.identity.is_master is False
    assert auth.identity.tenant_id == auth.tenant.id
    assert auth.tenant.name == "Engines Ltd"
    assert auth.tenant.access_flags["problem"] is True
    assert auth.tenant.access_flags["financials"] is False
    assert "name=AL" in auth.identity.avatar_url

    created_user = mock_uow.users.create.call_args.args[0]
    assert bcrypt.checkpw(b"analytical", created_user.password_hash.encode())

    audit_event = mock_uow.audit_events.create.call_args.args[0]
    assert audit_event.action == "register"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_register_rejects_existing_email(mock_uow):
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(), email="ada@engines.io", password_hash="x" * 60
    )

    result = await RegisterUseCase(mock_uow).execute(
        RegisterCommand(
            name="Ada", email="ada@engines.io", password="analytical", company_name="Other"
        )
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.tenants.create.assert_not_called()
    mock_uow.commit.assert_not_called()
