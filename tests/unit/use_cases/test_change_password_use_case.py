from uuid import uuid4

import bcrypt
import pytest

from src.app.use_cases.users import ChangePasswordUseCase
from src.domain.entities import User


def _user(password="SecurePass123!"):
    return User(
        id=uuid4(),
        email="user@acme.com",
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        name="User",
        tenant_id=uuid4(),
    )


@pytest.mark.asyncio
async def test_successful_password_change(mock_uow):
    user = _user()
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(
        user.id, "SecurePass123!", "BrandNewPass456!"
    )

    assert result.is_ok()
    assert result.value.status == "success"
    assert bcrypt.checkpw(b"BrandNewPass456!", user.password_hash.encode())
    assert not bcrypt.checkpw(b"SecurePass123!", user.password_hash.encode())

    event = mock_uow.audit_events.create.call_args.args[0]
    assert event.action == "password_changed"
    assert event.tenant_id == user.tenant_id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wrong_current_password(mock_uow):
    user = _user()
    original_hash = user.password_hash
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(
        user.id, "WrongPass", "BrandNewPass456!"
    )

    assert result.error.code == "INVALID_CREDENTIALS"
    assert user.password_hash == original_hash
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_new_password_must_differ(mock_uow):
    user = _user()
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(
        user.id, "SecurePass123!", "SecurePass123!"
    )

    assert result.error.code == "PASSWORD_UNCHANGED"
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_short_new_password(mock_uow):
    result = await ChangePasswordUseCase(mock_uow).execute(uuid4(), "SecurePass123!", "short")

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_user(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    result = await ChangePasswordUseCase(mock_uow).execute(
        uuid4(), "SecurePass123!", "BrandNewPass456!"
    )

    assert result.error.code == "USER_NOT_FOUND"
