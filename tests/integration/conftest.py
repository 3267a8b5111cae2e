import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.auth_headers import ADMIN_HEADERS
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def register(client, test_data):
    """Register one of the accounts in test_data.json; returns the auth body"""

    async def _register(key: str) -> dict:
        response = await client.post("/auth/register", json=test_data.get_copy(key))
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest_asyncio.fixture
def login_as_master(client, test_data):
    """Grant master privilege to a registered user and sign in again"""

    async def _login(key: str, auth: dict) -> dict:
        response = await client.post(
            f"/admin/users/{auth['identity']['id']}/master", headers=ADMIN_HEADERS
        )
        assert response.status_code == 200, response.text
        account = test_data.get(key)
        response = await client.post(
            "/auth/login", json={"email": account["email"], "password": account["password"]}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login
