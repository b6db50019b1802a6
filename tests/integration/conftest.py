import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.invitation_sender import InMemoryInvitationOutbox
from src.app.services.password_hasher import PasswordHasher
from src.depends import get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader


class TestConfig(ApplicationConfig):
    JWT_SECRET = "integration-test-secret"
    BCRYPT_ROUNDS = 4
    STORE_TIMEOUT_SECONDS = 10


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        hasher = PasswordHasher(rounds=TestConfig.BCRYPT_ROUNDS)
        for row in TestDataLoader.entities(hasher):
            session.add(row)
            # Rows go in one by one so foreign keys resolve in order
            await session.flush()
        await session.commit()
    return TestDataLoader()


@pytest.fixture
def outbox():
    return InMemoryInvitationOutbox()


@pytest.fixture
def app(session_factory, outbox):
    app = create_app(TestConfig, invitation_sender=outbox)

    async def override_get_unit_of_work():
        # One session per request, like production
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app, seeded):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login(client, test_data):
    """Log a seeded user in and return Authorization headers"""

    async def _login(email: str, provider_index: int = 0) -> dict:
        user = test_data.find(
            "users",
            email=email,
            service_provider_id=test_data.get("service_providers")[provider_index]["id"],
        )
        response = await client.post(
            "/auth/login",
            json={
                "service_provider_id": user["service_provider_id"],
                "email": user["email"],
                "password": user["password"],
            },
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
