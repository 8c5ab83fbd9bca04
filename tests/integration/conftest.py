import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from pinreset.depends import get_config, get_unit_of_work
from pinreset.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from pinreset.adapter.storage.file_reset_record_storage import FileResetRecordStorage


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr("pinreset.app.services.credentials.BCRYPT_ROUNDS", 4)


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


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def reset_dir(tmp_path):
    return tmp_path / "resets"


@pytest.fixture
def app_config():
    from config import ApplicationConfig

    class TestConfig(ApplicationConfig):
        TRUSTED_NETWORKS = ["127.0.0.0/8"]
        PASSWORD_RESET_REQUIRE_IN_NETWORK = True

    return TestConfig


@pytest.fixture
def app(db_session, reset_dir, app_config):
    from pinreset.api.app import create_app

    app = create_app(app_config)
    storage = FileResetRecordStorage(reset_dir)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session, storage)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_config] = lambda: app_config
    return app


@pytest_asyncio.fixture
async def client(app):
    # ASGITransport reports the client as 127.0.0.1
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def remote_client(app):
    transport = ASGITransport(app=app, client=("203.0.113.7", 4711))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def seeded_users(db_session, test_data):
    return await test_data.seed_users(db_session)
