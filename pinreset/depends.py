from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from pinreset.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from pinreset.adapter.storage.file_reset_record_storage import FileResetRecordStorage
from pinreset.adapter.storage.memory_reset_record_storage import InMemoryResetRecordStorage
from pinreset.app.repositories.reset_record_storage import IResetRecordStorage

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


def build_reset_record_storage(config) -> IResetRecordStorage:
    """Pick the reset record backend named by RESET_STORE_BACKEND"""
    backend = config.RESET_STORE_BACKEND
    if backend == "file":
        return FileResetRecordStorage(config.RESET_STORE_DIR)
    if backend == "memory":
        return InMemoryResetRecordStorage()
    raise ValueError(f"Unknown RESET_STORE_BACKEND: {backend}")


# Shared by every request: record claims only exclude each other
# when they go through the same storage
reset_record_storage = build_reset_record_storage(ApplicationConfig)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session, reset_record_storage)


def get_config():
    return ApplicationConfig
