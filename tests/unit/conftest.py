from datetime import UTC, datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from pinreset.adapter.storage.memory_reset_record_storage import InMemoryResetRecordStorage
from pinreset.app.services.credentials import hash_secret
from pinreset.domain.entities import User


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Cheapest bcrypt cost factor, unit tests hash a lot"""
    monkeypatch.setattr("pinreset.app.services.credentials.BCRYPT_ROUNDS", 4)


@pytest.fixture
def t0():
    return datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture
def clock(t0):
    return FakeClock(t0)


@pytest.fixture
def users():
    """Username -> User directory backing mock_uow.users"""
    return {
        "alice": User(username="alice", password_hash=hash_secret("AlicePass123!")),
        "bob": User(username="bob", password_hash=hash_secret("BobPass123!")),
    }


@pytest.fixture
def storage():
    return InMemoryResetRecordStorage()


@pytest.fixture
def mock_uow(users, storage):
    """Mock UnitOfWork over an in-memory record storage"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    async def get_by_name(username):
        return users.get(username)

    async def update(user):
        return user

    uow.users = MagicMock()
    uow.users.get_by_name = AsyncMock(side_effect=get_by_name)
    uow.users.update = AsyncMock(side_effect=update)

    uow.reset_records = storage
    return uow
