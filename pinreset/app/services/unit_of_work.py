from abc import ABC, abstractmethod

from pinreset.app.repositories.reset_record_storage import IResetRecordStorage
from pinreset.app.repositories.user_repository import IUserRepository


class PersistenceError(Exception):
    """Raised when a user change cannot be flushed or committed"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    reset_records: IResetRecordStorage

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
