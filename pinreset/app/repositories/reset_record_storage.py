from abc import ABC, abstractmethod
from typing import List, Optional


class StorageError(Exception):
    """Raised when the record storage medium cannot be read or written"""


class IResetRecordStorage(ABC):
    """
    Key-value storage for serialized reset records - application layer

    Keys are flat strings; values are opaque bytes.
    """

    @abstractmethod
    async def enumerate(self, prefix: str) -> List[str]:
        """List every key that starts with prefix"""
        pass

    @abstractmethod
    async def read(self, key: str) -> Optional[bytes]:
        """Read the value stored under key, or None if it does not exist"""
        pass

    @abstractmethod
    async def write(self, key: str, data: bytes) -> None:
        """Store data under key, replacing any previous value"""
        pass

    @abstractmethod
    async def create(self, key: str, data: bytes) -> bool:
        """
        Store data under key only if key does not exist yet.

        Returns False, leaving the existing value untouched, when key is taken.
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key.

        Returns True only for the caller that actually removed it, so a
        delete doubles as an exclusive claim on the record.
        """
        pass
