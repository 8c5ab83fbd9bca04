from typing import Dict, List, Optional

from pinreset.app.repositories.reset_record_storage import IResetRecordStorage


class InMemoryResetRecordStorage(IResetRecordStorage):
    """
    Reset record storage kept in a process-local dict.

    Each operation completes without awaiting, so on a single event loop
    delete() is an atomic claim. Contents are lost on restart.
    """

    def __init__(self):
        self._records: Dict[str, bytes] = {}

    async def enumerate(self, prefix: str) -> List[str]:
        return sorted(key for key in self._records if key.startswith(prefix))

    async def read(self, key: str) -> Optional[bytes]:
        return self._records.get(key)

    async def write(self, key: str, data: bytes) -> None:
        self._records[key] = bytes(data)

    async def create(self, key: str, data: bytes) -> bool:
        if key in self._records:
            return False
        self._records[key] = bytes(data)
        return True

    async def delete(self, key: str) -> bool:
        return self._records.pop(key, None) is not None
