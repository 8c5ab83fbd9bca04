import asyncio
import logging
import os
import secrets
from pathlib import Path
from typing import List, Optional, Union

from pinreset.app.repositories.reset_record_storage import IResetRecordStorage, StorageError

logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".json"


class FileResetRecordStorage(IResetRecordStorage):
    """
    Reset record storage backed by a directory, one JSON file per key.

    Writes go through a temporary file and os.replace so readers never see
    a partial record. create() links the temporary file into place, which
    fails if the record exists. delete() relies on unlink being atomic: only
    one caller can remove a given file.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid reset record key: {key!r}")
        return self.directory / f"{key}{RECORD_SUFFIX}"

    def _enumerate(self, prefix: str) -> List[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            path.name[: -len(RECORD_SUFFIX)]
            for path in self.directory.iterdir()
            if path.name.startswith(prefix)
            and path.name.endswith(RECORD_SUFFIX)
            and path.is_file()
        )

    def _read(self, key: str) -> Optional[bytes]:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None

    def _stage(self, key: str, data: bytes) -> Path:
        """Write data to a hidden temporary file next to the final record"""
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self.directory / f".{key}.{secrets.token_hex(4)}.tmp"
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        return tmp_path

    def _write(self, key: str, data: bytes) -> None:
        path = self._path(key)
        tmp_path = self._stage(key, data)
        try:
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def _create(self, key: str, data: bytes) -> bool:
        path = self._path(key)
        tmp_path = self._stage(key, data)
        try:
            # link fails instead of replacing when the record already exists
            os.link(tmp_path, path)
        except FileExistsError:
            return False
        finally:
            tmp_path.unlink()
        return True

    def _delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return False
        return True

    async def enumerate(self, prefix: str) -> List[str]:
        try:
            return await asyncio.to_thread(self._enumerate, prefix)
        except OSError as exc:
            raise StorageError(f"Cannot list {self.directory}: {exc}") from exc

    async def read(self, key: str) -> Optional[bytes]:
        try:
            return await asyncio.to_thread(self._read, key)
        except OSError as exc:
            raise StorageError(f"Cannot read {key}: {exc}") from exc

    async def write(self, key: str, data: bytes) -> None:
        try:
            await asyncio.to_thread(self._write, key, data)
        except OSError as exc:
            raise StorageError(f"Cannot write {key}: {exc}") from exc
        logger.debug(f"Wrote reset record {key} to {self.directory}")

    async def create(self, key: str, data: bytes) -> bool:
        try:
            return await asyncio.to_thread(self._create, key, data)
        except OSError as exc:
            raise StorageError(f"Cannot create {key}: {exc}") from exc

    async def delete(self, key: str) -> bool:
        try:
            return await asyncio.to_thread(self._delete, key)
        except OSError as exc:
            raise StorageError(f"Cannot delete {key}: {exc}") from exc
