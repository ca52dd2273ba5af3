"""
Document storage facade.

Reads try the remote backend first and fall back to the local file.
Writes go to the remote (best effort) and are always mirrored to the
local file. Remote failures are logged and never reach the caller; a
failed file write does.
"""

import json
from typing import Any, Optional

from loguru import logger

from .config import Settings, settings as default_settings
from .documents import APPROVALS, COUNTDOWN_OVERRIDE, REF_CODES, USERS, get_document
from .persistence import (
    MODE_FILE,
    FileBackend,
    RemoteBackend,
    create_remote_backend,
    select_storage_mode,
)

_UNSET = object()
_MISSING = object()


class Storage:
    """Remote-first, file-mirrored store for the named documents.

    ``mode`` is "file" when no remote client could be built. A remote
    dropped later by ``connect()`` keeps its configured mode; check
    ``remote_active`` for the live state.
    """

    def __init__(self, settings: Optional[Settings] = None, remote: Any = _UNSET):
        """Initialize storage.

        Args:
            settings: Configuration (defaults to the environment settings)
            remote: Remote backend to use instead of the configured one;
                None forces file-only mode
        """
        self.settings = settings or default_settings
        self.files = FileBackend(self.settings.resolved_data_dir)

        if remote is _UNSET:
            self.mode = select_storage_mode(self.settings)
            self._remote: Optional[RemoteBackend] = create_remote_backend(self.settings, self.mode)
            if self._remote is None:
                self.mode = MODE_FILE
        else:
            self._remote = remote
            self.mode = remote.mode if remote is not None else MODE_FILE

        self._connect_checked = False

        logger.info(f"Storage mode: {self.mode} (data dir: {self.files.data_dir})")

    @property
    def remote_active(self) -> bool:
        return self._remote is not None

    def _remote_key(self, key: str) -> str:
        return f"{self.settings.key_prefix}{key}"

    async def connect(self) -> bool:
        """Ping the remote once; drop it for good if unreachable.

        Returns:
            True if a remote backend is active after the check
        """
        self._connect_checked = True

        if self._remote is None:
            return False

        try:
            if await self._remote.ping():
                logger.info(f"Connected to {self.mode} backend")
                return True
            logger.warning(f"{self.mode} ping failed, falling back to file storage")
        except Exception as e:
            logger.warning(f"{self.mode} connect failed, falling back to file storage: {e}")

        await self._discard_remote()
        return False

    async def ensure_connected(self) -> bool:
        """Run the startup connection check once."""
        if not self._connect_checked:
            return await self.connect()
        return self.remote_active

    async def _discard_remote(self) -> None:
        remote, self._remote = self._remote, None
        try:
            await remote.close()
        except Exception as e:
            logger.debug(f"Error closing {self.mode} client: {e}")

    async def close(self) -> None:
        """Close the remote client, if any."""
        if self._remote is not None:
            await self._remote.close()

    async def _read_remote(self, key: str) -> Any:
        """Read from the remote, returning _MISSING on absence or error."""
        try:
            raw = await self._remote.get(self._remote_key(key))
            if not raw:
                return _MISSING
            return json.loads(raw)
        except Exception as e:
            logger.warning(f"{self.mode} read error for {key}: {e}")
            return _MISSING

    async def _write_remote(self, key: str, value: Any) -> None:
        try:
            await self._remote.set(self._remote_key(key), json.dumps(value, ensure_ascii=False))
            logger.debug(f"Saved {key} to {self.mode}")
        except Exception as e:
            logger.warning(f"{self.mode} write error for {key}: {e}")

    async def read_json(self, key: str) -> Any:
        """Read a document: remote first, then the local file, then the default."""
        document = get_document(key)

        if self._remote is not None:
            value = await self._read_remote(key)
            if value is not _MISSING:
                return value

        return await self.files.load(document)

    async def write_json(self, key: str, value: Any) -> None:
        """Write a document to the remote (best effort) and the local file.

        Raises:
            OSError: If the local file cannot be written
        """
        document = get_document(key)

        if self._remote is not None:
            await self._write_remote(key, value)

        await self.files.save(document, value)

    async def read_users(self) -> list:
        return await self.read_json(USERS.key)

    async def write_users(self, value: list) -> None:
        await self.write_json(USERS.key, value)

    async def read_ref_codes(self) -> dict:
        return await self.read_json(REF_CODES.key)

    async def write_ref_codes(self, value: dict) -> None:
        await self.write_json(REF_CODES.key, value)

    async def read_approvals(self) -> list:
        return await self.read_json(APPROVALS.key)

    async def write_approvals(self, value: list) -> None:
        await self.write_json(APPROVALS.key, value)

    async def read_countdown_override(self) -> Any:
        return await self.read_json(COUNTDOWN_OVERRIDE.key)

    async def write_countdown_override(self, value: Any) -> None:
        await self.write_json(COUNTDOWN_OVERRIDE.key, value)


# Configured mode, fixed at startup. Reflects credentials only; a client
# that fails to build or connect does not change it.
STORAGE_MODE = select_storage_mode(default_settings)

# Default storage instance (singleton)
_default_storage: Optional[Storage] = None


def get_storage() -> Storage:
    """Get or create the process-wide storage."""
    global _default_storage

    if _default_storage is None:
        _default_storage = Storage(default_settings)

    return _default_storage


def reset_storage() -> None:
    """Reset the default storage (for testing)."""
    global _default_storage
    _default_storage = None


async def _connected_storage() -> Storage:
    storage = get_storage()
    await storage.ensure_connected()
    return storage


async def read_users() -> list:
    storage = await _connected_storage()
    return await storage.read_users()


async def write_users(value: list) -> None:
    storage = await _connected_storage()
    await storage.write_users(value)


async def read_ref_codes() -> dict:
    storage = await _connected_storage()
    return await storage.read_ref_codes()


async def write_ref_codes(value: dict) -> None:
    storage = await _connected_storage()
    await storage.write_ref_codes(value)


async def read_approvals() -> list:
    storage = await _connected_storage()
    return await storage.read_approvals()


async def write_approvals(value: list) -> None:
    storage = await _connected_storage()
    await storage.write_approvals(value)


async def read_countdown_override() -> Any:
    storage = await _connected_storage()
    return await storage.read_countdown_override()


async def write_countdown_override(value: Any) -> None:
    storage = await _connected_storage()
    await storage.write_countdown_override(value)
