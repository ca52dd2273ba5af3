"""Shared pytest fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from staking_storage.config import Settings
from staking_storage.persistence import RemoteBackend
from staking_storage.storage import reset_storage

STORAGE_ENV_VARS = (
    "DATA_DIR",
    "VERCEL",
    "REDIS_URL",
    "UPSTASH_REDIS_REST_URL",
    "UPSTASH_REDIS_URL",
    "UPSTASH_REDIS_REST_TOKEN",
    "UPSTASH_REST_TOKEN",
    "STORAGE_KEY_PREFIX",
    "STORAGE_REMOTE_TIMEOUT",
)


class FakeRemote(RemoteBackend):
    """In-memory remote backend with switchable failures."""

    mode = "redis"

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})
        self.fail_reads = False
        self.fail_writes = False
        self.reachable = True
        self.closed = False
        self.pings = 0
        self.gets = 0

    async def get(self, key):
        self.gets += 1
        if self.fail_reads:
            raise ConnectionError("remote read down")
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise ConnectionError("remote write down")
        self.data[key] = value

    async def ping(self):
        self.pings += 1
        if not self.reachable:
            raise ConnectionError("connection refused")
        return True

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove storage env vars and reset the storage singleton."""
    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_storage()
    yield
    reset_storage()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def file_settings(data_dir: Path) -> Settings:
    """Settings with no remote configured."""
    return Settings(_env_file=None, data_dir=str(data_dir))


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()
