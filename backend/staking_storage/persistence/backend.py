"""
Remote Backend Interface.

All remote key-value backends implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class RemoteBackendError(Exception):
    """Raised when a remote backend fails or returns a malformed response."""


class RemoteBackend(ABC):
    """Abstract base class for remote key-value backends.

    Values are raw JSON strings; encoding and decoding happen in the
    storage facade. Backends raise on failure and never fall back on
    their own.
    """

    mode: str = ""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Fetch a raw value.

        Args:
            key: Fully namespaced key

        Returns:
            Stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a raw value.

        Args:
            key: Fully namespaced key
            value: JSON-encoded document
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check the backend is reachable."""
        pass

    async def close(self) -> None:
        """Release client resources."""
        pass
