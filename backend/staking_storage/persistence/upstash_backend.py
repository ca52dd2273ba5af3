"""
Upstash REST Remote Backend.

Talks to Upstash's Redis-compatible REST command endpoint: each command is
POSTed as a JSON array (``["GET", key]``, ``["SET", key, value]``) with a
bearer token, and the reply is ``{"result": ...}`` or ``{"error": ...}``.
"""

from typing import Any, List, Optional

import httpx
from loguru import logger

from .backend import RemoteBackend, RemoteBackendError


class UpstashRestBackend(RemoteBackend):
    """Upstash REST remote backend over httpx."""

    mode = "upstash-rest"

    def __init__(
        self,
        rest_url: str,
        token: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize Upstash REST backend.

        Args:
            rest_url: REST endpoint base URL
            token: REST API token (sent as bearer auth)
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (used by tests)
        """
        self._url = rest_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        logger.info(f"Upstash REST backend configured ({self._url})")

    async def _command(self, command: List[Any]) -> Any:
        """Send one command and return its result."""
        try:
            response = await self._client.post(self._url, json=command, headers=self._headers)
        except httpx.HTTPError as e:
            raise RemoteBackendError(f"Upstash {command[0]} request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("error"):
            raise RemoteBackendError(f"Upstash {command[0]} error: {payload['error']}")
        if response.is_error:
            raise RemoteBackendError(
                f"Upstash {command[0]} returned HTTP {response.status_code}"
            )
        if not isinstance(payload, dict) or "result" not in payload:
            raise RemoteBackendError(f"Upstash {command[0]} returned a malformed response")

        return payload["result"]

    async def get(self, key: str) -> Optional[str]:
        result = await self._command(["GET", key])
        if result is not None and not isinstance(result, str):
            raise RemoteBackendError(f"Upstash GET returned non-string result for {key}")
        return result

    async def set(self, key: str, value: str) -> None:
        await self._command(["SET", key, value])

    async def ping(self) -> bool:
        return await self._command(["PING"]) == "PONG"

    async def close(self) -> None:
        """Close HTTP client."""
        await self._client.aclose()
