"""Redis-over-REST backend (Vercel KV / Upstash compatible)."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from ieltsplan.exceptions import StorageUnavailableError

_logger = logging.getLogger(__name__)


class KvRestBackend:
    """Send single Redis commands as JSON arrays to a REST endpoint.

    ``POST <url>`` with body ``["SET", key, value, "EX", ttl]`` and an
    ``Authorization: Bearer <token>`` header; the service answers
    ``{"result": ...}`` or ``{"error": "..."}``.
    """

    def __init__(
        self,
        url: str,
        token: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = 10.0,
    ) -> None:
        self._url = url.rstrip("/")
        self._token = token
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _command(self, *args: str | int) -> Any:
        headers = {
            "authorization": f"Bearer {self._token}",
            "content-type": "application/json",
        }
        body = json.dumps(list(args))
        command = str(args[0])
        key = str(args[1]) if len(args) > 1 else ""

        _logger.debug("KV %s %s", command, key)

        try:
            async with self._http.post(self._url, data=body, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise StorageUnavailableError(
                        f"KV {command} returned HTTP {resp.status}: {text[:200]}",
                        key=key,
                    )
        except StorageUnavailableError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise StorageUnavailableError(f"KV {command} failed: {exc!r}", key=key) from exc

        try:
            body_json = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageUnavailableError(f"Invalid JSON from KV {command}: {text[:200]}", key=key) from exc

        if not isinstance(body_json, dict):
            raise StorageUnavailableError(f"Unexpected KV {command} response shape", key=key)
        if "error" in body_json:
            raise StorageUnavailableError(f"KV {command} error: {body_json['error']}", key=key)
        return body_json.get("result")

    async def get(self, key: str) -> str | None:
        result = await self._command("GET", key)
        if result is None:
            return None
        if isinstance(result, str):
            return result
        # Some clients store JSON natively; hand back its text form.
        return json.dumps(result)

    async def set(self, key: str, value: str, *, ttl_seconds: int) -> None:
        result = await self._command("SET", key, value, "EX", ttl_seconds)
        if result != "OK":
            raise StorageUnavailableError(f"KV SET not acknowledged: {result!r}", key=key)
