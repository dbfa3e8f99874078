"""Read and write the full StoredState under one fixed key."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from ieltsplan._constants import STATE_TTL_SECONDS, STORAGE_KEY
from ieltsplan.exceptions import StorageUnavailableError
from ieltsplan.storage.base import StateBackend

_logger = logging.getLogger(__name__)


class StateAccessor:
    """JSON (de)serialisation, renewing expiry and bounded round trips.

    Reads fail open: a miss, an undecodable value or a non-object value all
    load as ``{}``. Backend failures and timeouts are never swallowed.
    """

    def __init__(
        self,
        backend: StateBackend,
        *,
        key: str = STORAGE_KEY,
        ttl_seconds: int = STATE_TTL_SECONDS,
        timeout: float = 10.0,
    ) -> None:
        self._backend = backend
        self._key = key
        self._ttl_seconds = ttl_seconds
        self._timeout = timeout

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> dict[str, Any]:
        try:
            raw = await asyncio.wait_for(self._backend.get(self._key), self._timeout)
        except TimeoutError as exc:
            raise StorageUnavailableError(f"Timed out reading {self._key}", key=self._key) from exc

        if raw is None:
            return {}
        try:
            state = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            _logger.warning("Stored value under %s is not valid JSON; treating as empty", self._key)
            return {}
        if not isinstance(state, dict):
            _logger.warning(
                "Stored value under %s is %s, not an object; treating as empty",
                self._key,
                type(state).__name__,
            )
            return {}
        return state

    async def save(self, state: dict[str, Any]) -> None:
        value = json.dumps(state, ensure_ascii=False, separators=(",", ":"))
        try:
            await asyncio.wait_for(
                self._backend.set(self._key, value, ttl_seconds=self._ttl_seconds),
                self._timeout,
            )
        except TimeoutError as exc:
            raise StorageUnavailableError(f"Timed out writing {self._key}", key=self._key) from exc
