"""Process-local backend for development and tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class _Entry:
    value: str
    expires_at: datetime


class MemoryBackend:
    """Dict-backed store that honours expiry on read."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, *, ttl_seconds: int) -> None:
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + timedelta(seconds=ttl_seconds))

    def expires_at(self, key: str) -> datetime | None:
        entry = self._entries.get(key)
        return entry.expires_at if entry is not None else None

    def put_raw(self, key: str, value: str, *, ttl_seconds: int = 3600) -> None:
        """Store *value* verbatim (used to seed corrupted or legacy values)."""
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + timedelta(seconds=ttl_seconds))
