"""Structural backend interface used by the state accessor."""

from __future__ import annotations

from typing import Protocol


class StateBackend(Protocol):
    """Minimal string key-value store with per-write expiry.

    Implementations raise :class:`ieltsplan.exceptions.StorageUnavailableError`
    for any failure to reach the store. A missing key is not an error.
    """

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str, *, ttl_seconds: int) -> None:
        ...
