"""High-level async client for the sync endpoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import aiohttp
from pydantic import ValidationError

from ieltsplan._constants import RESOURCE_CATEGORIES, SERIES_LIST_KEY
from ieltsplan._redact import redact_for_log
from ieltsplan.exceptions import IeltsPlanError, SyncClientError, SyncRejectedError, SyncServerError
from ieltsplan.models.chill import Series
from ieltsplan.models.planner import DayPlan
from ieltsplan.models.resources import ResourceItem
from ieltsplan.models.snapshot import SyncSnapshot
from ieltsplan.sync.classify import is_date_key

_logger = logging.getLogger(__name__)


class SyncClient:
    """Async client mirroring what the Planner, Resource Hub and Chill Zone modules send.

    Usage::

        async with SyncClient("https://example.vercel.app") as client:
            snapshot = await client.load_snapshot()
            await client.save_resources(vocabulary=[ResourceItem(name="Cambridge 18")])
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        path: str = "/api/sync",
        timeout: float = 15.0,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}{path}"
        self._external_session = session is not None
        self._http_session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> SyncClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise IeltsPlanError("Client not initialized. Use 'async with SyncClient(...) as client:'")
        return self._http_session

    async def _request(self, method: str, *, params: Mapping[str, str] | None = None, body: Any = None) -> Any:
        session = self._require_session()
        data = json.dumps(body) if body is not None else None
        headers = {"content-type": "application/json"} if data is not None else None
        try:
            async with session.request(
                method,
                self._url,
                params=params,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise SyncServerError(f"{method} {self._url} failed: {exc!r}") from exc

        if status != 200:
            message = text[:200]
            try:
                parsed = json.loads(text)
                if isinstance(parsed, dict) and "error" in parsed:
                    message = str(parsed["error"])
            except json.JSONDecodeError:
                pass
            if 400 <= status < 500:
                raise SyncRejectedError(message, status_code=status)
            raise SyncServerError(message, status_code=status)

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SyncServerError(f"Invalid JSON from {self._url}: {text[:200]}", status_code=status) from exc

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    async def load(self) -> dict[str, Any]:
        """Return the full stored state as plain JSON."""
        state = await self._request("GET")
        if not isinstance(state, dict):
            raise SyncServerError("Sync endpoint returned a non-object state")
        return state

    async def load_snapshot(self) -> SyncSnapshot:
        """Return the region view parsed into typed models."""
        regions = await self._request("GET", params={"view": "regions"})
        try:
            return SyncSnapshot.model_validate(regions)
        except ValidationError as exc:
            raise SyncClientError(f"Stored state does not match the dashboard models: {exc}") from exc

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    async def save(self, payload: dict[str, Any]) -> None:
        """Post a raw partial update."""
        _logger.debug("POST %s: %s", self._url, redact_for_log(payload))
        result = await self._request("POST", body=payload)
        if not (isinstance(result, dict) and result.get("ok") is True):
            raise SyncServerError(f"Unexpected save acknowledgement: {result!r}")

    async def save_planner(self, days: Mapping[str, DayPlan]) -> None:
        """Replace the given dates' plans."""
        if not days:
            raise ValueError("days must not be empty")
        bad = [key for key in days if not is_date_key(key)]
        if bad:
            raise ValueError(f"planner keys must be YYYY-MM-DD dates, got {bad}")
        await self.save({date_key: plan.to_wire() for date_key, plan in days.items()})

    async def save_resources(self, **categories: Iterable[ResourceItem]) -> None:
        """Replace one or more resource categories, e.g. ``vocabulary=[...]``."""
        if not categories:
            raise ValueError("at least one category is required")
        unknown = sorted(set(categories) - set(RESOURCE_CATEGORIES))
        if unknown:
            raise ValueError(f"unknown resource categories: {unknown}")
        await self.save({name: [item.to_wire() for item in items] for name, items in categories.items()})

    async def save_series(self, series: Iterable[Series]) -> None:
        """Replace the Chill Zone watch-list."""
        await self.save({SERIES_LIST_KEY: [entry.to_wire() for entry in series]})
