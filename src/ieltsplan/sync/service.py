"""Load and Save operations over the shared StoredState."""

from __future__ import annotations

import logging
from typing import Any

from ieltsplan._redact import redact_for_log
from ieltsplan.exceptions import InvalidPayloadError, InvalidRequestError
from ieltsplan.storage.accessor import StateAccessor
from ieltsplan.sync.classify import Region, classify, is_plain_object
from ieltsplan.sync.merge import apply_update
from ieltsplan.sync.regions import region_view

_logger = logging.getLogger(__name__)


class SyncService:
    """Classify, merge and persist partial updates.

    Every Save is one read followed by one write of the whole object.
    There is no version check: two concurrent Saves can lose one
    another's changes even when they target different regions.
    """

    def __init__(self, accessor: StateAccessor) -> None:
        self._accessor = accessor

    async def load(self) -> dict[str, Any]:
        """Return the full stored state (``{}`` when nothing is stored)."""
        return await self._accessor.load()

    async def load_regions(self) -> dict[str, Any]:
        """Return ``{planner, resourceHub, chillZone}`` with empty defaults."""
        return region_view(await self._accessor.load())

    async def save(self, body: Any) -> Region:
        """Merge *body* into the stored state and persist it.

        Returns
        -------
        Region
            The region the body was matched to.

        Raises
        ------
        InvalidRequestError
            *body* is not a JSON object.
        InvalidPayloadError
            *body* matches no region shape.
        StorageUnavailableError
            The backend could not be read or written.
        """
        if not is_plain_object(body):
            raise InvalidRequestError("Body must be a plain object")

        update = classify(body)
        if not update.recognized:
            _logger.warning("Unrecognized sync payload: %s", redact_for_log(body))
            raise InvalidPayloadError()

        prior = await self._accessor.load()
        merged = apply_update(prior, update)
        await self._accessor.save(merged)
        _logger.debug("Saved %s update (%d top-level keys)", update.region, len(merged))
        return update.region
