"""Deterministic merge of classified partial updates.

Merge semantics are "last write wins" at the granularity of one date
(Planner), one category (Resource Hub) or the whole watch-list (Chill
Zone). Nothing outside the matched region is touched and the prior state
is never mutated in place.
"""

from __future__ import annotations

import copy
from typing import Any

from ieltsplan._constants import RESOURCE_CATEGORIES, SERIES_LIST_KEY
from ieltsplan.exceptions import InvalidPayloadError
from ieltsplan.sync.classify import ClassifiedPayload, Region, extract_series_list, is_date_key


def merge_planner(state: dict[str, Any], body: dict[str, Any]) -> dict[str, Any]:
    """Replace each posted date entry; stray non-date keys are dropped."""
    merged = dict(state)
    for key, value in body.items():
        if is_date_key(key):
            merged[key] = copy.deepcopy(value)
    return merged


def merge_resource_hub(state: dict[str, Any], body: dict[str, Any]) -> dict[str, Any]:
    """Replace each posted category array wholesale."""
    merged = dict(state)
    for category in RESOURCE_CATEGORIES:
        value = body.get(category)
        if isinstance(value, list):
            merged[category] = copy.deepcopy(value)
    return merged


def merge_chill_zone(state: dict[str, Any], body: dict[str, Any]) -> dict[str, Any]:
    """Replace ``seriesList``; nested and flat inputs land in the same place."""
    series = extract_series_list(body)
    if series is None:
        raise InvalidPayloadError()
    merged = dict(state)
    merged[SERIES_LIST_KEY] = copy.deepcopy(series)
    return merged


_MERGERS = {
    Region.PLANNER: merge_planner,
    Region.RESOURCE_HUB: merge_resource_hub,
    Region.CHILL_ZONE: merge_chill_zone,
}


def apply_update(state: dict[str, Any] | None, update: ClassifiedPayload) -> dict[str, Any]:
    """Merge *update* into *state* and return the new full state.

    Raises
    ------
    InvalidPayloadError
        When *update* was not matched to any region.
    """
    merger = _MERGERS.get(update.region)
    if merger is None or not isinstance(update.payload, dict):
        raise InvalidPayloadError()
    prior = state if isinstance(state, dict) else {}
    return merger(prior, update.payload)
