"""Shape-based payload classification.

POST bodies carry no explicit discriminator, so the region an update
targets is inferred from structure alone. The rules form an ordered
chain of pure predicates; the first match wins, which keeps payloads that
satisfy several rules deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ieltsplan._constants import CHILL_ZONE_KEY, DATE_KEY_PATTERN, RESOURCE_CATEGORIES, SERIES_LIST_KEY


class Region(StrEnum):
    PLANNER = "planner"
    RESOURCE_HUB = "resourceHub"
    CHILL_ZONE = "chillZone"
    UNRECOGNIZED = "unrecognized"


class ClassifiedPayload(BaseModel):
    """A POST body tagged with the region it was matched to."""

    model_config = ConfigDict(frozen=True)

    region: Region
    payload: Any = Field(default=None, description="Original body (as received)")

    @property
    def recognized(self) -> bool:
        return self.region != Region.UNRECOGNIZED


def is_plain_object(value: Any) -> bool:
    """Return ``True`` for a JSON object (not an array, primitive or ``null``)."""
    return isinstance(value, dict)


def is_date_key(key: Any) -> bool:
    return isinstance(key, str) and DATE_KEY_PATTERN.fullmatch(key) is not None


def matches_planner(body: Mapping[str, Any]) -> bool:
    return any(is_date_key(key) for key in body)


def matches_resource_hub(body: Mapping[str, Any]) -> bool:
    # Partial updates carry as little as one category.
    return any(isinstance(body.get(category), list) for category in RESOURCE_CATEGORIES)


def extract_series_list(body: Mapping[str, Any]) -> list[Any] | None:
    """Return the ``seriesList`` array from a nested or flat ChillZone body."""
    nested = body.get(CHILL_ZONE_KEY)
    if isinstance(nested, dict) and isinstance(nested.get(SERIES_LIST_KEY), list):
        return nested[SERIES_LIST_KEY]
    flat = body.get(SERIES_LIST_KEY)
    if isinstance(flat, list):
        return flat
    return None


def matches_chill_zone(body: Mapping[str, Any]) -> bool:
    return extract_series_list(body) is not None


_RULES: tuple[tuple[Region, Callable[[Mapping[str, Any]], bool]], ...] = (
    (Region.PLANNER, matches_planner),
    (Region.RESOURCE_HUB, matches_resource_hub),
    (Region.CHILL_ZONE, matches_chill_zone),
)


def classify(body: Any) -> ClassifiedPayload:
    """Tag *body* with the first region whose shape rule it satisfies."""
    if not is_plain_object(body):
        return ClassifiedPayload(region=Region.UNRECOGNIZED, payload=body)
    for region, predicate in _RULES:
        if predicate(body):
            return ClassifiedPayload(region=region, payload=body)
    return ClassifiedPayload(region=Region.UNRECOGNIZED, payload=body)
