"""Region-shaped projection of the stored state.

The stored object is flat; frontends that prefer one sub-object per
module read ``{planner, resourceHub, chillZone}`` instead. Regions that
fail their shape check come back as empty defaults, never ``None``.
"""

from __future__ import annotations

import copy
from typing import Any

from ieltsplan._constants import RESOURCE_CATEGORIES, SERIES_LIST_KEY
from ieltsplan.sync.classify import is_date_key


def planner_region(state: dict[str, Any]) -> dict[str, Any]:
    return {key: copy.deepcopy(value) for key, value in state.items() if is_date_key(key)}


def resource_hub_region(state: dict[str, Any]) -> dict[str, list[Any]]:
    hub: dict[str, list[Any]] = {}
    for category in RESOURCE_CATEGORIES:
        value = state.get(category)
        hub[category] = copy.deepcopy(value) if isinstance(value, list) else []
    return hub


def chill_zone_region(state: dict[str, Any]) -> dict[str, list[Any]]:
    value = state.get(SERIES_LIST_KEY)
    return {SERIES_LIST_KEY: copy.deepcopy(value) if isinstance(value, list) else []}


def region_view(state: dict[str, Any]) -> dict[str, Any]:
    return {
        "planner": planner_region(state),
        "resourceHub": resource_hub_region(state),
        "chillZone": chill_zone_region(state),
    }
