"""Typed view over the region-shaped Load response."""

from __future__ import annotations

from pydantic import Field

from ieltsplan.models._base import StudyBaseModel
from ieltsplan.models.chill import ChillZone
from ieltsplan.models.planner import DayPlan
from ieltsplan.models.resources import ResourceHub


class SyncSnapshot(StudyBaseModel):
    """``{planner, resourceHub, chillZone}`` with every region defaulted."""

    planner: dict[str, DayPlan] = Field(default_factory=dict)
    resource_hub: ResourceHub = Field(default_factory=ResourceHub)
    chill_zone: ChillZone = Field(default_factory=ChillZone)
