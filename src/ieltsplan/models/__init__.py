"""Data models for dashboard payloads."""

from ieltsplan.models._base import StudyBaseModel
from ieltsplan.models.chill import ChillZone, Series
from ieltsplan.models.planner import DailyReview, DayPlan, Mood, Task
from ieltsplan.models.resources import ResourceHub, ResourceItem
from ieltsplan.models.snapshot import SyncSnapshot

__all__ = [
    "ChillZone",
    "DailyReview",
    "DayPlan",
    "Mood",
    "ResourceHub",
    "ResourceItem",
    "Series",
    "StudyBaseModel",
    "SyncSnapshot",
    "Task",
]
