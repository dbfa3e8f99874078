"""Planner models: per-day task lists and daily reviews."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from ieltsplan._constants import VALID_PROGRESS_STEPS
from ieltsplan.models._base import StudyBaseModel


class Mood(StrEnum):
    NEUTRAL = "😐"
    GREAT = "😄"
    TIRED = "😴"
    FIGHTING = "💪"
    ROCKET = "🚀"


class Task(StudyBaseModel):
    """One planned study block."""

    id: str
    time_range: str = ""
    subject: str = ""
    content: str = ""
    progress: int = 0

    @field_validator("progress")
    @classmethod
    def _quantized_progress(cls, value: int) -> int:
        if value not in VALID_PROGRESS_STEPS:
            raise ValueError(f"progress must be one of {VALID_PROGRESS_STEPS}, got {value}")
        return value


class DailyReview(StudyBaseModel):
    reading_listening: str = ""
    speaking_writing: str = ""
    mood: Mood | None = None


class DayPlan(StudyBaseModel):
    """Everything stored under one ``YYYY-MM-DD`` key."""

    tasks: list[Task] = Field(default_factory=list)
    review: DailyReview | None = None

    @property
    def average_progress(self) -> float:
        if not self.tasks:
            return 0.0
        return sum(task.progress for task in self.tasks) / len(self.tasks)
