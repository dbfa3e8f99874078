"""Tests for the dashboard Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ieltsplan.models import (
    ChillZone,
    DailyReview,
    DayPlan,
    Mood,
    ResourceHub,
    ResourceItem,
    Series,
    SyncSnapshot,
    Task,
)


class TestTask:
    def test_camel_case_aliases(self) -> None:
        task = Task.model_validate(
            {"id": "1", "timeRange": "08:00-09:00", "subject": "Writing", "content": "Task 1", "progress": 25}
        )
        assert task.time_range == "08:00-09:00"
        assert task.to_wire()["timeRange"] == "08:00-09:00"

    @pytest.mark.parametrize("progress", [0, 25, 50, 75, 100])
    def test_quantized_progress_accepted(self, progress: int) -> None:
        assert Task(id="1", progress=progress).progress == progress

    @pytest.mark.parametrize("progress", [-25, 10, 99, 125])
    def test_off_step_progress_rejected(self, progress: int) -> None:
        with pytest.raises(ValidationError):
            Task(id="1", progress=progress)


class TestDailyReview:
    def test_mood_is_nullable(self) -> None:
        review = DailyReview.model_validate({"readingListening": "", "speakingWriting": "", "mood": None})
        assert review.mood is None
        assert "mood" not in review.to_wire()

    def test_mood_from_emoji(self) -> None:
        assert DailyReview.model_validate({"mood": "💪"}).mood == Mood.FIGHTING


def test_day_plan_ignores_legacy_fields() -> None:
    plan = DayPlan.model_validate({"goal": "practice listening", "completed": False})
    assert plan.tasks == []
    assert plan.average_progress == 0.0


def test_resource_item_round_trips_upload_flag() -> None:
    item = ResourceItem.model_validate({"name": "notes.pdf", "isUpload": True})
    assert item.is_upload is True
    assert item.to_wire() == {"name": "notes.pdf", "isUpload": True}


def test_series_defaults() -> None:
    series = Series(id="custom-slot", is_custom=True)
    assert series.to_wire() == {
        "id": "custom-slot",
        "title": "",
        "description": "",
        "url": "",
        "poster": "",
        "isCustom": True,
    }


def test_snapshot_defaults_every_region() -> None:
    snapshot = SyncSnapshot.model_validate({})
    assert snapshot.planner == {}
    assert snapshot.resource_hub == ResourceHub()
    assert snapshot.chill_zone == ChillZone()


def test_snapshot_parses_region_view() -> None:
    snapshot = SyncSnapshot.model_validate(
        {
            "planner": {"2025-01-01": {"tasks": [{"id": "a", "progress": 50}]}},
            "resourceHub": {
                "vocabulary": [{"name": "A"}],
                "listening": [],
                "reading": [],
                "writing": [],
                "speaking": [],
            },
            "chillZone": {"seriesList": [{"id": "s1", "title": "Sherlock"}]},
        }
    )
    assert snapshot.planner["2025-01-01"].tasks[0].progress == 50
    assert snapshot.resource_hub.vocabulary[0].name == "A"
    assert snapshot.chill_zone.series_list[0].title == "Sherlock"
