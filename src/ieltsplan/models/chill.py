"""Chill Zone watch-list models."""

from __future__ import annotations

from pydantic import Field

from ieltsplan.models._base import StudyBaseModel


class Series(StudyBaseModel):
    id: str
    title: str = ""
    description: str = ""
    url: str = ""
    poster: str = ""
    is_custom: bool | None = None


class ChillZone(StudyBaseModel):
    series_list: list[Series] = Field(default_factory=list)
