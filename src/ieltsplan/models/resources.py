"""Resource Hub models."""

from __future__ import annotations

from pydantic import Field

from ieltsplan.models._base import StudyBaseModel


class ResourceItem(StudyBaseModel):
    name: str
    url: str | None = None
    is_upload: bool | None = None
    note: str | None = None


class ResourceHub(StudyBaseModel):
    """The five skill categories, each an ordered list of resources."""

    vocabulary: list[ResourceItem] = Field(default_factory=list)
    listening: list[ResourceItem] = Field(default_factory=list)
    reading: list[ResourceItem] = Field(default_factory=list)
    writing: list[ResourceItem] = Field(default_factory=list)
    speaking: list[ResourceItem] = Field(default_factory=list)
