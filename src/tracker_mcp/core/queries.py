"""Filter/sort parameter sets for the listing endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import StoryState


def _timestamp(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


class StoriesQuery(BaseModel):
    state: Optional[StoryState] = None
    label: Optional[str] = None
    filter: List[str] = Field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None

    model_config = ConfigDict(extra="forbid")

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.state is not None:
            params["with_state"] = self.state.value
        if self.label:
            params["with_label"] = self.label
        if self.filter:
            params["filter"] = " ".join(self.filter)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        return params


class ActivityQuery(BaseModel):
    limit: Optional[int] = None
    offset: Optional[int] = None
    occurred_before: Optional[datetime] = None
    occurred_after: Optional[datetime] = None
    since_version: Optional[int] = None

    model_config = ConfigDict(extra="forbid")

    def query(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        if self.occurred_before is not None:
            params["occurred_before"] = _timestamp(self.occurred_before)
        if self.occurred_after is not None:
            params["occurred_after"] = _timestamp(self.occurred_after)
        if self.since_version is not None:
            params["since_version"] = str(self.since_version)
        return params


__all__ = ["StoriesQuery", "ActivityQuery"]
