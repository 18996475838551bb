from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StoryType(str, Enum):
    FEATURE = "feature"
    BUG = "bug"
    CHORE = "chore"
    RELEASE = "release"


class StoryState(str, Enum):
    ACCEPTED = "accepted"
    DELIVERED = "delivered"
    FINISHED = "finished"
    STARTED = "started"
    REJECTED = "rejected"
    PLANNED = "planned"
    UNSTARTED = "unstarted"
    UNSCHEDULED = "unscheduled"


class TrackerModel(BaseModel):
    """
    Base for records decoded from the tracker API.
    Unknown keys are ignored; the API grows fields faster than we model them.
    """

    model_config = ConfigDict(extra="ignore")


# --- Labels ---


class LabelCounts(TrackerModel):
    number_of_zero_point_stories_by_state: Optional[Dict[str, Any]] = None
    sum_of_story_estimates_by_state: Optional[Dict[str, Any]] = None
    number_of_stories_by_state: Optional[Dict[str, Any]] = None


class Label(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    counts: Optional[LabelCounts] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Stories ---


class Story(TrackerModel):
    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    story_type: Optional[StoryType] = None
    current_state: Optional[StoryState] = None
    estimate: Optional[float] = None
    requested_by_id: Optional[int] = None
    owner_ids: Optional[List[int]] = None
    label_ids: Optional[List[int]] = None
    labels: Optional[List[Label]] = None
    url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    deadline: Optional[datetime] = None


class Comment(TrackerModel):
    id: Optional[int] = None
    story_id: Optional[int] = None
    person_id: Optional[int] = None
    text: str = ""


# --- Activity ---


class Activity(TrackerModel):
    """Audit record for a story; fields are decoded but not interpreted."""

    kind: Optional[str] = None
    guid: Optional[str] = None
    project_version: Optional[int] = None
    message: Optional[str] = None
    highlight: Optional[str] = None
    changes: List[Dict[str, Any]] = Field(default_factory=list)
    primary_resources: List[Dict[str, Any]] = Field(default_factory=list)
    performed_by: Optional[Dict[str, Any]] = None
    occurred_at: Optional[datetime] = None


# --- Memberships ---


class Person(TrackerModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    initials: Optional[str] = None
    username: Optional[str] = None


class ProjectMembership(TrackerModel):
    id: int
    person: Optional[Person] = None
    role: Optional[str] = None
    project_color: Optional[str] = None
    last_viewed_at: Optional[datetime] = None
    wants_comment_notification_emails: Optional[bool] = None


# --- Pagination ---


class Pagination(BaseModel):
    """Counts read from response headers; all zero when the endpoint doesn't page."""

    total: int = 0
    limit: int = 0
    offset: int = 0
    returned: int = 0

    model_config = ConfigDict(frozen=True)
