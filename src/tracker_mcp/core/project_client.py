from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

import httpx

from .connection import Connection, TrackerClientError
from .models import (
    Activity,
    Comment,
    Label,
    Pagination,
    ProjectMembership,
    Story,
    StoryState,
    StoryType,
)
from .payloads import FullRecord, SingleField, StateTransition, encode_body
from .queries import ActivityQuery, StoriesQuery

LABEL_FIELDS = "id,project_id,name,counts"

Body = Union[bytes, str, StateTransition, SingleField, FullRecord]


class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"
    COMMENT_FAILED = "comment_failed"


@dataclass(frozen=True)
class DeliveryOutcome:
    """
    Result of deliver-with-comment that keeps the two steps apart.
    With COMMENT_FAILED the story has been delivered and `story` is set.
    """

    status: DeliveryStatus
    story: Optional[Story] = None
    error: Optional[TrackerClientError] = None

    @property
    def delivered(self) -> bool:
        return self.status is not DeliveryStatus.DELIVERY_FAILED


class ProjectClient:
    """
    View of the tracker API scoped to a single project.
    - Every path is prefixed with /projects/{project_id}
    - Connection errors propagate untouched; nothing is retried or cached
    - Holds no state beyond the project id and the borrowed connection
    """

    __slots__ = ("_id", "_conn")

    def __init__(self, project_id: int, connection: Connection):
        self._id = project_id
        self._conn = connection

    @property
    def project_id(self) -> int:
        return self._id

    def __repr__(self) -> str:
        return f"ProjectClient(project_id={self._id})"

    # --- Listing ---

    def stories(
        self, query: Optional[StoriesQuery] = None
    ) -> Tuple[List[Story], Pagination]:
        params = query.query() if query is not None else None
        request = self._create_request("GET", "/stories", params)
        stories, pagination = self._conn.do(request, List[Story])
        return stories or [], pagination

    def labels(self) -> List[Label]:
        request = self._create_request("GET", "/labels", {"fields": LABEL_FIELDS})
        labels, _ = self._conn.do(request, List[Label])
        return labels or []

    def story_activity(
        self, story_id: int, query: Optional[ActivityQuery] = None
    ) -> List[Activity]:
        params = query.query() if query is not None else None
        request = self._create_request(
            "GET", f"/stories/{story_id}/activity", params
        )
        activities, _ = self._conn.do(request, List[Activity])
        return activities or []

    def project_memberships(self) -> List[ProjectMembership]:
        request = self._create_request("GET", "/memberships")
        memberships, _ = self._conn.do(request, List[ProjectMembership])
        return memberships or []

    # --- Story workflow ---

    def deliver_story(self, story_id: int) -> Story:
        return self._update_story(
            story_id, StateTransition(current_state=StoryState.DELIVERED)
        )

    def unschedule_story(self, story_id: int) -> Story:
        return self._update_story(
            story_id, StateTransition(current_state=StoryState.UNSCHEDULED)
        )

    def deliver_story_with_comment(self, story_id: int, comment: str) -> Story:
        """
        Deliver a story, then comment on it.

        Two requests, no atomicity: if the comment fails its error is raised
        but the story stays delivered. The returned story is the delivery
        response, so it won't reflect the new comment.
        """
        story = self.deliver_story(story_id)
        self._add_comment(story_id, comment)
        return story

    def deliver_story_with_comment_outcome(
        self, story_id: int, comment: str
    ) -> DeliveryOutcome:
        """
        Like deliver_story_with_comment, but reports which step failed.
        Only TrackerClientError is classified; other exceptions propagate.
        """
        try:
            story = self.deliver_story(story_id)
        except TrackerClientError as exc:
            return DeliveryOutcome(status=DeliveryStatus.DELIVERY_FAILED, error=exc)

        try:
            self._add_comment(story_id, comment)
        except TrackerClientError as exc:
            return DeliveryOutcome(
                status=DeliveryStatus.COMMENT_FAILED, story=story, error=exc
            )

        return DeliveryOutcome(status=DeliveryStatus.DELIVERED, story=story)

    def set_story_type(self, story_id: int, story_type: StoryType) -> Story:
        return self._update_story(
            story_id, SingleField(field="story_type", value=StoryType(story_type))
        )

    def set_story_name(self, story_id: int, name: str) -> Story:
        return self._update_story(story_id, FullRecord(record=Story(name=name)))

    # --- Story CRUD ---

    def create_story(self, story: Story) -> Story:
        request = self._create_request("POST", "/stories")
        request = self._add_json_body(request, FullRecord(record=story))
        created, _ = self._conn.do(request, Story)
        return created

    def delete_story(self, story_id: int) -> None:
        request = self._create_request("DELETE", f"/stories/{story_id}")
        self._conn.do(request, None)

    # --- Labels ---

    def add_story_label(self, story_id: int, label: str) -> Label:
        request = self._create_request("POST", f"/stories/{story_id}/labels")
        request = self._add_json_body(request, SingleField(field="name", value=label))
        created, _ = self._conn.do(request, Label)
        return created

    def remove_story_label(self, story_id: int, label_id: int) -> None:
        request = self._create_request(
            "DELETE", f"/stories/{story_id}/labels/{label_id}"
        )
        self._conn.do(request, None)

    def delete_label(self, label_id: int) -> None:
        request = self._create_request("DELETE", f"/labels/{label_id}")
        self._conn.do(request, None)

    # --- Request assembly ---

    def _update_story(
        self, story_id: int, body: Union[StateTransition, SingleField, FullRecord]
    ) -> Story:
        request = self._create_request("PUT", f"/stories/{story_id}")
        request = self._add_json_body(request, body)
        updated, _ = self._conn.do(request, Story)
        return updated

    def _add_comment(self, story_id: int, comment: str) -> None:
        request = self._create_request("POST", f"/stories/{story_id}/comments")
        request = self._add_json_body(
            request, FullRecord(record=Comment(text=comment))
        )
        self._conn.do(request, None)

    def _create_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Request:
        return self._conn.create_request(
            method, f"/projects/{self._id}{path}", params
        )

    @staticmethod
    def _add_json_body(request: httpx.Request, body: Body) -> httpx.Request:
        if isinstance(body, str):
            content = body.encode("utf-8")
        elif isinstance(body, bytes):
            content = body
        else:
            content = encode_body(body)

        # httpx fixes Content-Length at build time, so rebuild with the body
        headers = httpx.Headers(request.headers)
        headers.pop("Content-Length", None)
        headers["Content-Type"] = "application/json"
        return httpx.Request(
            request.method,
            request.url,
            headers=headers,
            content=content,
            extensions=request.extensions,
        )


__all__ = ["ProjectClient", "DeliveryOutcome", "DeliveryStatus", "LABEL_FIELDS"]
