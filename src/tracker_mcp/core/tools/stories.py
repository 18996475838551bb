from __future__ import annotations

from typing import Any, Dict, List, Optional

from tracker_mcp.core.models import Story, StoryState, StoryType
from tracker_mcp.core.project_client import DeliveryStatus, ProjectClient
from tracker_mcp.core.queries import StoriesQuery
from tracker_mcp.core.tools._common import dump, run_blocking

MAX_LIMIT = 500


def _clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


async def list_stories(
    client: ProjectClient,
    state: Optional[StoryState] = None,
    label: Optional[str] = None,
    filter: Optional[List[str]] = None,
    limit: int = 100,
    offset: int = 0,
) -> Dict[str, Any]:
    """
    List stories in the project.
    - state/label narrow the result; filter takes tracker search terms.
    - limit is clamped to 1..500.
    Returns: {items, pagination: {total, limit, offset, returned}}
    """
    query = StoriesQuery(
        state=state,
        label=label,
        filter=filter or [],
        limit=_clamp_limit(limit),
        offset=max(0, offset),
    )
    stories, pagination = await run_blocking(client.stories, query)
    return {
        "items": [dump(s) for s in stories],
        "pagination": pagination.model_dump(),
    }


async def create_story(
    client: ProjectClient,
    name: str,
    story_type: Optional[StoryType] = None,
    description: Optional[str] = None,
    estimate: Optional[float] = None,
    current_state: Optional[StoryState] = None,
) -> Dict[str, Any]:
    """Create a story. Only the fields given are sent."""
    name = (name or "").strip()
    if not name:
        raise ValueError("name must not be empty.")

    story = Story(
        name=name,
        story_type=story_type,
        description=description,
        estimate=estimate,
        current_state=current_state,
    )
    created = await run_blocking(client.create_story, story)
    return dump(created)


async def deliver_story(client: ProjectClient, story_id: int) -> Dict[str, Any]:
    """Move a story to the delivered state."""
    return dump(await run_blocking(client.deliver_story, story_id))


async def deliver_story_with_comment(
    client: ProjectClient, story_id: int, comment: str
) -> Dict[str, Any]:
    """
    Deliver a story and leave a comment on it.
    If delivery fails nothing else happens and the error is raised.
    If only the comment fails the story stays delivered; the result has
    status "comment_failed" and the error text.
    Returns: {status, story, error}
    """
    outcome = await run_blocking(
        client.deliver_story_with_comment_outcome, story_id, comment
    )
    if outcome.status is DeliveryStatus.DELIVERY_FAILED:
        raise outcome.error

    return {
        "status": outcome.status.value,
        "story": dump(outcome.story) if outcome.story is not None else None,
        "error": str(outcome.error) if outcome.error is not None else None,
    }


async def unschedule_story(client: ProjectClient, story_id: int) -> Dict[str, Any]:
    """Move a story back to the icebox."""
    return dump(await run_blocking(client.unschedule_story, story_id))


async def set_story_type(
    client: ProjectClient, story_id: int, story_type: StoryType
) -> Dict[str, Any]:
    return dump(await run_blocking(client.set_story_type, story_id, story_type))


async def set_story_name(
    client: ProjectClient, story_id: int, name: str
) -> Dict[str, Any]:
    name = (name or "").strip()
    if not name:
        raise ValueError("name must not be empty.")
    return dump(await run_blocking(client.set_story_name, story_id, name))


async def delete_story(client: ProjectClient, story_id: int) -> Dict[str, Any]:
    await run_blocking(client.delete_story, story_id)
    return {"deleted": True, "story_id": story_id}
