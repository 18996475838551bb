import json

import pytest
import respx
from conftest import BASE_URL, load_fixture
from httpx import Response
from tracker_mcp.core.connection import TrackerHTTPError
from tracker_mcp.core.models import StoryState, StoryType
from tracker_mcp.core.tools.stories import (
    create_story,
    delete_story,
    deliver_story,
    deliver_story_with_comment,
    list_stories,
    set_story_name,
    set_story_type,
    unschedule_story,
)

PROJECT = f"{BASE_URL}/projects/99"


def _story(**overrides):
    story = {"kind": "story", "id": 42, "project_id": 99, "name": "Ship it"}
    story.update(overrides)
    return story


@pytest.mark.asyncio
@respx.mock
async def test_list_stories_clamps_limit_and_returns_pagination(client):
    route = respx.get(f"{PROJECT}/stories").mock(
        return_value=Response(
            200,
            json=load_fixture("stories.json"),
            headers={
                "X-Tracker-Pagination-Total": "812",
                "X-Tracker-Pagination-Limit": "500",
                "X-Tracker-Pagination-Offset": "0",
                "X-Tracker-Pagination-Returned": "2",
            },
        )
    )

    data = await list_stories(client, state=StoryState.STARTED, limit=10_000)

    params = route.calls[0].request.url.params
    assert params["limit"] == "500"
    assert params["offset"] == "0"
    assert params["with_state"] == "started"
    assert [s["id"] for s in data["items"]] == [555, 556]
    assert "description" not in data["items"][1]
    assert data["pagination"] == {
        "total": 812,
        "limit": 500,
        "offset": 0,
        "returned": 2,
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_story_sends_only_given_fields(client):
    route = respx.post(f"{PROJECT}/stories").mock(
        return_value=Response(
            200, json=_story(id=900, name="Audit log", story_type="chore")
        )
    )

    data = await create_story(client, "  Audit log ", story_type=StoryType.CHORE)

    assert json.loads(route.calls[0].request.content) == {
        "name": "Audit log",
        "story_type": "chore",
    }
    assert data["id"] == 900
    assert data["story_type"] == "chore"


@pytest.mark.asyncio
async def test_create_story_rejects_blank_name(client):
    with pytest.raises(ValueError):
        await create_story(client, "   ")


@pytest.mark.asyncio
@respx.mock
async def test_workflow_tools(client):
    route = respx.put(f"{PROJECT}/stories/42").mock(
        side_effect=[
            Response(200, json=_story(current_state="delivered")),
            Response(200, json=_story(current_state="unscheduled")),
            Response(200, json=_story(story_type="bug")),
            Response(200, json=_story(name="Renamed")),
        ]
    )

    delivered = await deliver_story(client, 42)
    unscheduled = await unschedule_story(client, 42)
    retyped = await set_story_type(client, 42, StoryType.BUG)
    renamed = await set_story_name(client, 42, "Renamed")

    assert [c.request.content for c in route.calls] == [
        b'{"current_state":"delivered"}',
        b'{"current_state":"unscheduled"}',
        b'{"story_type":"bug"}',
        b'{"name":"Renamed"}',
    ]
    assert delivered["current_state"] == "delivered"
    assert unscheduled["current_state"] == "unscheduled"
    assert retyped["story_type"] == "bug"
    assert renamed["name"] == "Renamed"


@pytest.mark.asyncio
@respx.mock
async def test_deliver_with_comment_success(client):
    respx.put(f"{PROJECT}/stories/42").mock(
        return_value=Response(200, json=_story(current_state="delivered"))
    )
    comments = respx.post(f"{PROJECT}/stories/42/comments").mock(
        return_value=Response(200, json={"kind": "comment", "id": 5, "text": "done"})
    )

    data = await deliver_story_with_comment(client, 42, "done")

    assert comments.calls[0].request.content == b'{"text":"done"}'
    assert data["status"] == "delivered"
    assert data["story"]["current_state"] == "delivered"
    assert data["error"] is None


@pytest.mark.asyncio
@respx.mock
async def test_deliver_with_comment_reports_comment_failure(client):
    respx.put(f"{PROJECT}/stories/42").mock(
        return_value=Response(200, json=_story(current_state="delivered"))
    )
    respx.post(f"{PROJECT}/stories/42/comments").mock(
        return_value=Response(500, json={"error": "Comment service down"})
    )

    data = await deliver_story_with_comment(client, 42, "done")

    assert data["status"] == "comment_failed"
    assert data["story"]["id"] == 42
    assert "Comment service down" in data["error"]


@pytest.mark.asyncio
@respx.mock
async def test_deliver_with_comment_raises_when_delivery_fails(client):
    respx.put(f"{PROJECT}/stories/42").mock(
        return_value=Response(403, json={"error": "Not authorized"})
    )

    with pytest.raises(TrackerHTTPError) as exc:
        await deliver_story_with_comment(client, 42, "done")

    assert exc.value.status_code == 403
    assert len(respx.calls) == 1


@pytest.mark.asyncio
@respx.mock
async def test_delete_story(client):
    route = respx.delete(f"{PROJECT}/stories/42").mock(return_value=Response(204))

    data = await delete_story(client, 42)

    assert route.called
    assert data == {"deleted": True, "story_id": 42}
