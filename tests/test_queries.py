from datetime import datetime, timezone

import pytest
from pydantic import ValidationError
from tracker_mcp.core.models import StoryState
from tracker_mcp.core.queries import ActivityQuery, StoriesQuery


def test_empty_queries_produce_no_params():
    assert StoriesQuery().query() == {}
    assert ActivityQuery().query() == {}


def test_stories_query_params():
    query = StoriesQuery(
        state=StoryState.FINISHED,
        label="needs qa",
        filter=["owner:wf", "type:bug"],
        limit=25,
        offset=50,
    )

    assert query.query() == {
        "with_state": "finished",
        "with_label": "needs qa",
        "filter": "owner:wf type:bug",
        "limit": "25",
        "offset": "50",
    }


def test_stories_query_zero_offset_is_sent():
    assert StoriesQuery(offset=0).query() == {"offset": "0"}


def test_activity_query_params():
    query = ActivityQuery(
        limit=10,
        occurred_after=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        since_version=7,
    )

    assert query.query() == {
        "limit": "10",
        "occurred_after": "2024-01-02T03:04:05Z",
        "since_version": "7",
    }


def test_queries_reject_unknown_fields():
    with pytest.raises(ValidationError):
        StoriesQuery(owner="wf")
