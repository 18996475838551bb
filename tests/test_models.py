from conftest import load_fixture
from tracker_mcp.core.models import (
    Activity,
    Comment,
    Label,
    Pagination,
    ProjectMembership,
    Story,
    StoryState,
    StoryType,
)


def test_fixtures_are_lists():
    for name in ("stories.json", "memberships.json", "activity.json"):
        data = load_fixture(name)
        assert isinstance(data, list)
        assert len(data) >= 1


def test_story_parses_enums_and_labels():
    story = Story.model_validate(load_fixture("stories.json")[0])

    assert story.id == 555
    assert story.story_type is StoryType.FEATURE
    assert story.current_state is StoryState.STARTED
    assert story.estimate == 2
    assert isinstance(story.labels[0], Label)
    assert story.created_at.year == 2024


def test_story_ignores_unknown_keys():
    story = Story.model_validate({"id": 1, "kind": "story", "cycle_time_details": {}})
    assert story.id == 1
    assert not hasattr(story, "kind")


def test_membership_parses_person():
    membership = ProjectMembership.model_validate(load_fixture("memberships.json")[0])

    assert membership.id == 3001
    assert membership.person.name == "Wilma Flintstone"
    assert membership.role == "owner"
    assert membership.wants_comment_notification_emails is True


def test_activity_is_opaque_beyond_decoding():
    activity = Activity.model_validate(load_fixture("activity.json")[0])

    assert activity.kind == "story_update_activity"
    assert activity.project_version == 1042
    assert activity.primary_resources[0]["id"] == 555
    assert activity.performed_by["initials"] == "WF"


def test_pagination_defaults_to_zero():
    assert Pagination() == Pagination(total=0, limit=0, offset=0, returned=0)


def test_comment_decodes_created_comment():
    comment = Comment.model_validate(
        {"kind": "comment", "id": 5, "story_id": 42, "person_id": 101, "text": "done"}
    )

    assert comment.text == "done"
    assert comment.model_dump(exclude_none=True) == {
        "id": 5,
        "story_id": 42,
        "person_id": 101,
        "text": "done",
    }
