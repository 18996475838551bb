"""tracker_mcp package exports."""

from .core import (
    Activity,
    ActivityQuery,
    Comment,
    Connection,
    DeliveryOutcome,
    DeliveryStatus,
    Label,
    Pagination,
    ProjectClient,
    ProjectMembership,
    StoriesQuery,
    Story,
    StoryState,
    StoryType,
    TrackerClientError,
    TrackerConnection,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
    create_connection_from_env,
)

__all__ = [
    # Client
    "TrackerConnection",
    "Connection",
    "ProjectClient",
    "DeliveryOutcome",
    "DeliveryStatus",
    "create_connection_from_env",
    # Exceptions
    "TrackerClientError",
    "TrackerHTTPError",
    "TrackerParseError",
    "TrackerModelValidationError",
    # Models
    "Story",
    "StoryType",
    "StoryState",
    "Label",
    "Comment",
    "Activity",
    "ProjectMembership",
    "Pagination",
    "StoriesQuery",
    "ActivityQuery",
]
