"""Core domain surface for tracker-mcp (transport-agnostic)."""

from .config import create_connection_from_env, load_env_config, load_project_id
from .connection import (
    DEFAULT_BASE_URL,
    Connection,
    TrackerClientError,
    TrackerConnection,
    TrackerHTTPError,
    TrackerModelValidationError,
    TrackerParseError,
)
from .models import (
    Activity,
    Comment,
    Label,
    LabelCounts,
    Pagination,
    Person,
    ProjectMembership,
    Story,
    StoryState,
    StoryType,
)
from .payloads import FullRecord, RequestBody, SingleField, StateTransition, encode_body
from .project_client import DeliveryOutcome, DeliveryStatus, ProjectClient
from .queries import ActivityQuery, StoriesQuery
from .registry import discover_tool_modules, register_tools

__all__ = [
    # Connection
    "Connection",
    "TrackerConnection",
    "DEFAULT_BASE_URL",
    # Project scope
    "ProjectClient",
    "DeliveryOutcome",
    "DeliveryStatus",
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
    "LabelCounts",
    "Comment",
    "Activity",
    "Person",
    "ProjectMembership",
    "Pagination",
    # Queries and bodies
    "StoriesQuery",
    "ActivityQuery",
    "StateTransition",
    "SingleField",
    "FullRecord",
    "RequestBody",
    "encode_body",
    # Config helpers
    "create_connection_from_env",
    "load_env_config",
    "load_project_id",
    # Registry helpers
    "discover_tool_modules",
    "register_tools",
]
