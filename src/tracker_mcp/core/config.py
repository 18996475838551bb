from __future__ import annotations

import os
from typing import Tuple

from . import connection as _connection
from .connection import DEFAULT_BASE_URL, TrackerConnection


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load tracker base URL and API token from environment (optional .env)."""
    if use_dotenv:
        _connection.load_dotenv()
    base_url = os.getenv("TRACKER_BASE_URL", "").strip() or DEFAULT_BASE_URL
    api_token = os.getenv("TRACKER_API_TOKEN", "").strip()
    return base_url, api_token


def load_project_id(*, use_dotenv: bool = True) -> int:
    """Read TRACKER_PROJECT_ID; raises ValueError when missing or not an integer."""
    if use_dotenv:
        _connection.load_dotenv()
    raw = os.getenv("TRACKER_PROJECT_ID", "").strip()
    if not raw:
        raise ValueError("Missing TRACKER_PROJECT_ID in environment.")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(
            f"TRACKER_PROJECT_ID must be an integer, got {raw!r}."
        ) from exc


def create_connection_from_env(**kwargs) -> TrackerConnection:
    """Create a TrackerConnection from environment variables."""
    base_url, api_token = load_env_config()
    if not api_token:
        raise ValueError("Missing TRACKER_API_TOKEN in environment.")
    return TrackerConnection(base_url=base_url, api_token=api_token, **kwargs)


__all__ = ["load_env_config", "load_project_id", "create_connection_from_env"]
