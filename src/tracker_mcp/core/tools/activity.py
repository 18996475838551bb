from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from tracker_mcp.core.project_client import ProjectClient
from tracker_mcp.core.queries import ActivityQuery
from tracker_mcp.core.tools._common import dump, run_blocking


async def list_story_activity(
    client: ProjectClient,
    story_id: int,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    occurred_after: Optional[datetime] = None,
    occurred_before: Optional[datetime] = None,
    since_version: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Audit trail for one story, newest first as the tracker returns it.
    Returns: {items, count}
    """
    query = ActivityQuery(
        limit=limit,
        offset=offset,
        occurred_after=occurred_after,
        occurred_before=occurred_before,
        since_version=since_version,
    )
    activities = await run_blocking(client.story_activity, story_id, query)
    return {
        "items": [dump(a) for a in activities],
        "count": len(activities),
    }
