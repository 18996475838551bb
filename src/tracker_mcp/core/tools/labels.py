from __future__ import annotations

from typing import Any, Dict, List

from tracker_mcp.core.models import Label
from tracker_mcp.core.project_client import ProjectClient
from tracker_mcp.core.tools._common import run_blocking


def _label_item(label: Label) -> Dict[str, Any]:
    by_state = label.counts.number_of_stories_by_state if label.counts else None
    return {
        "id": label.id,
        "name": label.name,
        "project_id": label.project_id,
        "stories_by_state": by_state or {},
    }


async def list_labels(client: ProjectClient) -> Dict[str, Any]:
    """
    List the project's labels with per-state story counts.
    Returns: {items, count}; items sorted by name (case-insensitive).
    """
    labels = await run_blocking(client.labels)
    items: List[Dict[str, Any]] = [_label_item(lbl) for lbl in labels]
    items.sort(key=lambda i: ((i.get("name") or "").casefold(), i.get("id") or 0))
    return {"items": items, "count": len(items)}


async def add_story_label(
    client: ProjectClient, story_id: int, label: str
) -> Dict[str, Any]:
    """Attach a label to a story by name; the tracker creates it if needed."""
    label = (label or "").strip()
    if not label:
        raise ValueError("label must not be empty.")
    created = await run_blocking(client.add_story_label, story_id, label)
    return _label_item(created)


async def remove_story_label(
    client: ProjectClient, story_id: int, label_id: int
) -> Dict[str, Any]:
    await run_blocking(client.remove_story_label, story_id, label_id)
    return {"removed": True, "story_id": story_id, "label_id": label_id}


async def delete_label(client: ProjectClient, label_id: int) -> Dict[str, Any]:
    """Delete a label from the project (and from every story carrying it)."""
    await run_blocking(client.delete_label, label_id)
    return {"deleted": True, "label_id": label_id}
