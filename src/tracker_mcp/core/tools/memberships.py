from __future__ import annotations

from typing import Any, Dict, List

from tracker_mcp.core.models import ProjectMembership
from tracker_mcp.core.project_client import ProjectClient
from tracker_mcp.core.tools._common import run_blocking


def _membership_item(m: ProjectMembership) -> Dict[str, Any]:
    person = m.person
    return {
        "membership_id": m.id,
        "person_id": person.id if person else None,
        "person_name": person.name if person else None,
        "username": person.username if person else None,
        "initials": person.initials if person else None,
        "role": m.role,
    }


async def list_project_memberships(
    client: ProjectClient, *, sort: bool = False
) -> Dict[str, Any]:
    """
    List project members (people and their roles).
    Returns: {items, count}
    Each item: {membership_id, person_id, person_name, username, initials, role}
    """
    memberships = await run_blocking(client.project_memberships)
    items: List[Dict[str, Any]] = [_membership_item(m) for m in memberships]

    if sort:
        items.sort(
            key=lambda i: (
                (i.get("person_name") or "").casefold(),
                i.get("person_id") or 0,
            )
        )

    return {"items": items, "count": len(items)}
