from __future__ import annotations

import asyncio
import logging
import os

from mcp.server.fastmcp import FastMCP

from tracker_mcp.core.config import create_connection_from_env, load_project_id
from tracker_mcp.core.logging import setup_logging
from tracker_mcp.core.registry import register_tools

log = logging.getLogger("tracker_mcp.transports.stdio")


async def main() -> None:
    setup_logging(os.getenv("TRACKER_LOG_LEVEL", "INFO"))
    project_id = load_project_id()

    with create_connection_from_env() as connection:
        client = connection.project(project_id)

        app = FastMCP("tracker-mcp")
        tools = register_tools(app, client)
        log.info(
            "Serving %d tools for project %d over stdio", len(tools), project_id
        )

        await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
