"""
MCP tools over ProjectClient.

Each public coroutine here takes `client: ProjectClient` first; the registry
discovers and registers them, injecting the project-scoped client.
"""
