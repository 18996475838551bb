"""
Tool discovery for the MCP surface.

A tool is a public coroutine defined in a module under tracker_mcp.core.tools
whose first parameter is `client`. The server has exactly one ProjectClient;
it is bound into every tool and hidden from the advertised signature.
"""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, get_type_hints

from .project_client import ProjectClient

TOOLS_PACKAGE = "tracker_mcp.core.tools"

log = logging.getLogger("tracker_mcp.core.registry")


def discover_tool_modules(package_name: str = TOOLS_PACKAGE) -> List[ModuleType]:
    """Import the public modules of a tools package; failures are logged and skipped."""
    package = importlib.import_module(package_name)
    modules: List[ModuleType] = []
    for info in pkgutil.iter_modules(package.__path__, package.__name__ + "."):
        if info.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            modules.append(importlib.import_module(info.name))
        except Exception:  # pragma: no cover - logged, not fatal
            log.exception("Failed importing tool module %s", info.name)
    return modules


def _is_tool(module: ModuleType, name: str, obj: Any) -> bool:
    if name.startswith("_") or not inspect.iscoroutinefunction(obj):
        return False
    if obj.__module__ != module.__name__:
        return False
    first = next(iter(inspect.signature(obj).parameters), None)
    return first == "client"


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    for name, obj in sorted(vars(module).items()):
        if _is_tool(module, name, obj):
            yield obj


def collect_tools(modules: Iterable[ModuleType]) -> Dict[str, Callable]:
    tools: Dict[str, Callable] = {}
    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in tools:
                raise ValueError(
                    f"Duplicate tool name {name!r} in {module.__name__} "
                    f"and {tools[name].__module__}"
                )
            tools[name] = func
    return tools


def bind_client(func: Callable, client: ProjectClient) -> Callable:
    """Return a coroutine calling func(client, ...) whose signature omits client."""
    sig = inspect.signature(func)
    hints = get_type_hints(func)
    params = [
        p.replace(annotation=hints.get(p.name, p.annotation))
        for p in list(sig.parameters.values())[1:]
    ]

    async def tool(*args, **kwargs):
        return await func(client, *args, **kwargs)

    functools.update_wrapper(
        tool, func, assigned=("__module__", "__name__", "__qualname__", "__doc__")
    )
    tool.__signature__ = sig.replace(  # type: ignore[attr-defined]
        parameters=params,
        return_annotation=hints.get("return", sig.return_annotation),
    )
    return tool


def register_tools(
    app, client: ProjectClient, modules: Optional[List[ModuleType]] = None
) -> List[str]:
    """Register every discovered tool on an app exposing a .tool(name=...) decorator."""
    if not callable(getattr(app, "tool", None)):
        raise TypeError("app must expose a 'tool' decorator")

    tools = collect_tools(discover_tool_modules() if modules is None else modules)
    for name, func in sorted(tools.items()):
        app.tool(name=name)(bind_client(func, client))
    log.info("Registered %d tools for project %s", len(tools), client.project_id)
    return sorted(tools)


__all__ = [
    "discover_tool_modules",
    "iter_tool_functions",
    "collect_tools",
    "bind_client",
    "register_tools",
]
