#!/usr/bin/env python3
"""
Fail if a layer imports something it must not.
- src/tracker_mcp/core/: no transport or server frameworks.
- the project-client modules: additionally no tool runtime (mcp, anyio),
  so the client stays a plain synchronous library.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "tracker_mcp" / "core"

CLIENT_MODULES = {
    "connection.py",
    "models.py",
    "payloads.py",
    "project_client.py",
    "queries.py",
}

CORE_FORBIDDEN = (
    "fastapi",
    "starlette",
    "uvicorn",
    "mcp.server",
    "fastmcp",
    "tracker_mcp.transports",
)
CLIENT_FORBIDDEN = CORE_FORBIDDEN + ("mcp", "anyio", "tracker_mcp.core.tools")


def is_forbidden(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".") for prefix in prefixes
    )


def imported_modules(tree: ast.AST) -> list[str]:
    found: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            found.append(node.module)
    return found


def scan_file(path: Path) -> list[str]:
    prefixes = (
        CLIENT_FORBIDDEN
        if path.parent == CORE_DIR and path.name in CLIENT_MODULES
        else CORE_FORBIDDEN
    )
    tree = ast.parse(path.read_text())
    return [
        f"{path}: forbidden import '{mod}'"
        for mod in imported_modules(tree)
        if is_forbidden(mod, prefixes)
    ]


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
