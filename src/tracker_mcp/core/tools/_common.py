"""
Shared helpers for tool modules.
"""

from functools import partial
from typing import Any, Callable, Dict, TypeVar

import anyio
from pydantic import BaseModel

R = TypeVar("R")


async def run_blocking(func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """Run a blocking client call on a worker thread."""
    return await anyio.to_thread.run_sync(partial(func, *args, **kwargs))


def dump(model: BaseModel) -> Dict[str, Any]:
    """JSON-ready dict without the fields the API left unset."""
    return model.model_dump(mode="json", exclude_none=True)
