"""
One structured `op_call` record per outbound tracker request.

TrackerConnection wraps each send in `op_call(...)` and reports the HTTP
status on the yielded handle; timing and failure classification live here.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

OP_CALL_LOGGER = "tracker_mcp.observability"


class OpCall:
    __slots__ = ("method", "endpoint", "status")

    def __init__(self, method: str, endpoint: str):
        self.method = method
        self.endpoint = endpoint
        self.status: Optional[int] = None


@contextmanager
def op_call(
    method: str, endpoint: str, logger: Optional[logging.Logger] = None
) -> Iterator[OpCall]:
    """
    Time one request and log it when the block exits.
    - Normal exit logs the status set on the handle
    - An exception logs status=exception with its type name, then propagates
    """
    call = OpCall(method, endpoint)
    status: Union[int, str, None] = None
    error_type: Optional[str] = None
    start = time.perf_counter()
    try:
        yield call
        status = call.status
    except Exception as exc:
        status, error_type = "exception", type(exc).__name__
        raise
    finally:
        fields = {
            "method": method,
            "endpoint": endpoint,
            "status": status,
            "duration_ms": int((time.perf_counter() - start) * 1000),
        }
        if error_type is not None:
            fields["error_type"] = error_type
        (logger or logging.getLogger(OP_CALL_LOGGER)).info("op_call", extra=fields)


__all__ = ["OpCall", "op_call", "OP_CALL_LOGGER"]
