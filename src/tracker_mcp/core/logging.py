import json
import logging
import sys
from typing import Any

# Extras emitted by observability.op_call; anything else on a record is dropped
OP_CALL_FIELDS = ("method", "endpoint", "status", "duration_ms", "error_type")


def _logfmt_value(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val)
    s = str(val)
    if any(c in s for c in ' ="'):
        return json.dumps(s, ensure_ascii=False)
    return s


class LogfmtFormatter(logging.Formatter):
    """level, logger and event first, then whichever op_call fields are set."""

    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage()),
        ]
        pairs.extend(
            (key, getattr(record, key))
            for key in OP_CALL_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return " ".join(f"{key}={_logfmt_value(val)}" for key, val in pairs)


def setup_logging(level: str = "INFO") -> None:
    """Route all logging to stderr as logfmt; stdout carries the MCP stdio stream."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # op_call already covers each request
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "OP_CALL_FIELDS"]
