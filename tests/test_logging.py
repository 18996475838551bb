import logging
import sys

import pytest
from tracker_mcp.core.logging import LogfmtFormatter, setup_logging
from tracker_mcp.core.observability import OP_CALL_LOGGER, op_call


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        OP_CALL_LOGGER, logging.INFO, __file__, 1, msg, None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_logfmt_includes_op_call_fields_only():
    line = LogfmtFormatter().format(
        _record(
            "op_call",
            method="PUT",
            status=200,
            duration_ms=12,
            project_id=99,
            secret="x",
        )
    )

    assert line == (
        "level=info logger=tracker_mcp.observability event=op_call "
        "method=PUT status=200 duration_ms=12"
    )


def test_logfmt_quotes_values_with_spaces_and_quotes():
    line = LogfmtFormatter().format(
        _record("Serving tools", endpoint="/a b", error_type='say "hi"')
    )
    assert 'event="Serving tools"' in line
    assert 'endpoint="/a b"' in line
    assert 'error_type="say \\"hi\\""' in line


def test_op_call_logs_status_and_duration(caplog):
    caplog.set_level(logging.INFO, logger=OP_CALL_LOGGER)

    with op_call("GET", "/projects/99/labels") as call:
        call.status = 204

    record = caplog.records[-1]
    assert record.getMessage() == "op_call"
    assert record.method == "GET"
    assert record.endpoint == "/projects/99/labels"
    assert record.status == 204
    assert record.duration_ms >= 0
    assert not hasattr(record, "error_type")


def test_op_call_logs_and_reraises_exceptions(caplog):
    caplog.set_level(logging.INFO, logger=OP_CALL_LOGGER)

    with pytest.raises(ConnectionResetError):
        with op_call("PUT", "/projects/99/stories/1"):
            raise ConnectionResetError("peer went away")

    record = caplog.records[-1]
    assert record.status == "exception"
    assert record.error_type == "ConnectionResetError"


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler.formatter, LogfmtFormatter)
        assert handler.stream is sys.stderr
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
