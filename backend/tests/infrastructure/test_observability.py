"""Structured Logging — JSON output carries the request correlation extras."""

import json
import logging

from paygate.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("paygate.test", logging.INFO, __file__, 1, "hello", None, None)
    record.__dict__.update(extra)
    return record


def test_json_contains_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "paygate.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_surfaces_extras_when_present():
    payload = json.loads(JSONFormatter().format(
        _record(user_id="u1", request_id="r1", transfer_id="t1", file_id="f1", attempt=2),
    ))
    assert payload["user_id"] == "u1"
    assert payload["request_id"] == "r1"
    assert payload["transfer_id"] == "t1"
    assert payload["file_id"] == "f1"
    assert payload["attempt"] == 2
    assert "error_code" not in payload


def test_setup_logging_is_repeatable():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "paygate"]
    assert len(ours) == 1
    assert logging.root.level == logging.INFO
