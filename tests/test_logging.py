"""Tests for the JSON log formatter."""

import json
import logging

from shopassist.api.logging_config import JSONFormatter, RequestContextFilter, request_id_var


def make_record(**extra):
    record = logging.LogRecord("shopassist.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_extra_fields_as_json():
    line = JSONFormatter().format(make_record(session_id="s1", member_count=2))
    data = json.loads(line)

    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["logger"] == "shopassist.test"
    assert data["session_id"] == "s1"
    assert data["member_count"] == 2
    assert data["timestamp"].endswith("Z")
    assert "args" not in data


def test_request_id_filter_uses_context():
    record = make_record()
    token = request_id_var.set("req-1")
    try:
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert json.loads(JSONFormatter().format(record))["request_id"] == "req-1"


def test_request_id_filter_without_request():
    record = make_record()
    RequestContextFilter().filter(record)
    assert not hasattr(record, "request_id")
