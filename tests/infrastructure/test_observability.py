"""Structured logging — JSON formatter fields and setup_logging handler install."""

import json
import logging
import sys

from heartbeat.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "heartbeat.test", logging.WARNING, __file__, 1, msg, None, exc_info,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_base_fields_present():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "heartbeat.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_cycle_fields_surfaced_when_present():
    out = json.loads(JSONFormatter().format(_record(
        cycle_id="c-1", error_code="BALANCE_RETRIEVAL_ERROR", reason="timeout",
        credit_balance=0, survival_tier="critical",
    )))
    assert out["cycle_id"] == "c-1"
    assert out["error_code"] == "BALANCE_RETRIEVAL_ERROR"
    assert out["reason"] == "timeout"
    assert out["credit_balance"] == 0
    assert out["survival_tier"] == "critical"


def test_unknown_extras_ignored():
    out = json.loads(JSONFormatter().format(_record(password="hunter2")))
    assert "password" not in out


def test_exception_rendered():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())
    out = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in out["exception"]


def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    previous_level = root.level
    handler = setup_logging("debug", "json")
    try:
        assert handler in root.handlers
        assert isinstance(handler.formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)


def test_setup_logging_plain_format():
    root = logging.getLogger()
    previous_level = root.level
    handler = setup_logging("INFO", "text")
    try:
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)


def test_setup_logging_reads_settings_when_unset(monkeypatch):
    monkeypatch.setenv("HEARTBEAT_LOG_LEVEL", "warning")
    monkeypatch.setenv("HEARTBEAT_LOG_FORMAT", "text")
    root = logging.getLogger()
    previous_level = root.level
    handler = setup_logging()
    try:
        assert root.level == logging.WARNING
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)


def test_explicit_arguments_override_settings(monkeypatch):
    monkeypatch.setenv("HEARTBEAT_LOG_FORMAT", "text")
    root = logging.getLogger()
    previous_level = root.level
    handler = setup_logging("ERROR", "json")
    try:
        assert root.level == logging.ERROR
        assert isinstance(handler.formatter, JSONFormatter)
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
