from __future__ import annotations

import json
import logging

import structlog

from persistmount.common import observability


def test_configure_logging_emits_json(caplog, monkeypatch):
    monkeypatch.setattr(observability, "_logging_configured", False)
    configure_logging = observability.configure_logging

    configure_logging("persistmount.test", "INFO")
    logger = structlog.get_logger("persistmount.test.logger")

    with caplog.at_level(logging.INFO):
        logger.info("structured-event", foo="bar")

    record = caplog.records[-1]
    payload = json.loads(record.message)
    assert payload["message"] == "structured-event"
    assert payload["foo"] == "bar"
    assert payload["service"] == "persistmount.test"
    assert payload["level"] == "info"


def test_log_level_parsing():
    assert observability._log_level("debug") == logging.DEBUG
    assert observability._log_level(" Warning ") == logging.WARNING
    assert observability._log_level(logging.ERROR) == logging.ERROR
    assert observability._log_level("nonsense") == logging.INFO
    assert observability._log_level(None) == logging.INFO


def test_configure_logging_console_format(caplog, monkeypatch):
    monkeypatch.setattr(observability, "_logging_configured", False)
    observability.configure_logging("persistmount.console", "DEBUG", "console")
    logger = structlog.get_logger("persistmount.test.console")

    with caplog.at_level(logging.DEBUG):
        logger.debug("console-event", foo="bar")

    message = caplog.records[-1].message
    assert "console-event" in message
    assert "foo=bar" in message
    observability.configure_logging("persistmount.test", "INFO")
