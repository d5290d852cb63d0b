import logging

from inline_calc.core.context import request_id_scope
from inline_calc.core.logging import RequestContextFilter, build_logging_config


def make_record() -> logging.LogRecord:
    return logging.LogRecord("inline_calc.test", logging.INFO, __file__, 1, "message", None, None)


def test_filter_stamps_placeholder_outside_request() -> None:
    record = make_record()

    assert RequestContextFilter().filter(record) is True
    assert record.request_id == "-"


def test_filter_stamps_current_request_id() -> None:
    record = make_record()

    with request_id_scope("trace-42"):
        RequestContextFilter().filter(record)

    assert record.request_id == "trace-42"


def test_logging_config_applies_package_level() -> None:
    config = build_logging_config("debug")

    assert config["loggers"]["inline_calc"]["level"] == "DEBUG"
    assert config["handlers"]["default"]["filters"] == ["request_context"]
