"""Tests for the context-aware log formatter."""
import logging

from strapigen.core.logging import ContextFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("strapigen.core.engine", logging.INFO, __file__, 1, "Running stage", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_fills_missing_context():
    formatter = ContextFormatter("[run_id=%(run_id)s stage=%(stage)s] %(message)s")
    assert formatter.format(_record()) == "[run_id=- stage=-] Running stage"


def test_formatter_uses_extras():
    formatter = ContextFormatter("[run_id=%(run_id)s stage=%(stage)s] %(message)s")
    assert formatter.format(_record(run_id="ab12", stage="FETCHING")) == "[run_id=ab12 stage=FETCHING] Running stage"


def test_configure_logging_sets_level_and_formatter():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging("DEBUG")

        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, ContextFormatter)
        assert logging.getLogger("httpx").level == logging.DEBUG

        configure_logging("INFO")

        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("httpx").setLevel(logging.NOTSET)
