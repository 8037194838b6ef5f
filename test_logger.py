#!/usr/bin/env python3
"""
Tests for the logging setup and the per-run warning tracker.
"""

import logging

import pytest

from mebarchive.core.logger import APP_NAME, ErrorTracker, initialize_logging


@pytest.fixture
def clean_loggers():
    yield
    for name in (APP_NAME, "mebarchive"):
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()


def flush(name):
    for handler in logging.getLogger(name).handlers:
        handler.flush()


def test_reinitialising_switches_log_directory(tmp_path, clean_loggers):
    first, second = tmp_path / "first", tmp_path / "second"

    initialize_logging(str(first))
    logger = initialize_logging(str(second))
    logger.info("after switch")
    logging.getLogger("mebarchive.core.controller").info("from the package")
    flush(APP_NAME)

    assert len(logger.handlers) == 3
    assert len(logging.getLogger("mebarchive").handlers) == 3
    assert "after switch" not in (first / f"{APP_NAME}.log").read_text(encoding="utf-8")
    text = (second / f"{APP_NAME}.log").read_text(encoding="utf-8")
    assert "after switch" in text
    assert "from the package" in text


def test_errors_go_to_error_file(tmp_path, clean_loggers):
    logger = initialize_logging(str(tmp_path))
    logger.info("routine")
    logger.error("broken")
    flush(APP_NAME)

    errors = (tmp_path / f"{APP_NAME}_errors.log").read_text(encoding="utf-8")
    assert "broken" in errors
    assert "routine" not in errors


def test_error_tracker_summary():
    tracker = ErrorTracker(logging.getLogger("test.tracker"))
    first = tracker.log_warning("wget failed with status=4", context="fetch", url="https://a.example")
    tracker.log_warning("wget log names no saved file", context="parse")
    tracker.log_warning("no context")

    summary = tracker.get_error_summary()
    assert first.startswith("WARN_")
    assert summary["total_warnings"] == 3
    assert summary["by_context"] == {"fetch": 1, "parse": 1, "unknown": 1}
    assert summary["recent_warnings"][0]["url"] == "https://a.example"
