"""
Test Suite for the guard Logger.

Tests stream routing, the plain message format, reconfiguration and the
DEBUG environment override.
"""

# Standard Imports
import io
import logging

# Third-Party Imports
import pytest

# Internal Imports
from runalone.core.logger import Logger, LogStyle
from runalone.core.logger.logger import DEBUG_FORMAT, DEFAULT_FORMAT
from runalone.core.paths import LOGGER_NAME


@pytest.mark.unit
def test_logger_default_name():
    assert Logger().name == LOGGER_NAME


@pytest.mark.unit
def test_logger_writes_plain_messages_to_stream():
    stream = io.StringIO()
    log = Logger(name="test_plain", stream=stream).get_logger()

    log.error("A copy of 'job.py' is already running")

    assert stream.getvalue() == "A copy of 'job.py' is already running\n"


@pytest.mark.unit
def test_logger_single_handler_and_no_propagation():
    logger = Logger(name="test_single")

    assert len(logger.logger.handlers) == 1
    assert logger.logger.propagate is False


@pytest.mark.unit
def test_logger_is_not_reconfigured_implicitly():
    """Test a second instantiation keeps the first handler."""
    first = io.StringIO()
    second = io.StringIO()
    Logger(name="test_reuse", stream=first)
    log = Logger(name="test_reuse", stream=second).get_logger()

    log.warning("hello")

    assert first.getvalue() == "hello\n"
    assert second.getvalue() == ""


@pytest.mark.unit
def test_logger_reconfigure_replaces_handler():
    first = io.StringIO()
    second = io.StringIO()
    Logger(name="test_reconf", stream=first)
    log = Logger(name="test_reconf", stream=second, reconfigure=True).get_logger()

    log.warning("hello")

    assert len(log.handlers) == 1
    assert first.getvalue() == ""
    assert second.getvalue() == "hello\n"


@pytest.mark.unit
def test_setup_maps_level_names(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)

    log = Logger.setup(name="test_setup_level", level="warning", stream=io.StringIO())

    assert log.level == logging.WARNING
    assert log.handlers[0].formatter._fmt == DEFAULT_FORMAT


@pytest.mark.unit
def test_setup_debug_env_override(monkeypatch):
    monkeypatch.setenv("DEBUG", "1")

    log = Logger.setup(name="test_setup_debug", level="INFO", stream=io.StringIO())

    assert log.level == logging.DEBUG
    assert log.handlers[0].formatter._fmt == DEBUG_FORMAT


@pytest.mark.unit
def test_log_style_symbols():
    assert LogStyle.ARROW == "»"
    assert LogStyle.INDENT == "  "
