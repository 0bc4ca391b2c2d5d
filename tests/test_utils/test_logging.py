"""
Tests for the package logging helpers.
"""

import io
import logging

import pytest

from eip7702.utils.logging import (
    ROOT_LOGGER_NAME,
    configure_logging,
    disable_logging,
    get_logger,
    set_level,
    short_address,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestGetLogger:
    def test_namespaced(self) -> None:
        assert get_logger("builders").name == "eip7702.builders"
        assert get_logger("eip7702.service").name == "eip7702.service"

    def test_null_handler_installed(self) -> None:
        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers

        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


class TestConfigureLogging:
    def test_writes_formatted_records(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)

        get_logger("test").info("authorization signed")

        line = stream.getvalue().strip()
        assert " - eip7702.test - INFO - authorization signed" in line

    def test_does_not_duplicate_handlers(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        configure_logging(stream=stream)

        get_logger("test").warning("once")

        assert stream.getvalue().count("once") == 1

    def test_set_level(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)
        set_level(logging.ERROR)

        get_logger("test").info("hidden")

        assert stream.getvalue() == ""

    def test_disable(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        disable_logging()

        get_logger("builders").error("hidden")

        assert stream.getvalue() == ""


class TestShortAddress:
    def test_abbreviates(self) -> None:
        assert short_address("0x1234567890123456789012345678901234567890") == "0x1234...7890"

    def test_short_input_unchanged(self) -> None:
        assert short_address("0x12") == "0x12"
