"""Tests for logging configuration."""

import logging

from locals_client.app_logging import configure_logging


def test_configure_logging_adds_one_handler() -> None:
    logger = logging.getLogger("locals_client")
    logger.handlers.clear()

    configure_logging()
    configure_logging(logging.DEBUG)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_configure_logging_accepts_level_names() -> None:
    configure_logging("warning")
    assert logging.getLogger("locals_client").level == logging.WARNING

    configure_logging("not-a-level")
    assert logging.getLogger("locals_client").level == logging.INFO


def test_http_library_request_logs_are_quieted() -> None:
    configure_logging(logging.DEBUG)

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
