"""Tests for log mode handling."""

import logging

import pytest

from ohwan_link.logger import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_log_mode():
    yield
    configure_logging("off", "")


def test_log_mode_levels():
    logger = get_logger("ohwan_link.tests.levels")
    configure_logging("debug", "")
    assert logger.level == logging.DEBUG
    assert logging.getLogger("werkzeug").level == logging.DEBUG

    configure_logging("info")
    assert logger.level == logging.INFO

    configure_logging("off")
    assert logger.level > logging.CRITICAL


def test_unknown_mode_falls_back_to_info():
    logger = get_logger("ohwan_link.tests.unknown")
    configure_logging("loud")
    assert logger.level == logging.INFO


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    logger = get_logger("ohwan_link.tests.file")
    configure_logging("info", log_file)
    logger.info("hello from the test")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text(encoding="utf-8")

    configure_logging("info", "")
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
