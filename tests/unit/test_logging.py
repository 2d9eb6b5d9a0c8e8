"""Unit tests for AppiumLogger handler configuration."""

import logging

from appium_service.services.logging import AppiumLogger, NullLogger


def _close(logger: AppiumLogger) -> None:
    for handler in list(logger._logger.handlers):
        handler.close()
        logger._logger.removeHandler(handler)


def test_file_handler_writes_to_log_file(tmp_path):
    log_file = tmp_path / "logs" / "appium-service.log"
    logger = AppiumLogger(name="appium_service.test_file", level="debug", log_file=log_file)
    try:
        logger.debug("Resolved node at %s", "/usr/bin/node")
    finally:
        _close(logger)

    assert "Resolved node at /usr/bin/node" in log_file.read_text()


def test_level_filters_messages(tmp_path):
    log_file = tmp_path / "appium-service.log"
    logger = AppiumLogger(name="appium_service.test_level", level="warning", log_file=log_file)
    try:
        logger.info("hidden")
        logger.warning("shown")
        logger.set_level("info")
        logger.info("now visible")
    finally:
        _close(logger)

    text = log_file.read_text()
    assert "hidden" not in text
    assert "shown" in text
    assert "now visible" in text


def test_console_only(capsys):
    logger = AppiumLogger(
        name="appium_service.test_console", level="error", console_enabled=True, file_enabled=False
    )
    try:
        logger.error("server failed")
    finally:
        _close(logger)

    assert "server failed" in capsys.readouterr().err


def test_unknown_level_defaults_to_warning(tmp_path):
    logger = AppiumLogger(
        name="appium_service.test_unknown", level="verbose", log_file=tmp_path / "a.log"
    )
    try:
        assert logger._file_handler.level == logging.WARNING
        assert logger._logger.propagate is False
    finally:
        _close(logger)


def test_null_logger_accepts_everything():
    logger = NullLogger()
    logger.debug("x %s", 1)
    logger.info("x")
    logger.warning("x")
    logger.error("x")
    logger.set_level("debug")
