"""Tests for logging configuration."""

import io
import logging

import pytest

from playground.log import LogConfig


def test_logger_writes_to_sink() -> None:
    """Test messages at or above the level reach the configured stream."""
    stream = io.StringIO()
    logger = LogConfig(level=logging.INFO, stream=stream).logger("playground.test")
    logger.debug("hidden")
    logger.info("shown %s", "value")
    assert stream.getvalue() == "INFO:playground.test:shown value\n"


def test_logger_color() -> None:
    """Test colored output is rendered with escape codes."""
    stream = io.StringIO()
    config = LogConfig(level=logging.DEBUG, stream=stream, color=True)
    config.logger("playground.color").debug("message")
    output = stream.getvalue()
    assert "\x1b[" in output
    assert "DEBUG" in output
    assert "playground.color" in output
    assert "message" in output


def test_configs_are_independent() -> None:
    """Test two configurations for the same name keep their own level and sink."""
    first = io.StringIO()
    second = io.StringIO()
    debug_logger = LogConfig(level=logging.DEBUG, stream=first).logger(
        "playground.shared"
    )
    quiet_logger = LogConfig(level=logging.WARNING, stream=second).logger(
        "playground.shared"
    )
    assert debug_logger is not quiet_logger

    debug_logger.debug("first message")
    quiet_logger.debug("second message")
    assert first.getvalue() == "DEBUG:playground.shared:first message\n"
    assert second.getvalue() == ""


def test_logger_not_registered() -> None:
    """Test loggers do not replace the ones owned by the logging module."""
    logger = LogConfig().logger("playground.registered")
    assert logging.getLogger("playground.registered") is not logger
    assert LogConfig().logger("playground.registered") is not logger


@pytest.mark.parametrize(
    ("log_level", "env", "expected"),
    [
        (None, None, logging.WARNING),
        (None, "debug", logging.DEBUG),
        ("ERROR", "debug", logging.ERROR),
        ("INFO", None, logging.INFO),
        (None, "bogus", logging.WARNING),
    ],
)
def test_from_args(
    monkeypatch: pytest.MonkeyPatch,
    log_level: str | None,
    env: str | None,
    expected: int,
) -> None:
    """Test the level is taken from flags, then the environment."""
    if env is None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("LOG_LEVEL", env)
    config = LogConfig.from_args(log_level, color=False)
    assert config.level == expected
    assert not config.color
