# Area: Shared Tests
"""Tests for logging setup and session error logging."""

import json
import logging

import pytest

from poker_bot.errors import AuthenticationError
from poker_bot._shared.logging_config import (
    JSONFormatter,
    ProtocolFilter,
    TerminalFormatter,
    disable_protocol_mode,
    enable_protocol_mode,
    is_protocol_mode_enabled,
    log_session_error,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    disable_protocol_mode()
    logging.getLogger("poker_bot").handlers.clear()


def make_record(level=logging.INFO, msg="hello", **extra):
    record = logging.LogRecord("poker_bot.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the terminal and JSON formatters."""

    def test_json_formatter(self):
        """Test that JSON lines carry level, logger and extra fields."""
        line = JSONFormatter().format(make_record(stage="login", error_type="AuthenticationError"))
        data = json.loads(line)

        assert data["level"] == "INFO"
        assert data["logger"] == "poker_bot.test"
        assert data["message"] == "hello"
        assert data["stage"] == "login"
        assert data["error_type"] == "AuthenticationError"

    def test_terminal_formatter_colors_level(self):
        """Test that the level name is colored without changing the record."""
        record = make_record(level=logging.WARNING)
        out = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "\033[33m" in out
        assert record.levelname == "WARNING"


class TestProtocolMode:
    """Tests for protocol mode switching."""

    def test_filter_follows_mode(self):
        """Test that the filter blocks records only in protocol mode."""
        record = make_record()
        assert ProtocolFilter().filter(record) is True

        enable_protocol_mode()
        assert is_protocol_mode_enabled() is True
        assert ProtocolFilter().filter(record) is False

        disable_protocol_mode()
        assert is_protocol_mode_enabled() is False


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_installs_terminal_and_file_handlers(self, tmp_path):
        """Test that both handlers are added and propagation is off."""
        log_file = tmp_path / "logs" / "bot.log"
        setup_logging(str(log_file), level=logging.DEBUG)

        pkg_logger = logging.getLogger("poker_bot")
        assert len(pkg_logger.handlers) == 2
        assert pkg_logger.propagate is False
        assert pkg_logger.level == logging.DEBUG

        pkg_logger.info("written")
        for handler in pkg_logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")

    def test_file_logging_can_be_disabled(self):
        """Test that no file handler is added without a path."""
        setup_logging(None)
        assert len(logging.getLogger("poker_bot").handlers) == 1


class TestLogSessionError:
    """Tests for log_session_error."""

    def test_prints_error_block(self, capsys):
        """Test that the structured block goes to stderr."""
        setup_logging(None)
        log_session_error(AuthenticationError("login", {"success": False}))

        assert "AUTHENTICATION FAILED" in capsys.readouterr().err
