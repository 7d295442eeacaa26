# Area: Shared Tests
"""Tests for protocol logger."""

import pytest

from poker_bot._shared.logging_config import disable_protocol_mode, enable_protocol_mode
from poker_bot._shared.protocol_logger import (
    GREEN,
    ORANGE,
    RECEIVE_DISPLAY_NAMES,
    RED,
    SEND_DISPLAY_NAMES,
    ProtocolLogger,
    get_protocol_logger,
)


@pytest.fixture
def protocol_mode():
    enable_protocol_mode()
    yield
    disable_protocol_mode()


class TestDisplayNames:
    """Tests for key -> display name mappings."""

    def test_every_inbound_key_has_a_name(self):
        """Test that handled inbound keys are mapped."""
        for key in ("connected", "login", "userParams", "getTables",
                    "holeCards", "statusUpdate", "chatMessage"):
            assert key in RECEIVE_DISPLAY_NAMES

    def test_table_actions_have_names(self):
        """Test that the table actions are mapped."""
        assert SEND_DISPLAY_NAMES["setRaise"] == "RAISE"
        assert SEND_DISPLAY_NAMES["setCheck"] == "CHECK"
        assert SEND_DISPLAY_NAMES["setFold"] == "FOLD"


class TestProtocolLogger:
    """Tests for ProtocolLogger output."""

    def test_received_line(self, protocol_mode, capsys):
        """Test the RECEIVED line with table and state."""
        ProtocolLogger().log_received("statusUpdate", 12, "PLAYING")
        out = capsys.readouterr().out

        assert GREEN in out
        assert "RECEIVED" in out
        assert "STATUS-UPDATE" in out
        assert "12" in out
        assert "PLAYING" in out

    def test_sent_line_without_table(self, protocol_mode, capsys):
        """Test that a missing table id shows a dash."""
        ProtocolLogger().log_sent("login")
        out = capsys.readouterr().out

        assert "SENT" in out
        assert "TABLE: -" in out
        assert "LOGIN" in out

    def test_decision_line(self, protocol_mode, capsys):
        """Test the DECISION line."""
        ProtocolLogger().log_decision(12, "RAISE", "strong hand")
        out = capsys.readouterr().out

        assert ORANGE in out
        assert "DECISION" in out
        assert "strong hand" in out

    def test_silent_outside_protocol_mode(self, capsys):
        """Test that frame lines are only printed in protocol mode."""
        disable_protocol_mode()
        ProtocolLogger().log_received("login", None, "CONNECTED")
        assert capsys.readouterr().out == ""

    def test_error_goes_to_stderr(self, capsys):
        """Test that errors are always printed to stderr."""
        ProtocolLogger().log_error("boom")
        err = capsys.readouterr().err
        assert RED in err
        assert "boom" in err

    def test_singleton(self):
        """Test that get_protocol_logger returns one instance."""
        assert get_protocol_logger() is get_protocol_logger()
