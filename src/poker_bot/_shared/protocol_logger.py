# Area: Shared
"""
poker_bot._shared.protocol_logger - Protocol message logging
============================================================

One colored terminal line per frame received or sent, per action
decision and per session error, with the table id and session state as
context. Lines are printed only while protocol mode is enabled.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Any, Optional

from .logging_config import is_protocol_mode_enabled

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Frames
ORANGE = "\033[38;5;208m"  # Decisions
RED = "\033[31m"           # Errors
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# MESSAGE KEY → DISPLAY NAME MAPPINGS
# ══════════════════════════════════════════════════════════════

RECEIVE_DISPLAY_NAMES = {
    "connected": "CONNECTED",
    "login": "LOGIN-RESULT",
    "userParams": "PARAMS-RESULT",
    "getTables": "TABLE-LIST",
    "holeCards": "HOLE-CARDS",
    "statusUpdate": "STATUS-UPDATE",
    "chatMessage": "CHAT",
}

SEND_DISPLAY_NAMES = {
    "login": "LOGIN",
    "userParams": "CONFIRM-PARAMS",
    "getTables": "LIST-TABLES",
    "selectTable": "JOIN-TABLE",
    "setFold": "FOLD",
    "setCheck": "CHECK",
    "setRaise": "RAISE",
    "chatMessage": "CHAT",
}

NO_TABLE = "-"


class ProtocolLogger:
    """Logger for protocol frames and oracle decisions."""

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _now_ms(self) -> str:
        return datetime.now().strftime("%H:%M:%S:%f")[:-3]

    @staticmethod
    def _table(table_id: Optional[Any]) -> str:
        return NO_TABLE if table_id is None else str(table_id)

    def log_received(self, key: str, table_id: Optional[Any] = None, state: str = "") -> None:
        """Log a received frame."""
        if not is_protocol_mode_enabled():
            return
        display = RECEIVE_DISPLAY_NAMES.get(key, key)
        line = (
            f"{GREEN}{self._now()} | TABLE: {self._table(table_id):6} | RECEIVED | "
            f"{display:15} | STATE: {state}{RESET}"
        )
        print(line, file=sys.stdout)

    def log_sent(self, key: str, table_id: Optional[Any] = None) -> None:
        """Log a sent frame."""
        if not is_protocol_mode_enabled():
            return
        display = SEND_DISPLAY_NAMES.get(key, key)
        line = (
            f"{GREEN}{self._now()} | TABLE: {self._table(table_id):6} | SENT     | "
            f"{display:15}{RESET}"
        )
        print(line, file=sys.stdout)

    def log_decision(self, table_id: Any, action: str, reason: str) -> None:
        """Log an action decision before it is sent."""
        if not is_protocol_mode_enabled():
            return
        line = (
            f"{ORANGE}{self._now_ms()} | TABLE: {self._table(table_id):6} | "
            f"DECISION | {action:15} | {reason}{RESET}"
        )
        print(line, file=sys.stdout)

    def log_error(self, description: str) -> None:
        """Log an error."""
        line = f"{RED}[ERROR] {self._now()} | {description}{RESET}"
        print(line, file=sys.stderr)


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger()
    return _protocol_logger
