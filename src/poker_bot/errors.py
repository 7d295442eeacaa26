"""
poker_bot.errors - Custom exception classes
===========================================

Defines the exception hierarchy for session and oracle errors.
Each exception stores full context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class PokerBotError(Exception):
    """Base exception for all poker_bot package errors."""
    pass


class AuthenticationError(PokerBotError):
    """Raised when the server rejects the login or the user params.

    Authentication failures are terminal for the session: the dispatcher
    moves the session to TERMINATED and never retries.
    """

    def __init__(self, stage: str, payload: Dict[str, Any], reason: str = "rejected"):
        self.stage = stage
        self.payload = payload
        self.reason = reason
        super().__init__(f"Authentication failed at '{stage}': {reason}")

    def format_error_log(self) -> str:
        return _format_error_block(
            title="AUTHENTICATION FAILED - SESSION TERMINATED",
            error_type="AUTH_FAILURE",
            source=self.stage,
            input_payload=self.payload,
            output_payload=None,
            validation_errors=[self.reason],
        )


class InvalidOracleResponseError(PokerBotError):
    """Raised when oracle content cannot be turned into a decision."""

    def __init__(
        self,
        purpose: str,
        raw_output: Any,
        validation_errors: List[str],
    ):
        self.purpose = purpose
        self.raw_output = raw_output
        self.validation_errors = validation_errors
        super().__init__(
            f"Oracle response for '{purpose}' failed validation: {validation_errors}"
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            title="ORACLE RESPONSE REJECTED",
            error_type="INVALID_ORACLE_RESPONSE",
            source=self.purpose,
            input_payload=None,
            output_payload={"raw_output": repr(self.raw_output)},
            validation_errors=self.validation_errors,
        )


class SessionInvariantError(PokerBotError):
    """Raised when a handler would break a session invariant."""
    pass


def _format_error_block(
    title: str,
    error_type: str,
    source: str,
    input_payload: Optional[Dict[str, Any]],
    output_payload: Optional[Dict[str, Any]],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for terminal and file logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        f" {title}",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Source:       {source}",
    ]

    if input_payload is not None:
        lines.append("")
        lines.append(" -- SERVER PAYLOAD " + "-" * 45)
        lines.append(_indent_json(input_payload))

    if output_payload is not None:
        lines.append("")
        lines.append(" -- ORACLE OUTPUT " + "-" * 46)
        lines.append(_indent_json(output_payload))

    if validation_errors:
        lines.append("")
        lines.append(" -- ERRORS " + "-" * 53)
        for error in validation_errors:
            lines.append(f" * {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
