# Area: Shared
"""
Shared utilities used by the session and oracle layers.

This package contains:
- The WebSocket connection manager
- Logging configuration
- Frame helpers for the game-server protocol
"""

from .connection import ConnectionManager, normalize_url
from .logging_config import (
    setup_logging,
    log_session_error,
    enable_protocol_mode,
    disable_protocol_mode,
    is_protocol_mode_enabled,
)
from .protocol import build_frame, decode_frame, encode_frame
from .protocol_logger import get_protocol_logger, ProtocolLogger

__all__ = [
    "ConnectionManager",
    "normalize_url",
    "setup_logging",
    "log_session_error",
    "enable_protocol_mode",
    "disable_protocol_mode",
    "is_protocol_mode_enabled",
    "build_frame",
    "decode_frame",
    "encode_frame",
    "get_protocol_logger",
    "ProtocolLogger",
]
