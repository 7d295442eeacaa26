# Area: Shared
"""
poker_bot._shared.protocol - Frame helpers for the game-server channel
======================================================================

Every frame on the channel is a JSON object ``{"key": ..., "data": {...}}``.
This module builds, encodes and decodes those envelopes.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("poker_bot.protocol")

# Inbound message keys
KEY_CONNECTED = "connected"
KEY_LOGIN = "login"
KEY_USER_PARAMS = "userParams"
KEY_GET_TABLES = "getTables"
KEY_HOLE_CARDS = "holeCards"
KEY_STATUS_UPDATE = "statusUpdate"
KEY_CHAT_MESSAGE = "chatMessage"

# Outbound-only message keys
KEY_SELECT_TABLE = "selectTable"
KEY_SET_FOLD = "setFold"
KEY_SET_CHECK = "setCheck"
KEY_SET_RAISE = "setRaise"

# Application-level keepalive defaults
DEFAULT_KEEPALIVE_PROBE_KEY = "ping"
DEFAULT_KEEPALIVE_ACK_KEY = "pong"


def build_frame(key: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build a frame envelope.

    Args:
        key: Message key (e.g. "setRaise")
        data: Message payload, empty dict when omitted

    Returns:
        Envelope dict
    """
    return {"key": key, "data": data if data is not None else {}}


def encode_frame(frame: Dict[str, Any]) -> str:
    """Serialize a frame for the wire."""
    return json.dumps(frame, separators=(",", ":"))


def decode_frame(raw: Union[str, bytes]) -> Optional[Dict[str, Any]]:
    """Decode a wire frame.

    Returns None (and logs) for anything that is not a JSON object with
    a string ``key``. A missing or non-object ``data`` becomes ``{}``.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Dropped binary frame that is not UTF-8")
            return None

    try:
        message = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Dropped non-JSON frame: {e.msg}")
        return None

    if not isinstance(message, dict):
        logger.warning(f"Dropped frame that is not an object: {type(message).__name__}")
        return None

    key = message.get("key")
    if not isinstance(key, str) or not key:
        logger.warning("Dropped frame without a key")
        return None

    data = message.get("data")
    return {"key": key, "data": data if isinstance(data, dict) else {}}
