# Area: Shared
"""
poker_bot._runner_config - Runner Configuration
===============================================

Configuration validation, defaults and constants for BotRunner.
"""

import logging
from typing import Any, Dict

from ._session.enums import GameVariant

logger = logging.getLogger("poker_bot")

HANDSHAKE_AWAIT_IDENTITY = "await_identity"
HANDSHAKE_REQUEST_TABLES = "request_tables"
HANDSHAKE_MODES = {HANDSHAKE_AWAIT_IDENTITY, HANDSHAKE_REQUEST_TABLES}

REQUIRED_CONFIG_KEYS = [
    "server_address",
    "username",
    "password",
]

# Only needed when a real oracle is built (not in demo mode)
ORACLE_CONFIG_KEYS = [
    "oracle_address",
    "model",
]

DEFAULTS: Dict[str, Any] = {
    "game": GameVariant.HOLDEM.value,
    "handshake": HANDSHAKE_AWAIT_IDENTITY,
    "table_id": None,
    "table_password": None,
    "oracle_timeout_seconds": 120.0,
    "table_refresh_seconds": 15.0,
    "chat_enabled": True,
    "keepalive_probe_key": "ping",
    "keepalive_ack_key": "pong",
    "log_file": "poker_bot.log",
    "demo_mode": False,
}


def with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` with DEFAULTS filled in for missing keys."""
    merged = dict(DEFAULTS)
    merged.update({k: v for k, v in config.items() if v is not None})
    return merged


def validate_config(config: Dict[str, Any], require_oracle: bool = True) -> None:
    """
    Validate required configuration keys and enumerated values.

    Args:
        config: Configuration dict
        require_oracle: Also require the oracle address and model

    Raises:
        ValueError: If required keys are missing or a value is unknown
    """
    required = REQUIRED_CONFIG_KEYS + (ORACLE_CONFIG_KEYS if require_oracle else [])
    missing = [k for k in required if not config.get(k)]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    handshake = config.get("handshake", HANDSHAKE_AWAIT_IDENTITY)
    if handshake not in HANDSHAKE_MODES:
        raise ValueError(
            f"Unknown handshake mode {handshake!r}, expected one of {sorted(HANDSHAKE_MODES)}"
        )

    game = config.get("game", GameVariant.HOLDEM.value)
    if game not in {v.value for v in GameVariant}:
        raise ValueError(
            f"Unknown game {game!r}, expected one of {[v.value for v in GameVariant]}"
        )

    for key in ("oracle_timeout_seconds", "table_refresh_seconds"):
        value = config.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0):
            raise ValueError(f"Config key {key} must be a non-negative number, got {value!r}")
