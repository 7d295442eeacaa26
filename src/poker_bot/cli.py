# Area: Runner
"""
poker_bot.cli - Command-line interface
======================================

Provides the CLI entry point for running the bot.

Usage:
    python -m poker_bot                           # Config from environment / .env
    python -m poker_bot --config config.json      # Run with config file
    python -m poker_bot --demo                    # Always CHECK, no oracle needed

Demo mode can be enabled via:
    1. CLI flag: --demo
    2. Config key: demo_mode: true
    3. Environment variable: DEMO_MODE=true
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from ._session.enums import SessionResult

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_AUTH_FAILED = 2

TRUE_VALUES = ("true", "1", "yes")


def _as_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


# Environment variable -> (config key, converter)
ENV_MAPPINGS: Dict[str, Any] = {
    "POKER_SERVER_API_ADDRESS": ("server_address", str),
    "POKER_USERNAME": ("username", str),
    "POKER_PASSWORD": ("password", str),
    "POKER_TABLE_ID": ("table_id", str),
    "POKER_TABLE_PASSWORD": ("table_password", str),
    "POKER_GAME": ("game", str.upper),
    "POKER_HANDSHAKE": ("handshake", str.lower),
    "JAN_AI_SERVER_ADDRESS": ("oracle_address", str),
    "LLM_MODEL": ("model", str),
    "ORACLE_TIMEOUT_SECONDS": ("oracle_timeout_seconds", float),
    "TABLE_REFRESH_SECONDS": ("table_refresh_seconds", float),
    "DEMO_MODE": ("demo_mode", _as_bool),
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="LLM Poker Bot - play a table with a chat-completion model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m poker_bot --config config.json
  python -m poker_bot --demo
  DEMO_MODE=true python -m poker_bot
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file (environment variables override it)",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run in demo mode using DemoOracle (always CHECK, never chats)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Path to the JSON log file (default: poker_bot.log)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show standard DEBUG logs instead of the protocol view",
    )

    return parser.parse_args(argv)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Load config from file, then override with environment variables.

    Raises:
        ValueError: If the file is unreadable or an env value does not convert
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ValueError(f"Config file not found: {config_path}")
        try:
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Config file {config_path} is not valid JSON: {e}") from e
        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_path} must hold a JSON object")

    for env_key, (config_key, convert) in ENV_MAPPINGS.items():
        if env_key in os.environ:
            raw = os.environ[env_key]
            try:
                config[config_key] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_key}: {raw!r}") from e

    return config


def is_demo_mode(args: argparse.Namespace, config: Dict[str, Any]) -> bool:
    """Check if demo mode is enabled via CLI or config/environment."""
    return bool(args.demo or config.get("demo_mode"))


def exit_code_for(result: SessionResult) -> int:
    """Map how the session ended to a process exit code."""
    if result == SessionResult.AUTH_FAILED:
        return EXIT_AUTH_FAILED
    return EXIT_OK


def main(argv: Optional[List[str]] = None, runner_factory: Optional[Callable[..., Any]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    config["demo_mode"] = is_demo_mode(args, config)
    if args.log_file:
        config["log_file"] = args.log_file
    if args.verbose:
        config["log_level"] = logging.DEBUG

    # Import runner here to keep --help free of the network stack
    from .runner import BotRunner

    factory = runner_factory or BotRunner
    try:
        runner = factory(config=config, protocol_mode=not args.verbose)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set via config file or environment variables.", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return exit_code_for(runner.run())
