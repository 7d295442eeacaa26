"""
poker_bot - LLM Poker Table Bot
===============================

Connects to a poker game server over a WebSocket, logs in, joins one
table and plays it by asking a chat-completion model for each action.
Table chat from other players gets a short reply when the model has one.

Quick Start (no model needed):
    from poker_bot import BotRunner
    runner = BotRunner(config={**config, "demo_mode": True})
    runner.run()

Against a chat-completion server:
    from poker_bot import BotRunner
    config = {
        "server_address": "poker.example.com:8443",
        "username": "bot", "password": "secret",
        "oracle_address": "http://localhost:1337",
        "model": "llama3.2-3b-instruct",
    }
    result = BotRunner(config).run()

Custom oracle:
    from poker_bot import BaseOracleClient, BotRunner
    class MyOracle(BaseOracleClient): ...  # Implement complete()
    BotRunner(config, oracle=MyOracle()).run()
"""

from .runner import BotRunner
from ._oracle import (
    BaseOracleClient,
    ChatCompletionOracle,
    MockOracleClient,
    DemoOracle,
    ActionDecision,
    PokerAction,
)
from ._session import GameVariant, HandState, SessionResult, SessionState, Table
from .errors import (
    PokerBotError,
    AuthenticationError,
    InvalidOracleResponseError,
    SessionInvariantError,
)

__all__ = [
    # Main classes
    "BotRunner",
    # Oracle clients
    "BaseOracleClient",
    "ChatCompletionOracle",
    "MockOracleClient",
    "DemoOracle",
    # Decisions and state
    "ActionDecision",
    "PokerAction",
    "GameVariant",
    "HandState",
    "SessionResult",
    "SessionState",
    "Table",
    # Errors
    "PokerBotError",
    "AuthenticationError",
    "InvalidOracleResponseError",
    "SessionInvariantError",
]
__version__ = "1.0.0"
