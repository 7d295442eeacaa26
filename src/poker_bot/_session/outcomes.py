# Area: Session
"""
poker_bot._session.outcomes - Handler outcomes
==============================================

Handlers mutate the Session and emit lobby commands themselves. Anything
that needs the dispatcher (oracle calls, timers) is returned as one of
these outcome objects. Each outcome carries the table id and the hand
snapshot captured when the message was handled.
"""

from dataclasses import dataclass
from typing import Any

from .models import ChatMessage, HandState


@dataclass(frozen=True)
class BeginTableSearch:
    """Params confirmed: look for a table."""


@dataclass(frozen=True)
class TableNotFound:
    """A listing produced no joinable table."""


@dataclass(frozen=True)
class TurnTrigger:
    """It is the bot's turn at ``table_id``."""
    table_id: Any
    hand: HandState


@dataclass(frozen=True)
class ChatTrigger:
    """Someone else spoke at ``table_id``."""
    table_id: Any
    player_name: str
    hand: HandState
    message: ChatMessage
