# Area: Session
"""
Session - Lifecycle, table and hand tracking for one server connection.

This package handles:
- The session state machine
- Table selection
- Inbound message handlers and routing
- Outbound actions and the single-flight dispatcher
"""

from .enums import SessionState, SessionEvent, SessionResult, GameVariant
from .state_machine import SessionStateMachine
from .models import Table, HandState, ChatMessage
from .session import Session
from .table_selector import TableSelector

__all__ = [
    "SessionState",
    "SessionEvent",
    "SessionResult",
    "GameVariant",
    "SessionStateMachine",
    "Table",
    "HandState",
    "ChatMessage",
    "Session",
    "TableSelector",
]
