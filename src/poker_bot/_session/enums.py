# Area: Session
"""
poker_bot._session.enums - Session State Machine Enums
======================================================

Defines the states and events for the session state machine, the
supported game variants and the result a finished session reports.
"""

from enum import Enum


class SessionState(Enum):
    """
    States of the session state machine.

    State transitions:
    DISCONNECTED -> CONNECTED (on IDENTITY_ASSIGNED)
    CONNECTED -> AUTHENTICATED (on LOGIN_ACCEPTED)
    AUTHENTICATED -> PARAMS_CONFIRMED (on PARAMS_CONFIRMED)
    PARAMS_CONFIRMED -> TABLE_SEARCHING (on TABLE_SEARCH_STARTED)
    TABLE_SEARCHING -> TABLE_SELECTED (on TABLE_SELECTED)
    TABLE_SELECTED -> PLAYING (on HAND_DEALT)
    Any state -> TERMINATED (on terminate())
    """
    DISCONNECTED = "DISCONNECTED"
    CONNECTED = "CONNECTED"
    AUTHENTICATED = "AUTHENTICATED"
    PARAMS_CONFIRMED = "PARAMS_CONFIRMED"
    TABLE_SEARCHING = "TABLE_SEARCHING"
    TABLE_SELECTED = "TABLE_SELECTED"
    PLAYING = "PLAYING"
    TERMINATED = "TERMINATED"


class SessionEvent(Enum):
    """
    Events that trigger state transitions.

    Events are triggered by:
    - IDENTITY_ASSIGNED: connected received
    - LOGIN_ACCEPTED: login response with success and a token
    - PARAMS_CONFIRMED: userParams response with success
    - TABLE_SEARCH_STARTED: implicit, right after PARAMS_CONFIRMED
    - TABLE_SELECTED: getTables produced a joinable table
    - HAND_DEALT: first holeCards or statusUpdate at the selected table
    """
    IDENTITY_ASSIGNED = "IDENTITY_ASSIGNED"
    LOGIN_ACCEPTED = "LOGIN_ACCEPTED"
    PARAMS_CONFIRMED = "PARAMS_CONFIRMED"
    TABLE_SEARCH_STARTED = "TABLE_SEARCH_STARTED"
    TABLE_SELECTED = "TABLE_SELECTED"
    HAND_DEALT = "HAND_DEALT"


class GameVariant(Enum):
    """Game variants a table can run."""
    HOLDEM = "HOLDEM"
    FIVE_CARD_DRAW = "FIVE_CARD_DRAW"


class SessionResult(Enum):
    """How a session ended, returned to the runner."""
    CLOSED = "CLOSED"
    AUTH_FAILED = "AUTH_FAILED"
    CONNECT_FAILED = "CONNECT_FAILED"
    STOPPED = "STOPPED"


# States in which a table has been chosen
TABLE_STATES = frozenset({SessionState.TABLE_SELECTED, SessionState.PLAYING})
