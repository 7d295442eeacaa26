# Area: Session
"""
poker_bot._session.state_machine - Session State Machine
========================================================

Implements the state machine that tracks the bot's progress from the
first server frame to playing at a table. Transitions are driven
exclusively by inbound server messages.
"""

import logging
from typing import Optional

from .enums import SessionState, SessionEvent

logger = logging.getLogger("poker_bot.session.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    SessionState.DISCONNECTED: {
        SessionEvent.IDENTITY_ASSIGNED: SessionState.CONNECTED,
    },
    SessionState.CONNECTED: {
        SessionEvent.LOGIN_ACCEPTED: SessionState.AUTHENTICATED,
    },
    SessionState.AUTHENTICATED: {
        SessionEvent.PARAMS_CONFIRMED: SessionState.PARAMS_CONFIRMED,
    },
    SessionState.PARAMS_CONFIRMED: {
        SessionEvent.TABLE_SEARCH_STARTED: SessionState.TABLE_SEARCHING,
        SessionEvent.TABLE_SELECTED: SessionState.TABLE_SELECTED,
    },
    SessionState.TABLE_SEARCHING: {
        SessionEvent.TABLE_SELECTED: SessionState.TABLE_SELECTED,
    },
    SessionState.TABLE_SELECTED: {
        SessionEvent.HAND_DEALT: SessionState.PLAYING,
    },
    SessionState.PLAYING: {},
    SessionState.TERMINATED: {},
}


class SessionStateMachine:
    """
    State machine for the session lifecycle.

    Attributes:
        current_state: The current state of the state machine
        terminal_reason: Why the session was terminated, if it was
    """

    def __init__(self):
        """Initialize state machine in DISCONNECTED."""
        self.current_state = SessionState.DISCONNECTED
        self.terminal_reason: Optional[str] = None

    def can_transition(self, event: SessionEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        valid_transitions = TRANSITIONS.get(self.current_state, {})
        return event in valid_transitions

    def transition(self, event: SessionEvent) -> SessionState:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            ValueError: If the transition is not valid
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_state.value}"
            )

        next_state = TRANSITIONS[self.current_state][event]
        logger.debug(
            f"{self.current_state.value} --{event.value}--> {next_state.value}"
        )
        self.current_state = next_state
        return next_state

    def is_in(self, *states: SessionState) -> bool:
        """Check whether the machine is in one of the given states."""
        return self.current_state in states

    def terminate(self, reason: str) -> None:
        """
        Move to TERMINATED. No transition leaves this state.

        Args:
            reason: Why the session ends
        """
        if self.current_state != SessionState.TERMINATED:
            logger.warning(
                f"Session terminated from {self.current_state.value}: {reason}"
            )
            self.current_state = SessionState.TERMINATED
            self.terminal_reason = reason

    @property
    def is_terminated(self) -> bool:
        return self.current_state == SessionState.TERMINATED
