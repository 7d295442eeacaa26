# Area: Session
"""
poker_bot._session.handler_base - Base Message Handler
======================================================

Abstract base class for all inbound message handlers.
Provides helpers for reading payloads and logging.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .session import Session
from .enums import SessionState

logger = logging.getLogger("poker_bot.session.handler")


class BaseMessageHandler(ABC):
    """
    Abstract base class for inbound message handlers.

    Handlers receive the decoded frame and the Session, mutate the
    Session, and return an outcome for the dispatcher (or None).
    """

    #: Message key this handler serves, used in logs
    key: str = ""

    @abstractmethod
    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        """
        Handle an inbound message.

        Args:
            message: Decoded frame ``{"key": ..., "data": {...}}``
            session: The session owned by the dispatcher

        Returns:
            Optional outcome for the dispatcher, or None
        """
        pass

    def extract_data(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """
        Extract the data object from a frame.

        Returns:
            The data dict, or empty dict if missing
        """
        data = message.get("data")
        return data if isinstance(data, dict) else {}

    def log_handling(self, session: Session) -> None:
        logger.debug(f"Handling {self.key} in {session.state.value}")

    def ignore(self, session: Session, why: str) -> None:
        """Log a message that arrived when it cannot be applied."""
        logger.warning(f"Ignoring {self.key} in {session.state.value}: {why}")

    def requires(self, session: Session, *states: SessionState) -> bool:
        """True when the session is in one of ``states``; logs otherwise."""
        if session.state_machine.is_in(*states):
            return True
        self.ignore(session, f"expected {', '.join(s.value for s in states)}")
        return False
