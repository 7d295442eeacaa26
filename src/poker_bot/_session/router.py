# Area: Session
"""
poker_bot._session.router - Inbound Message Router
==================================================

Routes decoded inbound messages to their handlers by message key.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from .session import Session

logger = logging.getLogger("poker_bot.session.router")


class MessageHandler(Protocol):
    """Protocol for inbound message handlers."""

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        """Handle a message and optionally return an outcome."""
        ...


class MessageRouter:
    """
    Routes server messages to handlers.

    Usage:
        router = MessageRouter()
        router.register_handler("login", login_handler)
        outcome = router.route(message, session)
    """

    def __init__(self):
        """Initialize router with empty handler registry."""
        self._handlers: Dict[str, MessageHandler] = {}

    def register_handler(self, key: str, handler: MessageHandler) -> None:
        """
        Register a handler for a message key.

        Args:
            key: The message key to handle
            handler: The handler instance
        """
        self._handlers[key] = handler
        logger.debug(f"Registered handler for {key}")

    def get_handler(self, key: str) -> Optional[MessageHandler]:
        """
        Get the handler for a message key.

        Returns:
            The handler if registered, None otherwise
        """
        return self._handlers.get(key)

    def route(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        """
        Route a message to its handler.

        Unknown keys are logged and ignored with no state change.

        Args:
            message: Decoded frame (must have 'key')
            session: Session passed through to the handler

        Returns:
            The handler's outcome, or None if no handler found
        """
        key = message.get("key", "")
        handler = self._handlers.get(key)

        if handler is None:
            logger.warning(f"No handler for message key: {key}")
            return None

        logger.debug(f"Routing {key} to handler")
        return handler.handle(message, session)
