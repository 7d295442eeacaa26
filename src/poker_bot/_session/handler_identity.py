# Area: Session
"""
poker_bot._session.handler_identity - Identity and authentication handlers
==========================================================================

Handles connected, login and userParams messages. Together they drive
the session from DISCONNECTED to PARAMS_CONFIRMED. A rejected login or
rejected params raise AuthenticationError, which is terminal.
"""

import logging
from typing import Any, Dict, Optional

from ..errors import AuthenticationError
from .._shared.protocol import KEY_CONNECTED, KEY_LOGIN, KEY_USER_PARAMS
from .action_sender import ActionSender
from .enums import SessionEvent, SessionState
from .handler_base import BaseMessageHandler
from .outcomes import BeginTableSearch
from .session import Session

logger = logging.getLogger("poker_bot.session.handler.identity")


class ConnectedHandler(BaseMessageHandler):
    """
    Handler for connected messages.

    When the server announces our identity:
    1. Store playerId and playerName
    2. Transition to CONNECTED
    3. Send login with the configured credentials
    """

    key = KEY_CONNECTED

    def __init__(self, sender: ActionSender, config: Dict[str, Any]):
        self.sender = sender
        self.config = config

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, SessionState.DISCONNECTED):
            return None

        data = self.extract_data(message)
        player_id = data.get("playerId")
        if player_id is None:
            self.ignore(session, "no playerId")
            return None

        session.player_id = player_id
        session.player_name = str(data.get("playerName") or "")
        session.state_machine.transition(SessionEvent.IDENTITY_ASSIGNED)
        logger.info(f"Connected as {session.player_name or '?'} (playerId={player_id})")

        self.sender.login(
            self.config.get("username", ""),
            self.config.get("password", ""),
        )
        return None


class LoginHandler(BaseMessageHandler):
    """
    Handler for login responses.

    - success with a token: store it, AUTHENTICATED, send userParams
    - anything else: AuthenticationError (no retry)
    """

    key = KEY_LOGIN

    def __init__(self, sender: ActionSender):
        self.sender = sender

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, SessionState.CONNECTED):
            return None

        data = self.extract_data(message)
        token = data.get("token")

        if data.get("success") is not True:
            raise AuthenticationError("login", _redacted(data), "server rejected credentials")
        if not isinstance(token, str) or not token:
            raise AuthenticationError("login", _redacted(data), "login succeeded without a token")

        session.auth_token = token
        session.state_machine.transition(SessionEvent.LOGIN_ACCEPTED)
        logger.info("Login accepted")

        self.sender.confirm_params(token)
        return None


class UserParamsHandler(BaseMessageHandler):
    """
    Handler for userParams responses.

    - success: confirm username, PARAMS_CONFIRMED, ask for a table search
    - failure: AuthenticationError (no retry)
    """

    key = KEY_USER_PARAMS

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, SessionState.AUTHENTICATED):
            return None

        data = self.extract_data(message)
        if data.get("success") is not True:
            raise AuthenticationError("userParams", _redacted(data), "server rejected user params")

        username = data.get("username")
        if username:
            session.player_name = str(username)
        session.state_machine.transition(SessionEvent.PARAMS_CONFIRMED)
        logger.info(f"User params confirmed for {session.player_name}")
        return BeginTableSearch()


def _redacted(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``data`` safe to print in error blocks."""
    return {k: ("***" if k in ("token", "password") and v else v) for k, v in data.items()}
