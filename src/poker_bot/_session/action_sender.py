# Area: Session
"""
poker_bot._session.action_sender - Outbound command builder
===========================================================

Serializes outbound commands and hands them to an emit callable (the
connection's outbound queue). Sending is fire-and-forget: nothing here
waits for an acknowledgement.
"""

import logging
import math
from typing import Any, Callable, Dict, Optional

from .._shared.protocol import (
    KEY_CHAT_MESSAGE,
    KEY_GET_TABLES,
    KEY_LOGIN,
    KEY_SELECT_TABLE,
    KEY_SET_CHECK,
    KEY_SET_FOLD,
    KEY_SET_RAISE,
    KEY_USER_PARAMS,
    build_frame,
)
from .._oracle.models import ActionDecision, PokerAction

logger = logging.getLogger("poker_bot.session.action_sender")

Emit = Callable[[Dict[str, Any]], None]


def usable_amount(amount: Any) -> bool:
    """True for a finite, positive number that is not a bool."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount) and amount > 0


class ActionSender:
    """
    Builds command frames and emits them.

    Usage:
        sender = ActionSender(emit=connection.send)
        sender.send_decision(table_id, decision)
    """

    def __init__(self, emit: Emit):
        """
        Args:
            emit: Callable receiving each outbound frame dict
        """
        self._emit = emit

    # -- lobby commands ------------------------------------------------

    def request_tables(self) -> Dict[str, Any]:
        return self._send(build_frame(KEY_GET_TABLES))

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._send(build_frame(KEY_LOGIN, {"username": username, "password": password}))

    def confirm_params(self, token: str) -> Dict[str, Any]:
        return self._send(build_frame(KEY_USER_PARAMS, {"token": token}))

    def select_table(self, table_id: Any, password: Optional[str] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {"tableId": table_id}
        if password:
            data["password"] = password
        return self._send(build_frame(KEY_SELECT_TABLE, data))

    def send_chat(self, message: str) -> Dict[str, Any]:
        return self._send(build_frame(KEY_CHAT_MESSAGE, {"message": message}))

    # -- table actions -------------------------------------------------

    def fold(self, table_id: Any) -> Dict[str, Any]:
        return self._send(build_frame(KEY_SET_FOLD, {"tableId": table_id}))

    def check(self, table_id: Any) -> Dict[str, Any]:
        return self._send(build_frame(KEY_SET_CHECK, {"tableId": table_id}))

    def raise_bet(self, table_id: Any, amount: float) -> Dict[str, Any]:
        return self._send(build_frame(KEY_SET_RAISE, {"tableId": table_id, "amount": amount}))

    def send_decision(self, table_id: Any, decision: Optional[ActionDecision]) -> Dict[str, Any]:
        """
        Translate an oracle decision into exactly one table command.

        No decision means FOLD. CALL is sent as CHECK. A RAISE without a
        usable amount is replaced by FOLD.

        Args:
            table_id: Table captured when the decision was requested
            decision: Validated decision, or None

        Returns:
            The frame that was emitted
        """
        if decision is None:
            logger.info(f"No decision for table {table_id}, folding")
            return self.fold(table_id)

        if decision.action == PokerAction.RAISE:
            if usable_amount(decision.amount):
                return self.raise_bet(table_id, decision.amount)
            logger.warning(
                f"RAISE without usable amount ({decision.amount!r}) for table {table_id}, folding"
            )
            return self.fold(table_id)

        if decision.action in (PokerAction.CHECK, PokerAction.CALL):
            return self.check(table_id)

        return self.fold(table_id)

    def _send(self, frame: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"Emitting {frame['key']}")
        self._emit(frame)
        return frame
