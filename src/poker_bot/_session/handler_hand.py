# Area: Session
"""
poker_bot._session.handler_hand - Hand state handlers
=====================================================

Handles holeCards and statusUpdate messages at the selected table.
Each message produces a fresh HandState snapshot. A status update that
marks the bot's turn yields a TurnTrigger carrying that snapshot.
"""

import logging
from typing import Any, Dict, Optional

from .._shared.protocol import KEY_HOLE_CARDS, KEY_STATUS_UPDATE
from .enums import TABLE_STATES, SessionEvent, SessionState
from .handler_base import BaseMessageHandler
from .models import highest_total_bet, normalize_cards
from .outcomes import TurnTrigger
from .session import Session

logger = logging.getLogger("poker_bot.session.handler.hand")


def _mark_playing(session: Session) -> None:
    if session.state == SessionState.TABLE_SELECTED:
        session.state_machine.transition(SessionEvent.HAND_DEALT)


class HoleCardsHandler(BaseMessageHandler):
    """Replaces the bot's own hole cards."""

    key = KEY_HOLE_CARDS

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, *TABLE_STATES):
            return None

        own = session.own_entry(self.extract_data(message).get("players"))
        cards = normalize_cards(own.get("cards") if own else None)
        if own is None:
            logger.debug("holeCards without an entry for us")

        session.hand = session.hand.with_hole_cards(cards)
        _mark_playing(session)
        logger.info(f"Hole cards: {', '.join(cards) or 'none'}")
        return None


class StatusUpdateHandler(BaseMessageHandler):
    """
    Handler for statusUpdate messages.

    1. Replace community cards, phase text and turn text
    2. Recompute the highest total bet over all seated players
    3. If our entry has isPlayerTurn, return a TurnTrigger
    """

    key = KEY_STATUS_UPDATE

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, *TABLE_STATES):
            return None

        data = self.extract_data(message)
        players = data.get("playersData")
        session.hand = session.hand.with_status(
            middle_cards=normalize_cards(data.get("middleCards")),
            current_status=str(data.get("currentStatus") or ""),
            current_turn_text=str(data.get("currentTurnText") or ""),
            highest_total_bet=highest_total_bet(players),
        )
        _mark_playing(session)

        own = session.own_entry(players)
        if own is not None and own.get("isPlayerTurn") is True:
            logger.info(
                f"Our turn at table {session.table_id} "
                f"({session.hand.current_status or 'unknown phase'}, "
                f"highest bet {session.hand.highest_total_bet})"
            )
            return TurnTrigger(table_id=session.table_id, hand=session.hand)
        return None
