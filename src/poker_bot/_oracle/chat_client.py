# Area: Oracle
"""
poker_bot._oracle.chat_client - Chat replies
============================================

Asks the oracle for a reply to a public chat line. The oracle may opt
out by answering with the null sentinel; errors also mean no reply.
"""

from __future__ import annotations

import logging
from typing import Optional

from .._session.models import ChatMessage, HandState
from .client import BaseOracleClient
from .prompts import NULL_SENTINEL, build_chat_prompt

logger = logging.getLogger("poker_bot.oracle.chat")


def is_null_sentinel(content: str) -> bool:
    """True for ``null`` in any case, optionally quoted."""
    text = content.strip().strip("\"'`").strip()
    return text.lower() == NULL_SENTINEL


class ChatDecisionClient:
    """Generates chat replies in the bot's persona."""

    def __init__(self, oracle: BaseOracleClient, game: str = "HOLDEM"):
        self.oracle = oracle
        self.game = game

    async def reply(
        self,
        player_name: str,
        hand: HandState,
        message: ChatMessage,
        include_table_context: bool = True,
    ) -> Optional[str]:
        """
        Produce a reply to ``message`` or None to stay quiet.

        Args:
            player_name: The bot's own name
            hand: Snapshot captured when the chat line arrived
            message: The chat line to answer
            include_table_context: Pass phase and turn text to the oracle

        Returns:
            Reply text forwarded verbatim, or None
        """
        system = build_chat_prompt(
            game=self.game,
            player_name=player_name,
            player_cards=hand.player_cards,
            middle_cards=hand.middle_cards,
            sender_name=message.sender_name,
            current_status=hand.current_status if include_table_context else None,
            current_turn_text=hand.current_turn_text if include_table_context else None,
        )
        try:
            content = await self.oracle.complete(system, message.text)
        except Exception as e:
            logger.error(f"No chat reply: oracle call failed: {e}", exc_info=True)
            return None
        if content is None or not content.strip():
            logger.debug("No chat reply: oracle returned nothing")
            return None
        if is_null_sentinel(content):
            logger.debug(f"Oracle chose not to answer {message.sender_name}")
            return None
        return content
