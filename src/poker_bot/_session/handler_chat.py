# Area: Session
"""
poker_bot._session.handler_chat - Table chat handler
====================================================

Handles chatMessage messages. Lines from other players become a
ChatTrigger; our own lines are ignored.
"""

import logging
from typing import Any, Dict, Optional

from .._shared.protocol import KEY_CHAT_MESSAGE
from .enums import TABLE_STATES
from .handler_base import BaseMessageHandler
from .models import ChatMessage
from .outcomes import ChatTrigger
from .session import Session

logger = logging.getLogger("poker_bot.session.handler.chat")


class ChatMessageHandler(BaseMessageHandler):
    """Turns chat lines from other players into chat triggers."""

    key = KEY_CHAT_MESSAGE

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        if not self.requires(session, *TABLE_STATES):
            return None

        chat = self.extract_data(message).get("chatMessage")
        if not isinstance(chat, dict):
            self.ignore(session, "no chatMessage object")
            return None

        sender_name = str(chat.get("playerName") or "")
        text = str(chat.get("message") or "")
        if sender_name == session.player_name:
            return None
        if not text.strip():
            return None

        logger.info(f"Chat from {sender_name or '?'}: {text}")
        return ChatTrigger(
            table_id=session.table_id,
            player_name=session.player_name,
            hand=session.hand,
            message=ChatMessage(sender_name=sender_name, text=text),
        )
