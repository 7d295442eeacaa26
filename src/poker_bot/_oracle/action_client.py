# Area: Oracle
"""
poker_bot._oracle.action_client - Action decisions
==================================================

Asks the oracle for the next poker action and validates the answer.
Fail-closed: any failure yields None, which the sender turns into FOLD.
There is exactly one oracle request per call and no retry.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from ..errors import InvalidOracleResponseError
from .._session.models import HandState
from .client import BaseOracleClient
from .models import ActionDecision
from .prompts import ACTION_USER_PROMPT, build_action_prompt

logger = logging.getLogger("poker_bot.oracle.action")

PURPOSE = "action_decision"


def _load_json_object(content: str) -> Any:
    """Load JSON, falling back to the outermost {...} span of the text."""
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        start = content.find("{")
        end = content.rfind("}")
        if start != -1 and end > start:
            try:
                return json.loads(content[start : end + 1])
            except json.JSONDecodeError:
                pass
    raise InvalidOracleResponseError(PURPOSE, content, ["content is not JSON"])


def parse_action_content(content: Optional[str]) -> ActionDecision:
    """
    Parse oracle content into an ActionDecision.

    Raises:
        InvalidOracleResponseError: If content is empty, not JSON, or
            misses ``action`` / ``reason``
    """
    if not content or not content.strip():
        raise InvalidOracleResponseError(PURPOSE, content, ["empty content"])

    payload = _load_json_object(content)
    if not isinstance(payload, dict):
        raise InvalidOracleResponseError(
            PURPOSE, content, [f"expected object, got {type(payload).__name__}"]
        )

    try:
        return ActionDecision.model_validate(payload)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidOracleResponseError(PURPOSE, content, errors) from e


class ActionDecisionClient:
    """
    Requests a poker action for a hand snapshot.

    Usage:
        client = ActionDecisionClient(oracle, game="HOLDEM")
        decision = await client.decide(session.hand)   # None means FOLD
    """

    def __init__(self, oracle: BaseOracleClient, game: str = "HOLDEM"):
        self.oracle = oracle
        self.game = game

    async def decide(self, hand: HandState) -> Optional[ActionDecision]:
        """
        Ask the oracle what to do with this hand.

        Args:
            hand: Snapshot captured when the turn was detected

        Returns:
            A validated decision, or None when no decision is available
        """
        system = build_action_prompt(
            player_cards=hand.player_cards,
            middle_cards=hand.middle_cards,
            current_status=hand.current_status,
            highest_total_bet=hand.highest_total_bet,
            game=self.game,
        )
        try:
            content = await self.oracle.complete(system, ACTION_USER_PROMPT)
        except Exception as e:
            logger.error(f"No action decision: oracle call failed: {e}", exc_info=True)
            return None
        if content is None:
            logger.warning("No action decision: oracle unavailable")
            return None

        try:
            decision = parse_action_content(content)
        except InvalidOracleResponseError as e:
            logger.warning(f"No action decision: {e}")
            logger.debug(e.format_error_log())
            return None

        logger.info(
            f"Oracle decided {decision.action.value}"
            + (f" {decision.amount}" if decision.amount is not None else "")
            + f" ({decision.reason})"
        )
        return decision
