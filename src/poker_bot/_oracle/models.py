# Area: Oracle
"""
poker_bot._oracle.models - Oracle wire and decision models
==========================================================

Pydantic models for the chat-completion response and for the structured
action decision parsed out of its content.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class PokerAction(str, Enum):
    """Actions the oracle may choose."""
    RAISE = "RAISE"
    CALL = "CALL"
    CHECK = "CHECK"
    FOLD = "FOLD"


class ActionDecision(BaseModel):
    """Structured action decision returned by the oracle.

    ``amount`` is only meaningful for RAISE; the sender checks it.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    action: PokerAction
    amount: Optional[Union[int, float]] = None
    reason: str

    @field_validator("action", mode="before")
    @classmethod
    def _upper_action(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _lenient_amount(cls, value):
        # Not required for CHECK/CALL/FOLD; the sender folds a RAISE without one
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return None
        return None

    @field_validator("reason")
    @classmethod
    def _non_empty_reason(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason must be a non-empty string")
        return value


# -- chat-completion response ---------------------------------------------

class ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None
    role: Optional[str] = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Optional[int] = None
    finish_reason: Optional[str] = None
    message: ChoiceMessage


class Usage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    completion_tokens: int = 0
    prompt_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    """Subset of the chat-completion response the bot reads."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[Choice] = []
    usage: Optional[Usage] = None

    def first_content(self) -> Optional[str]:
        """Content of the first choice, None if there is none."""
        if not self.choices:
            return None
        return self.choices[0].message.content
