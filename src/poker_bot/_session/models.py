# Area: Session
"""
poker_bot._session.models - Table and hand snapshots
====================================================

Table descriptors are parsed from the server listing with pydantic.
Hand snapshots are frozen dataclasses: every inbound event builds a new
snapshot instead of editing the old one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger("poker_bot.session.models")


class Table(BaseModel):
    """Immutable table descriptor as announced by the server."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    table_id: Union[int, str] = Field(alias="tableId")
    table_name: str = Field(default="", alias="tableName")
    game: str
    min_bet: float = Field(default=0, alias="minBet")
    player_count: int = Field(default=0, alias="playerCount")
    max_seats: int = Field(alias="maxSeats")
    password_protected: bool = Field(default=False, alias="passwordProtected")

    @property
    def has_open_seat(self) -> bool:
        return self.player_count < self.max_seats


def parse_tables(raw_tables: Any) -> List[Table]:
    """
    Parse a raw table listing, keeping listing order.

    Entries that fail validation are logged and skipped.

    Args:
        raw_tables: The ``tables`` value of a getTables message

    Returns:
        Parsed tables in the order they were listed
    """
    if not isinstance(raw_tables, list):
        logger.warning(f"Table listing is not a list: {type(raw_tables).__name__}")
        return []

    tables: List[Table] = []
    for index, raw in enumerate(raw_tables):
        try:
            tables.append(Table.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping malformed table entry #{index}: {e.error_count()} errors")
    return tables


def format_card(card: Any) -> str:
    """Render a card as text for prompts and logs."""
    if isinstance(card, dict):
        value = card.get("value", "")
        suit = card.get("suit", "")
        return f"{value}{suit}" if (value or suit) else str(card)
    return str(card)


def normalize_cards(cards: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    """Turn a raw card list into a tuple of card strings."""
    if not cards:
        return ()
    return tuple(format_card(card) for card in cards)


@dataclass(frozen=True)
class HandState:
    """Snapshot of what the bot knows about the current hand."""

    player_cards: Tuple[str, ...] = ()
    middle_cards: Tuple[str, ...] = ()
    current_status: str = ""
    current_turn_text: str = ""
    highest_total_bet: float = 0

    def with_hole_cards(self, cards: Tuple[str, ...]) -> "HandState":
        return replace(self, player_cards=cards)

    def with_status(
        self,
        middle_cards: Tuple[str, ...],
        current_status: str,
        current_turn_text: str,
        highest_total_bet: float,
    ) -> "HandState":
        return replace(
            self,
            middle_cards=middle_cards,
            current_status=current_status,
            current_turn_text=current_turn_text,
            highest_total_bet=highest_total_bet,
        )


def highest_total_bet(players_data: Any) -> float:
    """Maximum ``totalBet`` over all seated players, 0 if nobody bet."""
    if not isinstance(players_data, list):
        return 0
    bets = []
    for player in players_data:
        if not isinstance(player, dict):
            continue
        bet = player.get("totalBet")
        if isinstance(bet, (int, float)) and not isinstance(bet, bool):
            bets.append(bet)
    return max(bets, default=0)


@dataclass(frozen=True)
class ChatMessage:
    """A public chat line received at the table."""

    sender_name: str
    text: str
