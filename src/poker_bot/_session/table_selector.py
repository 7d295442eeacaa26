# Area: Session
"""
poker_bot._session.table_selector - Table selection
===================================================

Pure selection over a table listing. Ties are broken by listing order
only.
"""

import logging
from typing import Any, Optional, Sequence

from .models import Table

logger = logging.getLogger("poker_bot.session.table_selector")


class TableSelector:
    """
    Picks the table to join from a server listing.

    Usage:
        selector = TableSelector(game="HOLDEM")
        table = selector.select(tables, target_id=config.get("table_id"))
    """

    def __init__(self, game: str):
        """
        Args:
            game: Game variant value the bot plays (e.g. "HOLDEM")
        """
        self.game = game

    def select_by_id(self, tables: Sequence[Table], target_id: Any) -> Optional[Table]:
        """
        First table with the target id, the configured game and an open seat.

        Password protection is not checked; the configured table password
        is sent with the join request.
        """
        target = str(target_id)
        for table in tables:
            if str(table.table_id) != target:
                continue
            if table.game == self.game and table.has_open_seat:
                return table
        return None

    def select_suitable(self, tables: Sequence[Table]) -> Optional[Table]:
        """First open, unprotected table running the configured game."""
        for table in tables:
            if (
                table.game == self.game
                and not table.password_protected
                and table.has_open_seat
            ):
                return table
        return None

    def select(self, tables: Sequence[Table], target_id: Any = None) -> Optional[Table]:
        """
        Select by explicit id when one is configured, else by suitability.

        Args:
            tables: Listing in server order
            target_id: Configured target table id, or None

        Returns:
            The chosen table, or None if nothing qualifies
        """
        if target_id is not None and target_id != "":
            table = self.select_by_id(tables, target_id)
            mode = f"id={target_id}"
        else:
            table = self.select_suitable(tables)
            mode = "suitability"

        if table is None:
            logger.info(f"No table matched ({mode}, game={self.game}, {len(tables)} listed)")
        return table
