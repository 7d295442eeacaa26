# Area: Session
"""
poker_bot._session.session - Session data owned by the dispatcher
=================================================================

Holds the bot's identity, authentication token, selected table, the
latest hand snapshot and the per-table in-flight decision markers.
Handlers receive the Session explicitly; nothing here is module-global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..errors import SessionInvariantError
from .enums import SessionState
from .models import HandState, Table
from .state_machine import SessionStateMachine

logger = logging.getLogger("poker_bot.session")

UNSET_PLAYER_ID = -1


@dataclass
class Session:
    """
    Mutable session owned by the MessageDispatcher.

    Attributes:
        player_id: Server-assigned id, UNSET_PLAYER_ID until connected
        player_name: Display name announced by the server
        auth_token: Token from a successful login
        state_machine: Lifecycle state
        selected_table: The one table joined for this session
        hand: Latest immutable hand snapshot
        pending_tables: Listing received before params were confirmed
        decisions_in_flight: Table ids with an outstanding action request
    """

    player_id: Any = UNSET_PLAYER_ID
    player_name: str = ""
    auth_token: Optional[str] = None
    state_machine: SessionStateMachine = field(default_factory=SessionStateMachine)
    selected_table: Optional[Table] = None
    hand: HandState = field(default_factory=HandState)
    pending_tables: Optional[List[Table]] = None
    decisions_in_flight: Set[Any] = field(default_factory=set)

    @property
    def state(self) -> SessionState:
        return self.state_machine.current_state

    @property
    def table_id(self) -> Optional[Any]:
        return self.selected_table.table_id if self.selected_table else None

    def select_table(self, table: Table) -> None:
        """
        Record the joined table and start from an empty hand.

        Raises:
            SessionInvariantError: If a table was already selected
        """
        if self.selected_table is not None:
            raise SessionInvariantError(
                f"Table {self.selected_table.table_id} already selected; "
                f"refusing to switch to {table.table_id}"
            )
        self.selected_table = table
        self.hand = HandState()
        self.pending_tables = None
        logger.info(f"Selected table {table.table_id} ({table.table_name})")

    def is_own_player(self, player_id: Any) -> bool:
        return self.player_id != UNSET_PLAYER_ID and player_id == self.player_id

    def own_entry(self, players: Any) -> Optional[Dict[str, Any]]:
        """Find our entry in a server players list (holeCards, playersData)."""
        if not isinstance(players, list):
            return None
        for player in players:
            if isinstance(player, dict) and self.is_own_player(player.get("playerId")):
                return player
        return None

    def try_begin_decision(self, table_id: Any) -> bool:
        """Set the in-flight marker; False if one is already set."""
        if table_id in self.decisions_in_flight:
            return False
        self.decisions_in_flight.add(table_id)
        return True

    def end_decision(self, table_id: Any) -> None:
        self.decisions_in_flight.discard(table_id)
