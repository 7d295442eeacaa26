# Area: Session
"""
poker_bot._session.handler_tables - Table listing handler
=========================================================

Handles getTables responses. Once params are confirmed the listing is
run through the TableSelector and the chosen table is joined. A
listing that arrives earlier (request_tables handshake) is kept on the
session until the search begins.
"""

import logging
from typing import Any, Dict, List, Optional

from .._shared.protocol import KEY_GET_TABLES
from .action_sender import ActionSender
from .enums import SessionEvent, SessionState
from .handler_base import BaseMessageHandler
from .models import Table, parse_tables
from .outcomes import TableNotFound
from .session import Session
from .table_selector import TableSelector

logger = logging.getLogger("poker_bot.session.handler.tables")

PRE_SEARCH_STATES = (
    SessionState.DISCONNECTED,
    SessionState.CONNECTED,
    SessionState.AUTHENTICATED,
)
SEARCH_STATES = (SessionState.PARAMS_CONFIRMED, SessionState.TABLE_SEARCHING)


class GetTablesHandler(BaseMessageHandler):
    """
    Handler for getTables responses.

    1. Parse the listing (malformed entries are skipped)
    2. Before params confirmation: cache it on the session
    3. While searching: select, join and move to TABLE_SELECTED,
       or report TableNotFound
    """

    key = KEY_GET_TABLES

    def __init__(self, selector: TableSelector, sender: ActionSender, config: Dict[str, Any]):
        self.selector = selector
        self.sender = sender
        self.config = config

    def handle(self, message: Dict[str, Any], session: Session) -> Optional[Any]:
        self.log_handling(session)
        tables = parse_tables(self.extract_data(message).get("tables"))

        if session.state_machine.is_in(*PRE_SEARCH_STATES):
            session.pending_tables = tables
            logger.info(f"Cached listing of {len(tables)} tables until params are confirmed")
            return None

        if not self.requires(session, *SEARCH_STATES):
            return None

        return self.search(session, tables)

    def search(self, session: Session, tables: List[Table]) -> Optional[TableNotFound]:
        """
        Select a table from ``tables`` and join it.

        Returns:
            TableNotFound when nothing qualifies, else None
        """
        table = self.selector.select(tables, self.config.get("table_id"))
        if table is None:
            return TableNotFound()

        session.select_table(table)
        session.state_machine.transition(SessionEvent.TABLE_SELECTED)
        self.sender.select_table(table.table_id, self.config.get("table_password"))
        return None
