# Area: Session
"""
poker_bot._session.dispatcher - Message Dispatcher
==================================================

Single consumer of the inbound queue. Routes each message to its
handler, then acts on the handler's outcome: starting the table search,
scheduling a listing refresh, or launching oracle requests as separate
asyncio tasks.

Single-flight: at most one action request per table is outstanding. A
turn trigger that arrives while one is in flight is dropped (coalesced
into the pending request); the marker is cleared when the request ends.
"""

import asyncio
import logging
from typing import Any, Coroutine, Dict, Optional, Set

from ..errors import AuthenticationError, SessionInvariantError
from .._oracle.action_client import ActionDecisionClient
from .._oracle.chat_client import ChatDecisionClient
from .._shared.logging_config import log_session_error
from .._shared.protocol_logger import get_protocol_logger
from .._shared.protocol import (
    KEY_CHAT_MESSAGE,
    KEY_CONNECTED,
    KEY_GET_TABLES,
    KEY_HOLE_CARDS,
    KEY_LOGIN,
    KEY_STATUS_UPDATE,
    KEY_USER_PARAMS,
)
from .action_sender import ActionSender
from .enums import SessionEvent, SessionResult, SessionState
from .handler_chat import ChatMessageHandler
from .handler_hand import HoleCardsHandler, StatusUpdateHandler
from .handler_identity import ConnectedHandler, LoginHandler, UserParamsHandler
from .handler_tables import GetTablesHandler
from .outcomes import BeginTableSearch, ChatTrigger, TableNotFound, TurnTrigger
from .router import MessageRouter
from .session import Session
from .table_selector import TableSelector

logger = logging.getLogger("poker_bot.session.dispatcher")

DEFAULT_TABLE_REFRESH_SECONDS = 15.0


class MessageDispatcher:
    """
    Drives the Session from inbound messages.

    Usage:
        dispatcher = MessageDispatcher(config, sender, action_client, chat_client)
        result = await dispatcher.run(connection.inbound)
    """

    def __init__(
        self,
        config: Dict[str, Any],
        sender: ActionSender,
        action_client: ActionDecisionClient,
        chat_client: ChatDecisionClient,
        session: Optional[Session] = None,
    ):
        self.config = config
        self.sender = sender
        self.action_client = action_client
        self.chat_client = chat_client
        self.session = session or Session()
        self.selector = TableSelector(config.get("game", "HOLDEM"))
        self.router = MessageRouter()
        self.table_refresh_seconds = float(
            config.get("table_refresh_seconds", DEFAULT_TABLE_REFRESH_SECONDS)
        )
        self.chat_enabled = bool(config.get("chat_enabled", True))
        self.closed = False
        self.result: Optional[SessionResult] = None
        self._tasks: Set[asyncio.Task] = set()
        self._refresh_task: Optional[asyncio.Task] = None
        self._protocol_logger = get_protocol_logger()
        self._register_handlers()

    def _register_handlers(self) -> None:
        reg = self.router.register_handler
        reg(KEY_CONNECTED, ConnectedHandler(self.sender, self.config))
        reg(KEY_LOGIN, LoginHandler(self.sender))
        reg(KEY_USER_PARAMS, UserParamsHandler())
        self._tables_handler = GetTablesHandler(self.selector, self.sender, self.config)
        reg(KEY_GET_TABLES, self._tables_handler)
        reg(KEY_HOLE_CARDS, HoleCardsHandler())
        reg(KEY_STATUS_UPDATE, StatusUpdateHandler())
        reg(KEY_CHAT_MESSAGE, ChatMessageHandler())

    # -- main loop -----------------------------------------------------

    async def run(self, inbound: "asyncio.Queue[Optional[Dict[str, Any]]]") -> SessionResult:
        """
        Consume ``inbound`` until the channel closes or the session ends.

        A ``None`` item on the queue means the channel closed.
        """
        while True:
            message = await inbound.get()
            if message is None:
                logger.info("Channel closed, dispatcher stopping")
                self.close()
                self.result = self.result or SessionResult.CLOSED
                return self.result

            result = self.dispatch(message)
            if result is not None:
                self.close()
                return result

    def dispatch(self, message: Dict[str, Any]) -> Optional[SessionResult]:
        """
        Process one inbound message.

        Must be called from a running event loop (outcomes may start
        tasks).

        Returns:
            A SessionResult when the session has to end, else None
        """
        if self.session.state_machine.is_terminated:
            logger.debug(f"Session terminated, dropping {message.get('key')}")
            return self.result

        key = message.get("key", "")
        self._protocol_logger.log_received(key, self.session.table_id, self.session.state.value)

        try:
            outcome = self.router.route(message, self.session)
        except AuthenticationError as e:
            return self._terminate(e)
        except SessionInvariantError as e:
            logger.error(f"Ignored {key}: {e}")
            return None

        self._apply(outcome)
        return None

    def close(self) -> None:
        """Stop acting on results. In-flight oracle calls are left to finish."""
        self.closed = True
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()

    async def shutdown(self) -> None:
        """Close, then cancel and reap outstanding oracle tasks."""
        self.close()
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            logger.info(f"Cancelled {len(pending)} pending oracle requests")
            await asyncio.gather(*pending, return_exceptions=True)

    async def wait_for_pending(self) -> None:
        """Wait for all outstanding oracle tasks (used on shutdown and in tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # -- outcomes ------------------------------------------------------

    def _apply(self, outcome: Any) -> None:
        if outcome is None:
            return
        if isinstance(outcome, BeginTableSearch):
            self._begin_table_search()
        elif isinstance(outcome, TableNotFound):
            self._schedule_table_refresh()
        elif isinstance(outcome, TurnTrigger):
            self._request_action(outcome)
        elif isinstance(outcome, ChatTrigger):
            self._request_chat(outcome)
        else:
            logger.warning(f"Unknown handler outcome: {outcome!r}")

    def _terminate(self, error: AuthenticationError) -> SessionResult:
        self.session.state_machine.terminate(str(error))
        log_session_error(error)
        self.result = SessionResult.AUTH_FAILED
        return self.result

    def _begin_table_search(self) -> None:
        self.session.state_machine.transition(SessionEvent.TABLE_SEARCH_STARTED)
        pending, self.session.pending_tables = self.session.pending_tables, None
        if pending is not None:
            logger.info(f"Searching cached listing of {len(pending)} tables")
            if self._tables_handler.search(self.session, pending) is None:
                return
            logger.info("Cached listing had no joinable table")
        self.sender.request_tables()

    def _schedule_table_refresh(self) -> None:
        if self.table_refresh_seconds <= 0 or self.closed:
            return
        if self._refresh_task is not None and not self._refresh_task.done():
            return
        logger.info(f"Requesting a fresh listing in {self.table_refresh_seconds:g}s")
        self._refresh_task = self._spawn(self._refresh_tables())

    async def _refresh_tables(self) -> None:
        await asyncio.sleep(self.table_refresh_seconds)
        if not self.closed and self.session.state == SessionState.TABLE_SEARCHING:
            self.sender.request_tables()

    def _request_action(self, trigger: TurnTrigger) -> None:
        if not self.session.try_begin_decision(trigger.table_id):
            logger.info(
                f"Decision already in flight for table {trigger.table_id}, dropping turn trigger"
            )
            return
        self._spawn(self._decide_and_act(trigger))

    async def _decide_and_act(self, trigger: TurnTrigger) -> None:
        try:
            decision = await self.action_client.decide(trigger.hand)

            if self.closed:
                logger.info(f"Discarding decision for table {trigger.table_id}: channel closed")
                return

            self._protocol_logger.log_decision(
                trigger.table_id,
                decision.action.value if decision else "NONE",
                decision.reason if decision else "no decision, folding",
            )
            self.sender.send_decision(trigger.table_id, decision)
        finally:
            self.session.end_decision(trigger.table_id)

    def _request_chat(self, trigger: ChatTrigger) -> None:
        if not self.chat_enabled:
            return
        self._spawn(self._reply_to_chat(trigger))

    async def _reply_to_chat(self, trigger: ChatTrigger) -> None:
        reply = await self.chat_client.reply(trigger.player_name, trigger.hand, trigger.message)
        if reply is None:
            return
        if self.closed:
            logger.info("Discarding chat reply: channel closed")
            return
        self.sender.send_chat(reply)

    # -- task bookkeeping ----------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Background task failed: {error}", exc_info=error)
