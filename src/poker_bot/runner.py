# Area: Runner
"""
poker_bot.runner - Bot Runner
=============================

Builds the connection, session, oracle clients and dispatcher for one
session and runs them on an asyncio event loop until the channel closes,
authentication fails, or the process is interrupted.
"""

from __future__ import annotations
import asyncio
import logging
import signal
from typing import Any, Dict, Optional

from ._oracle import (
    ActionDecisionClient,
    BaseOracleClient,
    ChatCompletionOracle,
    ChatDecisionClient,
    DemoOracle,
)
from ._runner_config import HANDSHAKE_REQUEST_TABLES, validate_config, with_defaults
from ._session.action_sender import ActionSender
from ._session.dispatcher import MessageDispatcher
from ._session.enums import SessionResult
from ._shared import (
    ConnectionManager,
    enable_protocol_mode,
    get_protocol_logger,
    setup_logging,
)

logger = logging.getLogger("poker_bot")


class BotRunner:
    """
    Runs one bot session against the game server.

    Usage:
        runner = BotRunner(config)
        result = runner.run()
    """

    def __init__(
        self,
        config: Dict[str, Any],
        oracle: Optional[BaseOracleClient] = None,
        protocol_mode: bool = True,
    ):
        self.config = with_defaults(config)

        setup_logging(
            log_file_path=self.config.get("log_file"),
            level=self.config.get("log_level", logging.INFO),
        )

        demo = bool(self.config.get("demo_mode"))
        validate_config(self.config, require_oracle=oracle is None and not demo)

        self.oracle = oracle or self._build_oracle(demo)
        game = self.config["game"]
        self.action_client = ActionDecisionClient(self.oracle, game)
        self.chat_client = ChatDecisionClient(self.oracle, game)

        self.connection: Optional[ConnectionManager] = None
        self.dispatcher: Optional[MessageDispatcher] = None
        self._stop_requested = False

        if protocol_mode:
            enable_protocol_mode()
        self._protocol_logger = get_protocol_logger()

    def _build_oracle(self, demo: bool) -> BaseOracleClient:
        if demo:
            logger.info("Demo mode: using DemoOracle (always CHECK, never chats)")
            return DemoOracle()
        return ChatCompletionOracle(
            base_url=self.config["oracle_address"],
            model=self.config["model"],
            timeout=float(self.config["oracle_timeout_seconds"]),
        )

    def run(self) -> SessionResult:
        """Run the session. Blocks until it ends."""
        try:
            return asyncio.run(self.run_async())
        except KeyboardInterrupt:
            logger.info("Interrupted")
            return SessionResult.STOPPED

    async def run_async(self) -> SessionResult:
        """Run the session on the current event loop."""
        self.connection = ConnectionManager(
            self.config["server_address"],
            keepalive_probe_key=self.config["keepalive_probe_key"],
            keepalive_ack_key=self.config["keepalive_ack_key"],
        )
        sender = ActionSender(self.connection.send)
        self.dispatcher = MessageDispatcher(
            self.config, sender, self.action_client, self.chat_client
        )

        self._log_startup()
        try:
            if not await self.connection.open():
                return SessionResult.CONNECT_FAILED

            self._install_signal_handler()
            if self.config["handshake"] == HANDSHAKE_REQUEST_TABLES:
                sender.request_tables()

            serve_task = asyncio.create_task(self.connection.serve())
            try:
                result = await self.dispatcher.run(self.connection.inbound)
            finally:
                await self.dispatcher.shutdown()
                await self.connection.close()
                await serve_task
        finally:
            self._remove_signal_handler()
            await self.oracle.aclose()

        if self._stop_requested and result == SessionResult.CLOSED:
            result = SessionResult.STOPPED
        self._log_shutdown(result)
        return result

    def stop(self) -> None:
        """Ask the session to end; the socket is closed and the loop unwinds."""
        self._stop_requested = True
        if self.connection is not None:
            asyncio.get_running_loop().create_task(self.connection.close())

    def _install_signal_handler(self) -> None:
        try:
            asyncio.get_running_loop().add_signal_handler(signal.SIGINT, self.stop)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no add_signal_handler
            logger.debug("SIGINT handler not installed; relying on KeyboardInterrupt")

    def _remove_signal_handler(self) -> None:
        try:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass

    def _log_startup(self) -> None:
        logger.info("=" * 60)
        logger.info("Poker Bot Starting")
        logger.info("=" * 60)
        logger.info(f"Server: {self.config['server_address']}")
        logger.info(f"User: {self.config['username']}")
        logger.info(f"Game: {self.config['game']}")
        logger.info(f"Handshake: {self.config['handshake']}")
        logger.info(f"Target table: {self.config.get('table_id') or 'any suitable'}")
        logger.info(f"Oracle: {self.oracle.__class__.__name__}")
        logger.info("=" * 60)

    def _log_shutdown(self, result: SessionResult) -> None:
        code = self.connection.close_code if self.connection else None
        logger.info(f"Session ended: {result.value} (close code {code})")
        if result == SessionResult.AUTH_FAILED:
            self._protocol_logger.log_error("Authentication failed, session terminated")
