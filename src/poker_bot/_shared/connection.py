# Area: Shared
"""
poker_bot._shared.connection - WebSocket channel to the game server
===================================================================

Owns the one WebSocket for the session. A reader task decodes frames
onto the inbound queue (answering application keepalive probes on the
spot) and a writer task drains the outbound queue in order. When the
socket closes, ``None`` is put on the inbound queue and later sends are
dropped.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .protocol import (
    DEFAULT_KEEPALIVE_ACK_KEY,
    DEFAULT_KEEPALIVE_PROBE_KEY,
    build_frame,
    decode_frame,
    encode_frame,
)
from .protocol_logger import get_protocol_logger

logger = logging.getLogger("poker_bot.connection")

DEFAULT_SCHEME = "wss://"
DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_PING_INTERVAL = 20.0
DEFAULT_PING_TIMEOUT = 20.0

Connector = Callable[..., Awaitable[Any]]


def normalize_url(address: str) -> str:
    """Prefix a bare host[:port][/path] with ``wss://``."""
    address = address.strip()
    if "://" in address:
        return address
    return f"{DEFAULT_SCHEME}{address}"


class ConnectionManager:
    """
    Manages the WebSocket connection and its inbound/outbound queues.

    Usage:
        connection = ConnectionManager("poker.example.com:8443")
        if await connection.open():
            serve_task = asyncio.create_task(connection.serve())
            message = await connection.inbound.get()
    """

    def __init__(
        self,
        url: str,
        keepalive_probe_key: str = DEFAULT_KEEPALIVE_PROBE_KEY,
        keepalive_ack_key: str = DEFAULT_KEEPALIVE_ACK_KEY,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        connector: Optional[Connector] = None,
    ):
        """
        Args:
            url: Server address; ``wss://`` is added when no scheme is given
            keepalive_probe_key: Application-level probe answered by the reader
            keepalive_ack_key: Key of the keepalive answer
            connect_timeout: Seconds allowed for the opening handshake
            connector: Replacement for ``websockets.connect`` (tests)
        """
        self.url = normalize_url(url)
        self.keepalive_probe_key = keepalive_probe_key
        self.keepalive_ack_key = keepalive_ack_key
        self.connect_timeout = connect_timeout
        self._connector = connector or websockets.connect

        self.inbound: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()
        self._outbound: "asyncio.Queue[Optional[Dict[str, Any]]]" = asyncio.Queue()
        self.websocket: Optional[Any] = None
        self.closed = False
        self.close_code: Optional[int] = None
        self.close_reason: str = ""
        self._protocol_logger = get_protocol_logger()

    async def open(self) -> bool:
        """Establish the WebSocket connection.

        Returns:
            True if connected, False otherwise
        """
        try:
            self.websocket = await asyncio.wait_for(
                self._connector(
                    self.url,
                    ping_interval=DEFAULT_PING_INTERVAL,
                    ping_timeout=DEFAULT_PING_TIMEOUT,
                ),
                timeout=self.connect_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Connection timeout after {self.connect_timeout}s")
            self._protocol_logger.log_error(f"Connection to {self.url} timed out")
            self.closed = True
            return False
        except (OSError, WebSocketException) as e:
            logger.error(f"Connection failed: {e}")
            self._protocol_logger.log_error(f"Connection to {self.url} failed: {e}")
            self.closed = True
            return False

        logger.info(f"Connected to {self.url}")
        return True

    def send(self, frame: Dict[str, Any]) -> None:
        """Queue a frame for the writer. Dropped once the channel is closed."""
        if self.closed:
            logger.debug(f"Channel closed, dropping outbound {frame.get('key')}")
            return
        self._outbound.put_nowait(frame)

    async def serve(self) -> None:
        """Run the reader and writer until the socket closes."""
        writer = asyncio.create_task(self._write_loop())
        try:
            await self._read_loop()
        finally:
            self.closed = True
            self._outbound.put_nowait(None)
            await writer
            await self.inbound.put(None)

    async def close(self) -> None:
        """Close the socket; the reader then ends and ``serve`` returns."""
        self.closed = True
        if self.websocket is not None:
            try:
                await self.websocket.close()
            except WebSocketException as e:
                logger.warning(f"Error closing WebSocket: {e}")

    # -- loops ---------------------------------------------------------

    async def _read_loop(self) -> None:
        try:
            async for raw in self.websocket:
                message = decode_frame(raw)
                if message is None:
                    continue
                if message["key"] == self.keepalive_probe_key:
                    self.send(build_frame(self.keepalive_ack_key))
                    continue
                await self.inbound.put(message)
        except ConnectionClosed as e:
            logger.warning(f"Connection lost: {e}")
        finally:
            self.close_code = getattr(self.websocket, "close_code", None)
            self.close_reason = getattr(self.websocket, "close_reason", None) or ""
            logger.info(
                f"Connection closed (code={self.close_code}, "
                f"reason={self.close_reason or 'none'})"
            )

    async def _write_loop(self) -> None:
        while True:
            frame = await self._outbound.get()
            if frame is None:
                return
            try:
                await self.websocket.send(encode_frame(frame))
            except ConnectionClosed:
                logger.warning(f"Could not send {frame['key']}: connection closed")
                return
            data = frame.get("data") or {}
            self._protocol_logger.log_sent(frame["key"], data.get("tableId"))
