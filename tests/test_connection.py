# Area: Shared Tests
"""Tests for ConnectionManager with a fake WebSocket."""

import asyncio
import json

import pytest
from websockets.exceptions import ConnectionClosedError

from poker_bot._shared.connection import ConnectionManager, normalize_url


class FakeWebSocket:
    """Minimal stand-in for a websockets client connection."""

    def __init__(self, frames, error=None, close_code=1000, close_reason="bye"):
        self._frames = list(frames)
        self._error = error
        self._final_code = close_code
        self._final_reason = close_reason
        self.sent = []
        self.close_code = None
        self.close_reason = None
        self.close_called = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for frame in self._frames:
            await asyncio.sleep(0)
            yield frame
        self.close_code = self._final_code
        self.close_reason = self._final_reason
        if self._error is not None:
            raise self._error

    async def send(self, data):
        self.sent.append(json.loads(data))

    async def close(self):
        self.close_called = True


def make_connector(ws, seen=None):
    async def connector(url, **kwargs):
        if seen is not None:
            seen.append(url)
        return ws
    return connector


async def drain(queue):
    items = []
    while True:
        item = await queue.get()
        items.append(item)
        if item is None:
            return items


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_bare_address_gets_wss(self):
        """Test that a host:port gets the wss scheme."""
        assert normalize_url("poker.example.com:8443") == "wss://poker.example.com:8443"

    def test_existing_scheme_is_kept(self):
        """Test that ws:// and wss:// addresses are unchanged."""
        assert normalize_url("ws://localhost:3000") == "ws://localhost:3000"
        assert normalize_url(" wss://host/path ") == "wss://host/path"


class TestConnectionManager:
    """Tests for reading, writing and closing."""

    @pytest.mark.asyncio
    async def test_frames_reach_inbound_queue_then_sentinel(self):
        """Test that decoded frames are queued and close puts None."""
        ws = FakeWebSocket(['{"key":"connected","data":{"playerId":7}}', "garbage"])
        seen = []
        connection = ConnectionManager("host:1", connector=make_connector(ws, seen))

        assert await connection.open() is True
        await connection.serve()

        assert seen == ["wss://host:1"]
        assert await drain(connection.inbound) == [
            {"key": "connected", "data": {"playerId": 7}},
            None,
        ]
        assert connection.closed is True
        assert connection.close_code == 1000
        assert connection.close_reason == "bye"

    @pytest.mark.asyncio
    async def test_keepalive_probe_is_answered_not_queued(self):
        """Test that ping is answered with pong and never dispatched."""
        ws = FakeWebSocket(['{"key":"ping"}', '{"key":"login","data":{"success":true}}'])
        connection = ConnectionManager("host:1", connector=make_connector(ws))

        await connection.open()
        await connection.serve()

        assert ws.sent == [{"key": "pong", "data": {}}]
        items = await drain(connection.inbound)
        assert [item["key"] for item in items if item] == ["login"]

    @pytest.mark.asyncio
    async def test_custom_keepalive_keys(self):
        """Test configurable probe and ack keys."""
        ws = FakeWebSocket(['{"key":"heartbeat","data":{}}'])
        connection = ConnectionManager(
            "host:1",
            keepalive_probe_key="heartbeat",
            keepalive_ack_key="heartbeatAck",
            connector=make_connector(ws),
        )

        await connection.open()
        await connection.serve()

        assert ws.sent == [{"key": "heartbeatAck", "data": {}}]

    @pytest.mark.asyncio
    async def test_queued_frames_are_written_in_order(self):
        """Test that frames sent before serve() are written in order."""
        ws = FakeWebSocket([])
        connection = ConnectionManager("host:1", connector=make_connector(ws))

        await connection.open()
        connection.send({"key": "getTables", "data": {}})
        connection.send({"key": "login", "data": {"username": "u", "password": "p"}})
        await connection.serve()

        assert [f["key"] for f in ws.sent] == ["getTables", "login"]

    @pytest.mark.asyncio
    async def test_send_after_close_is_dropped(self):
        """Test that nothing is queued once the channel closed."""
        ws = FakeWebSocket([])
        connection = ConnectionManager("host:1", connector=make_connector(ws))

        await connection.open()
        await connection.serve()
        connection.send({"key": "setFold", "data": {"tableId": 1}})

        assert ws.sent == []

    @pytest.mark.asyncio
    async def test_abnormal_close_still_ends_cleanly(self):
        """Test that a lost connection still delivers the sentinel."""
        ws = FakeWebSocket(['{"key":"connected","data":{}}'], error=ConnectionClosedError(None, None), close_code=1006)
        connection = ConnectionManager("host:1", connector=make_connector(ws))

        await connection.open()
        await connection.serve()

        items = await drain(connection.inbound)
        assert items[-1] is None
        assert connection.close_code == 1006

    @pytest.mark.asyncio
    async def test_open_failure_returns_false(self):
        """Test that a refused connection is reported, not raised."""
        async def refusing(url, **kwargs):
            raise OSError("connection refused")

        connection = ConnectionManager("host:1", connector=refusing)

        assert await connection.open() is False
        assert connection.closed is True

    @pytest.mark.asyncio
    async def test_close_closes_socket(self):
        """Test that close() closes the socket and blocks later sends."""
        ws = FakeWebSocket([])
        connection = ConnectionManager("host:1", connector=make_connector(ws))
        await connection.open()

        await connection.close()

        assert ws.close_called is True
        assert connection.closed is True
