# Area: Shared Tests
"""Tests for frame helpers."""

import json

from poker_bot._shared.protocol import build_frame, decode_frame, encode_frame


class TestBuildFrame:
    """Tests for build_frame and encode_frame."""

    def test_default_data_is_empty_object(self):
        """Test that data defaults to {}."""
        assert build_frame("getTables") == {"key": "getTables", "data": {}}

    def test_encode_is_compact_json(self):
        """Test that the encoded frame is compact JSON."""
        encoded = encode_frame(build_frame("setFold", {"tableId": 1}))
        assert encoded == '{"key":"setFold","data":{"tableId":1}}'


class TestDecodeFrame:
    """Tests for decode_frame."""

    def test_decodes_text(self):
        """Test a normal frame."""
        raw = json.dumps({"key": "connected", "data": {"playerId": 1}})
        assert decode_frame(raw) == {"key": "connected", "data": {"playerId": 1}}

    def test_decodes_bytes(self):
        """Test that UTF-8 bytes are accepted."""
        assert decode_frame(b'{"key":"login","data":{}}') == {"key": "login", "data": {}}

    def test_missing_data_becomes_empty(self):
        """Test that a frame without data gets {}."""
        assert decode_frame('{"key":"ping"}') == {"key": "ping", "data": {}}

    def test_rejects_bad_frames(self):
        """Test that unusable frames decode to None."""
        assert decode_frame("not json") is None
        assert decode_frame("[1, 2]") is None
        assert decode_frame('{"data": {}}') is None
        assert decode_frame('{"key": 5}') is None
        assert decode_frame(b"\xff\xfe") is None
