# Area: Oracle Tests
"""Tests for ActionDecisionClient and action parsing."""

import pytest

from poker_bot.errors import InvalidOracleResponseError
from poker_bot._oracle.action_client import ActionDecisionClient, parse_action_content
from poker_bot._oracle.client import BaseOracleClient, MockOracleClient
from poker_bot._oracle.models import PokerAction
from poker_bot._session.action_sender import ActionSender
from poker_bot._session.models import HandState


HAND = HandState(
    player_cards=("AS", "KD"),
    middle_cards=("2H", "7S", "9D"),
    current_status="FLOP",
    highest_total_bet=40,
)


class RaisingOracle(BaseOracleClient):
    """Oracle whose requests raise."""

    def is_available(self):
        return True

    async def complete(self, system, user):
        raise RuntimeError("connection reset")


def send_parsed(content):
    sent = []
    ActionSender(sent.append).send_decision(3, parse_action_content(content))
    return sent


class TestParseActionContent:
    """Tests for parse_action_content."""

    def test_valid_raise(self):
        """Test a plain JSON decision."""
        decision = parse_action_content('{"action": "RAISE", "amount": 50, "reason": "strong"}')
        assert decision.action == PokerAction.RAISE
        assert decision.amount == 50
        assert decision.reason == "strong"

    def test_lowercase_action_is_accepted(self):
        """Test that the action is case-insensitive."""
        assert parse_action_content('{"action": "call", "reason": "r"}').action == PokerAction.CALL

    def test_json_inside_prose(self):
        """Test that a JSON object wrapped in text is extracted."""
        content = 'Sure! {"action": "CHECK", "reason": "free card"} Good luck.'
        assert parse_action_content(content).action == PokerAction.CHECK

    @pytest.mark.parametrize("content", [
        "",
        "   ",
        "I fold",
        "[1, 2]",
        '{"action": "ALL_IN", "reason": "yolo"}',
        '{"action": "CHECK"}',
        '{"action": "CHECK", "reason": ""}',
        '{"reason": "no action"}',
    ])
    def test_invalid_content_raises(self, content):
        """Test that unusable content raises InvalidOracleResponseError."""
        with pytest.raises(InvalidOracleResponseError):
            parse_action_content(content)

    def test_unusable_amount_is_ignored_for_call(self):
        """Test that a non-numeric amount does not reject a CALL."""
        decision = parse_action_content('{"action": "CALL", "amount": "N/A", "reason": "pot odds"}')
        assert decision.action == PokerAction.CALL
        assert decision.amount is None
        assert send_parsed('{"action": "CALL", "amount": "N/A", "reason": "x"}') == [
            {"key": "setCheck", "data": {"tableId": 3}}
        ]

    def test_numeric_string_amount(self):
        """Test that an amount given as a numeric string is used."""
        assert send_parsed('{"action": "RAISE", "amount": "50", "reason": "x"}') == [
            {"key": "setRaise", "data": {"tableId": 3, "amount": 50.0}}
        ]

    @pytest.mark.parametrize("amount", ["true", "false", "null", "[50]", '"lots"'])
    def test_raise_without_numeric_amount_folds(self, amount):
        """Test that a RAISE whose amount is not a number is sent as FOLD."""
        content = '{"action": "RAISE", "amount": ' + amount + ', "reason": "x"}'
        assert parse_action_content(content).amount is None
        assert send_parsed(content) == [{"key": "setFold", "data": {"tableId": 3}}]

    def test_error_lists_validation_problems(self):
        """Test that validation errors are carried on the exception."""
        with pytest.raises(InvalidOracleResponseError) as exc_info:
            parse_action_content('{"action": "CHECK"}')
        assert any("reason" in err for err in exc_info.value.validation_errors)
        assert "ORACLE RESPONSE REJECTED" in exc_info.value.format_error_log()


class TestActionDecisionClient:
    """Tests for ActionDecisionClient.decide."""

    @pytest.mark.asyncio
    async def test_returns_decision_and_sends_hand_in_prompt(self):
        """Test a successful decision and the prompt contents."""
        oracle = MockOracleClient({"What is your action?": '{"action": "RAISE", "amount": 50, "reason": "r"}'})
        client = ActionDecisionClient(oracle, "HOLDEM")

        decision = await client.decide(HAND)

        assert decision.action == PokerAction.RAISE
        system = oracle.calls[0]["system"]
        assert "AS, KD" in system
        assert "2H, 7S, 9D" in system
        assert "FLOP" in system
        assert "40" in system
        assert "Texas hold 'em" in system
        assert "Use FOLD only in rare cases" in system
        assert oracle.calls[0]["user"] == "What is your action?"

    @pytest.mark.asyncio
    async def test_unavailable_oracle_returns_none(self):
        """Test that no content means no decision."""
        client = ActionDecisionClient(MockOracleClient({}))
        assert await client.decide(HAND) is None

    @pytest.mark.asyncio
    async def test_invalid_content_returns_none(self):
        """Test that unparseable content means no decision."""
        client = ActionDecisionClient(MockOracleClient({"action": "I think I will raise"}))
        assert await client.decide(HAND) is None

    @pytest.mark.asyncio
    async def test_one_request_per_decision(self):
        """Test that a failed decision is not retried."""
        oracle = MockOracleClient({"action": "garbage"})
        await ActionDecisionClient(oracle).decide(HAND)
        assert len(oracle.calls) == 1

    @pytest.mark.asyncio
    async def test_raising_oracle_returns_none(self):
        """Test that an exception from the oracle means no decision."""
        assert await ActionDecisionClient(RaisingOracle()).decide(HAND) is None
