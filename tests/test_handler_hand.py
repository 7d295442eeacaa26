# Area: Session Tests
"""Tests for holeCards and statusUpdate handlers."""

from poker_bot._session.enums import SessionEvent, SessionState
from poker_bot._session.handler_hand import HoleCardsHandler, StatusUpdateHandler
from poker_bot._session.models import HandState, Table
from poker_bot._session.outcomes import TurnTrigger
from poker_bot._session.session import Session


def seated_session(player_id=7, table_id=12):
    session = Session(player_id=player_id, player_name="Robo")
    for event in (
        SessionEvent.IDENTITY_ASSIGNED,
        SessionEvent.LOGIN_ACCEPTED,
        SessionEvent.PARAMS_CONFIRMED,
        SessionEvent.TABLE_SEARCH_STARTED,
    ):
        session.state_machine.transition(event)
    session.select_table(Table(tableId=table_id, game="HOLDEM", maxSeats=6))
    session.state_machine.transition(SessionEvent.TABLE_SELECTED)
    return session


def status_message(turn_for=None, middle=None, bets=(10, 40)):
    players = [
        {"playerId": 7, "totalBet": bets[0], "isPlayerTurn": turn_for == 7},
        {"playerId": 8, "totalBet": bets[1], "isPlayerTurn": turn_for == 8},
    ]
    return {
        "key": "statusUpdate",
        "data": {
            "middleCards": middle or [],
            "currentStatus": "FLOP",
            "currentTurnText": "Robo to act",
            "playersData": players,
        },
    }


class TestHoleCardsHandler:
    """Tests for HoleCardsHandler."""

    def test_takes_only_own_cards(self):
        """Test that our cards replace player_cards."""
        session = seated_session()
        message = {
            "key": "holeCards",
            "data": {"players": [
                {"playerId": 8, "cards": ["2C", "3C"]},
                {"playerId": 7, "cards": ["AS", "KD"]},
            ]},
        }

        HoleCardsHandler().handle(message, session)

        assert session.hand.player_cards == ("AS", "KD")
        assert session.state == SessionState.PLAYING

    def test_missing_entry_clears_cards(self):
        """Test that a deal without our entry leaves us with no cards."""
        session = seated_session()
        session.hand = HandState(player_cards=("AS", "KD"))

        HoleCardsHandler().handle(
            {"key": "holeCards", "data": {"players": [{"playerId": 8, "cards": ["2C"]}]}},
            session,
        )

        assert session.hand.player_cards == ()

    def test_ignored_without_table(self):
        """Test that cards before table selection are ignored."""
        session = Session(player_id=7)

        HoleCardsHandler().handle(
            {"key": "holeCards", "data": {"players": [{"playerId": 7, "cards": ["AS"]}]}},
            session,
        )

        assert session.hand.player_cards == ()


class TestStatusUpdateHandler:
    """Tests for StatusUpdateHandler."""

    def test_updates_hand_snapshot(self):
        """Test that status fields and highest bet are replaced."""
        session = seated_session()
        session.hand = HandState(player_cards=("AS", "KD"))

        StatusUpdateHandler().handle(status_message(middle=["2H", "7S", "9D"]), session)

        assert session.hand.player_cards == ("AS", "KD")
        assert session.hand.middle_cards == ("2H", "7S", "9D")
        assert session.hand.current_status == "FLOP"
        assert session.hand.current_turn_text == "Robo to act"
        assert session.hand.highest_total_bet == 40

    def test_turn_trigger_on_our_turn(self):
        """Test that our turn yields a TurnTrigger with the snapshot."""
        session = seated_session()

        outcome = StatusUpdateHandler().handle(status_message(turn_for=7), session)

        assert isinstance(outcome, TurnTrigger)
        assert outcome.table_id == 12
        assert outcome.hand is session.hand

    def test_no_trigger_on_other_turn(self):
        """Test that another player's turn yields nothing."""
        session = seated_session()
        assert StatusUpdateHandler().handle(status_message(turn_for=8), session) is None

    def test_truthy_non_bool_turn_flag_is_not_a_turn(self):
        """Test that isPlayerTurn must be exactly true."""
        session = seated_session()
        message = status_message()
        message["data"]["playersData"][0]["isPlayerTurn"] = "yes"

        assert StatusUpdateHandler().handle(message, session) is None

    def test_snapshot_captured_by_trigger_is_stable(self):
        """Test that later updates do not change an earlier snapshot."""
        session = seated_session()
        outcome = StatusUpdateHandler().handle(status_message(turn_for=7, bets=(10, 40)), session)

        StatusUpdateHandler().handle(status_message(bets=(10, 90)), session)

        assert outcome.hand.highest_total_bet == 40
        assert session.hand.highest_total_bet == 90
