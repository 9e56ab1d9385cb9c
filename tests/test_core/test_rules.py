"""
Tests for phase parsing and the betting-round closing rule.
"""

import pytest
from cardshoggoths.core.rules import (
    ActionType, GamePhase, betting_round_closed, parse_action, parse_phase,
)


class TestParsePhase:
    """Tests for the phase wire vocabulary."""

    @pytest.mark.parametrize("phase", list(GamePhase))
    def test_canonical_names(self, phase):
        assert parse_phase(phase.value) is phase

    @pytest.mark.parametrize("alias, phase", [
        ("deal", GamePhase.ANTE),
        ("bet", GamePhase.PRE_DRAW_BETTING),
        ("end", GamePhase.COMPLETE),
    ])
    def test_legacy_aliases(self, alias, phase):
        assert parse_phase(alias) is phase

    def test_unknown_phase(self):
        with pytest.raises(ValueError):
            parse_phase("river")


class TestParseAction:
    """Tests for action parsing."""

    def test_names(self):
        assert parse_action("fold") is ActionType.FOLD
        assert parse_action(" RAISE ") is ActionType.RAISE
        assert parse_action(ActionType.CALL) is ActionType.CALL

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            parse_action("all_in")


class TestBettingRoundClosed:
    """Tests for the closing rule."""

    def test_call_matching_bets_closes(self):
        assert betting_round_closed(GamePhase.PRE_DRAW_BETTING, [20, 20], 1, ActionType.CALL)
        assert betting_round_closed(GamePhase.POST_DRAW_BETTING, [30, 30], 0, ActionType.CALL)

    def test_check_by_second_seat_closes(self):
        assert betting_round_closed(GamePhase.PRE_DRAW_BETTING, [0, 0], 1, ActionType.CHECK)

    def test_check_by_first_seat_passes(self):
        assert not betting_round_closed(GamePhase.PRE_DRAW_BETTING, [0, 0], 0, ActionType.CHECK)

    @pytest.mark.parametrize("action", [ActionType.BET, ActionType.RAISE])
    def test_aggression_never_closes(self, action):
        assert not betting_round_closed(GamePhase.PRE_DRAW_BETTING, [20, 20], 1, action)
        assert not betting_round_closed(GamePhase.POST_DRAW_BETTING, [10, 30], 0, action)

    def test_unequal_bets_stay_open(self):
        assert not betting_round_closed(GamePhase.PRE_DRAW_BETTING, [10, 30], 1, ActionType.CHECK)
        assert not betting_round_closed(GamePhase.PRE_DRAW_BETTING, [10, 30], 0, ActionType.CALL)

    @pytest.mark.parametrize("phase", [GamePhase.ANTE, GamePhase.DISCARD, GamePhase.COMPLETE])
    def test_outside_betting(self, phase):
        assert not betting_round_closed(phase, [0, 0], 1, ActionType.CHECK)
