"""
Tests for autonomous decisions.
"""

import random

import pytest
from pokeradvisor.core.game import start_hand, apply, legal_actions
from pokeradvisor.core.rules import ActionType
from pokeradvisor.advisor import decision
from pokeradvisor.advisor.decision import (
    decide_for_autonomous_player, safest_action, ALTERNATIVE_RATE,
)
from pokeradvisor.advisor.recommend import Recommendation


class FixedRandom:
    """Random source whose random() always returns the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestDecide:

    def test_no_legal_actions(self, heads_up):
        state = apply(heads_up, ActionType.FOLD)
        assert decide_for_autonomous_player(state) == (ActionType.FOLD, 0)

    def test_follows_recommendation(self, heads_up, rig_cards):
        rig_cards(heads_up, {"p0": "As Ad"})
        assert decide_for_autonomous_player(heads_up, FixedRandom(0.0)) == (ActionType.RAISE, 15)

    def test_plays_alternative_below_rate(self, heads_up, rig_cards):
        rig_cards(heads_up, {"p0": "7h 2c"})
        choice = decide_for_autonomous_player(heads_up, FixedRandom(ALTERNATIVE_RATE - 0.01))
        assert choice == (ActionType.CALL, 5)

    def test_keeps_recommendation_above_rate(self, heads_up, rig_cards):
        rig_cards(heads_up, {"p0": "7h 2c"})
        choice = decide_for_autonomous_player(heads_up, FixedRandom(0.99))
        assert choice == (ActionType.FOLD, 0)

    def test_illegal_recommendation_falls_back(self, heads_up, monkeypatch):
        def bad_advice(state):
            return Recommendation(
                action=ActionType.BET, amount=50, confidence=0.8,
                reasoning="", expected_value=0.0, risk="high",
            )

        monkeypatch.setattr(decision, "recommend", bad_advice)
        # Betting is not legal facing the big blind
        assert decide_for_autonomous_player(heads_up) == (ActionType.CALL, 5)

    @pytest.mark.parametrize("seed", range(6))
    def test_decisions_are_always_legal(self, seat_players, blinds, seed):
        source = random.Random(seed)
        state = start_hand(seat_players(6), blinds, rng=source)
        while not state.hand_over:
            action, amount = decide_for_autonomous_player(state, source)
            assert action in {a.action_type for a in legal_actions(state)}
            state = apply(state, action, amount)
        assert sum(p.chips for p in state.players) == 6000


class TestSafestAction:

    def test_call_when_facing_bet(self, heads_up):
        assert safest_action(heads_up) == (ActionType.CALL, 5)

    def test_check_when_free(self, heads_up):
        state = apply(heads_up, ActionType.CALL)
        assert safest_action(state) == (ActionType.CHECK, 0)

    def test_fold_when_nothing_else(self, heads_up):
        state = apply(heads_up, ActionType.FOLD)
        assert safest_action(state) == (ActionType.FOLD, 0)
