"""
Tests for showdown resolution and pot splitting.
"""

import random

import pytest
from pokeradvisor.core.game import start_hand, apply, find_legal_action, legal_actions
from pokeradvisor.core.hand import HandCategory
from pokeradvisor.core.rules import ActionType, Street


ROYAL_BOARD = "As Ks Qs Js Ts"


def check_or_call(state):
    if find_legal_action(state, ActionType.CHECK) is not None:
        return apply(state, ActionType.CHECK)
    return apply(state, ActionType.CALL)


def to_river(state):
    """Check or call until the river betting round."""
    while state.street != Street.RIVER:
        state = check_or_call(state)
    return state


def finish(state):
    """Check or call until the hand is over."""
    while not state.hand_over:
        state = check_or_call(state)
    return state


def total_chips(state):
    return sum(p.chips for p in state.players)


class TestShowdownWinner:

    def test_best_hand_wins(self, heads_up, rig_cards):
        state = to_river(heads_up)
        rig_cards(state, {"p0": "Ah Ad", "p1": "Kh Kd"}, board="2c 7s 9h Jd 3c")
        state = finish(state)

        assert state.hand_over
        assert state.street == Street.SHOWDOWN
        assert state.winners == ["p0"]
        assert state.payouts == {"p0": 20}
        assert state.players[0].chips == 1010
        assert state.players[1].chips == 990

    def test_kicker_decides(self, heads_up, rig_cards):
        state = to_river(heads_up)
        rig_cards(state, {"p0": "Ah 4d", "p1": "Ad Kc"}, board="Ac 7s 9h Jd 3c")
        state = finish(state)
        assert state.winners == ["p1"]

    def test_evaluations_recorded(self, heads_up, rig_cards):
        state = to_river(heads_up)
        rig_cards(state, {"p0": "Ah Ad", "p1": "7h 7d"}, board="Ac 7s 9h Jd 3c")
        state = finish(state)

        assert state.hand_evaluations["p0"].category == HandCategory.THREE_OF_A_KIND
        assert state.hand_evaluations["p1"].category == HandCategory.THREE_OF_A_KIND
        assert state.winners == ["p0"]

    def test_contenders_revealed(self, three_way):
        state = apply(three_way, ActionType.FOLD)
        state = finish(state)
        assert state.revealed == {"p1", "p2"}
        assert not state.is_revealed(state.players[0])
        assert "p0" not in state.hand_evaluations


class TestSplitPots:

    def test_three_way_split_odd_chip_to_first_seat(self, seat_players, blinds, rng, rig_cards):
        state = start_hand(seat_players(4), blinds, rng=rng)
        # Pre-flop: everyone limps, the big blind checks
        state = apply(state, ActionType.CALL)   # p3
        state = apply(state, ActionType.CALL)   # p0
        state = apply(state, ActionType.CALL)   # p1
        state = apply(state, ActionType.CHECK)  # p2
        assert state.street == Street.FLOP and state.pot == 40

        state = apply(state, ActionType.BET, 20)  # p1
        state = apply(state, ActionType.CALL)     # p2
        state = apply(state, ActionType.CALL)     # p3
        state = apply(state, ActionType.FOLD)     # p0
        assert state.pot == 100

        state = to_river(state)
        rig_cards(
            state,
            {"p0": "8c 9d", "p1": "2c 3d", "p2": "4c 5d", "p3": "6c 7d"},
            board=ROYAL_BOARD,
        )
        state = finish(state)

        assert state.winners == ["p1", "p2", "p3"]
        assert state.payouts == {"p1": 34, "p2": 33, "p3": 33}
        assert total_chips(state) == 4000

    def test_two_way_split_odd_pot(self, three_way, rig_cards):
        state = apply(three_way, ActionType.CALL)   # p0 limps
        state = apply(state, ActionType.FOLD)       # p1 folds the small blind
        state = apply(state, ActionType.CHECK)      # p2
        assert state.pot == 25

        state = to_river(state)
        rig_cards(state, {"p0": "2c 3d", "p2": "4c 5d"}, board=ROYAL_BOARD)
        state = finish(state)

        assert state.winners == ["p0", "p2"]
        assert state.payouts == {"p0": 13, "p2": 12}
        assert total_chips(state) == 3000


class TestRunOut:

    def test_all_in_runs_out_board(self, heads_up):
        state = apply(heads_up, ActionType.RAISE, 5000)
        state = apply(state, ActionType.CALL)

        assert state.hand_over
        assert len(state.community_cards) == 5
        assert state.deck.remaining == 52 - (2 * 2 + 5)
        assert total_chips(state) == 2000
        assert sum(state.payouts.values()) == 2000

    def test_blind_all_in_runs_out_immediately(self, seat_players, blinds, rng):
        players = seat_players(2)
        players[0].chips = 5
        players[1].chips = 10
        state = start_hand(players, blinds, rng=rng)

        assert state.hand_over
        assert len(state.community_cards) == 5
        assert total_chips(state) == 15

    def test_short_all_in_call_leaves_one_bettor(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[0].chips = 50
        state = start_hand(players, blinds, rng=rng)
        state = apply(state, ActionType.RAISE, 50)   # p0 all-in
        state = apply(state, ActionType.CALL)        # p1
        state = apply(state, ActionType.FOLD)        # p2

        # p1 is the only player left who can bet
        assert state.hand_over
        assert len(state.community_cards) == 5
        assert total_chips(state) == 2050


class TestChipConservation:

    @pytest.mark.parametrize("seed", range(8))
    def test_random_play_conserves_chips(self, seat_players, blinds, seed):
        source = random.Random(seed)
        state = start_hand(seat_players(5), blinds, rng=source)
        while not state.hand_over:
            option = source.choice(
                [a for a in legal_actions(state) if a.action_type != ActionType.FOLD]
                or legal_actions(state)
            )
            amount = source.randint(option.min_amount, option.max_amount)
            state = apply(state, option.action_type, amount)

        assert total_chips(state) == 5000
        assert sum(state.payouts.values()) == state.pot
        cards = [c for p in state.players for c in p.hole_cards] + state.community_cards
        assert len(set(cards)) == len(cards)

