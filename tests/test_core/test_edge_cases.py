"""
Tests for edge cases and extreme situations in Texas Hold'em.

These tests cover:
- All players fold except one (win by fold)
- Short stacks and blind payments
- Busted players sitting out
- Maximum player scenarios (10 players)
- String actions and consecutive hands
"""

import pytest
from pokeradvisor.core.game import (
    start_hand, apply, find_legal_action,
)
from pokeradvisor.core.rules import ActionType, Street, MAX_PLAYERS
from pokeradvisor.core.exceptions import IllegalActionError


class TestWinByFold:
    """Tests for winning when all others fold."""

    def test_all_fold_preflop_except_one(self, three_way):
        state = apply(three_way, ActionType.FOLD)
        state = apply(state, ActionType.FOLD)

        assert state.hand_over
        assert state.street == Street.SHOWDOWN
        assert state.winners == ["p2"]
        assert state.payouts == {"p2": 15}
        assert state.players[2].chips == 1005

    def test_uncontested_win_reveals_nothing(self, three_way):
        state = apply(three_way, ActionType.FOLD)
        state = apply(state, ActionType.FOLD)

        assert state.revealed == set()
        assert state.hand_evaluations == {}
        assert state.community_cards == []


class TestShortStacks:
    """Blinds and calls larger than a stack."""

    def test_short_small_blind_goes_all_in(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[1].chips = 3
        state = start_hand(players, blinds, rng=rng)

        sb = state.players[1]
        assert sb.bet == 3
        assert sb.all_in
        assert state.pot == 13
        assert state.action_log[0].is_all_in

    def test_short_big_blind_loses_option(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[2].chips = 4
        state = start_hand(players, blinds, rng=rng)

        assert state.players[2].all_in
        assert not state.big_blind_option
        # The small blind's 5 is now the bet to match
        call = find_legal_action(state, ActionType.CALL)
        assert call.min_amount == 5

    def test_call_for_less_is_all_in(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[0].chips = 3
        state = start_hand(players, blinds, rng=rng)

        call = find_legal_action(state, ActionType.CALL)
        assert call.min_amount == call.max_amount == 3
        assert find_legal_action(state, ActionType.RAISE) is None

        state = apply(state, ActionType.CALL)
        assert state.players[0].all_in
        assert state.players[0].chips == 0

    def test_raise_needs_more_than_the_call(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[0].chips = 15
        state = start_hand(players, blinds, rng=rng)

        # 15 chips cover the call but not the minimum raise of 20
        assert find_legal_action(state, ActionType.CALL).min_amount == 10
        assert find_legal_action(state, ActionType.RAISE) is None


class TestSittingOut:

    def test_busted_player_never_acts(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[1].chips = 0
        state = start_hand(players, blinds, rng=rng)
        while not state.hand_over:
            assert state.current_player_index != 1
            if find_legal_action(state, ActionType.CHECK):
                state = apply(state, ActionType.CHECK)
            else:
                state = apply(state, ActionType.CALL)

    def test_one_player_with_chips_cannot_start(self, seat_players, blinds, rng):
        players = seat_players(3)
        players[0].chips = 0
        players[1].chips = 0
        with pytest.raises(ValueError):
            start_hand(players, blinds, rng=rng)


class TestTableSize:

    def test_maximum_players(self, seat_players, blinds, rng):
        state = start_hand(seat_players(MAX_PLAYERS), blinds, rng=rng)

        assert all(len(p.hole_cards) == 2 for p in state.players)
        assert state.deck.remaining == 52 - 2 * MAX_PLAYERS
        # Under the gun sits after the big blind
        assert state.current_player_index == 3

    def test_too_many_players(self, seat_players, blinds, rng):
        with pytest.raises(ValueError):
            start_hand(seat_players(MAX_PLAYERS + 1), blinds, rng=rng)


class TestStateHandling:
    """String actions and hands chaining together."""

    def test_string_action_types(self, heads_up):
        state = apply(heads_up, "CALL")
        assert state.players[0].bet == 10
        with pytest.raises(IllegalActionError):
            apply(state, "shove")

    def test_consecutive_hands_carry_chips(self, heads_up):
        first = apply(heads_up, ActionType.FOLD)
        second = start_hand(first.players, previous=first)

        assert second.hand_number == 2
        assert second.blinds == first.blinds
        assert sum(p.chips for p in second.players) + second.pot == 2000
        assert second.dealer_index != first.dealer_index
