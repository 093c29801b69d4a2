"""
Pytest configuration and shared fixtures for pokeradvisor tests.
"""

import random

import pytest
from pokeradvisor.core.card import Deck, parse_cards
from pokeradvisor.core.player import Player, PlayerType
from pokeradvisor.core.game import start_hand
from pokeradvisor.core.rules import BlindStructure


def make_players(count, chips=1000, human_seat=None):
    """Seat `count` players p0..pN-1 with equal stacks."""
    return [
        Player(
            player_id=f"p{i}",
            name=f"Player {i}",
            chips=chips,
            player_type=PlayerType.HUMAN if i == human_seat else PlayerType.AUTONOMOUS,
        )
        for i in range(count)
    ]


def set_cards(state, hole_cards, board=None):
    """
    Replace dealt cards for a deterministic showdown.

    Args:
        state: GameState to modify in place
        hole_cards: {player_id: "As Kd"}
        board: Community cards to use, e.g. "2c 7d 9h Js Qc"
    """
    for player in state.players:
        if player.player_id in hole_cards:
            player.hole_cards = parse_cards(hole_cards[player.player_id])
    if board is not None:
        state.community_cards = parse_cards(board)
    return state


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(1))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def blinds():
    return BlindStructure(5, 10)


@pytest.fixture
def heads_up(blinds, rng):
    """A heads-up hand with 5/10 blinds and 1000 stacks."""
    return start_hand(make_players(2), blinds, rng=rng)


@pytest.fixture
def three_way(blinds, rng):
    """A 3-player hand: dealer seat 0, SB seat 1, BB seat 2."""
    return start_hand(make_players(3), blinds, rng=rng)


@pytest.fixture
def six_way(blinds, rng):
    """A 6-player hand."""
    return start_hand(make_players(6), blinds, rng=rng)


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js Ts")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return parse_cards("As 2h 3d 4c 5s")


@pytest.fixture
def seat_players():
    """Factory fixture: seat_players(count, chips=1000, human_seat=None)."""
    return make_players


@pytest.fixture
def rig_cards():
    """Factory fixture: rig_cards(state, {"p0": "As Ad"}, board="...")."""
    return set_cards
