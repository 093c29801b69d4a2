"""
Texas Hold'em Rules and Constants.

Streets, action kinds, blind structure, table limits and the seat helpers
used by the betting engine. Rules encoded here:

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Otherwise SB and BB are the next two seats with chips after the dealer.

2. Minimum raise: the raise increment must be at least the previous raise
   increment this street, or the big blind when nobody has raised yet.

3. Single pot: every chip goes into one pot. Side pots are not split.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from pokeradvisor.core.card import DECK_SIZE


class Street(Enum):
    """Betting streets of a Texas Hold'em hand."""
    PRE_FLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionType.BET, ActionType.RAISE)

    @property
    def is_passive(self) -> bool:
        return self in (ActionType.CHECK, ActionType.CALL)


@dataclass(frozen=True)
class BlindStructure:
    """Blind amounts for a hand."""
    small_blind: int
    big_blind: int

    def __post_init__(self):
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")


# Default game settings
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_BUY_IN = 1000
DEFAULT_AI_PLAYERS = 5
DEFAULT_HUMAN_NAME = "You"
MIN_PLAYERS = 2
MAX_PLAYERS = 10

DEFAULT_BLINDS = BlindStructure(DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND)

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Next street and how many board cards it deals
STREET_PROGRESSION = {
    Street.PRE_FLOP: (Street.FLOP, FLOP_CARDS),
    Street.FLOP: (Street.TURN, TURN_CARDS),
    Street.TURN: (Street.RIVER, RIVER_CARDS),
}


def max_players_for_deck() -> int:
    """Largest table a single deck can serve: 2N + 5 <= 52."""
    return (DECK_SIZE - TOTAL_COMMUNITY_CARDS) // HOLE_CARDS


def validate_table_size(num_players: int) -> None:
    """
    Check that a hand can be dealt to this many players.

    Raises:
        ValueError: If the count is outside MIN_PLAYERS..MAX_PLAYERS or the
            deck cannot cover every hole card plus a full board
    """
    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise ValueError(
            f"Number of players with chips must be {MIN_PLAYERS}-{MAX_PLAYERS}, "
            f"got {num_players}"
        )
    if HOLE_CARDS * num_players + TOTAL_COMMUNITY_CARDS > DECK_SIZE:
        raise ValueError(f"A single deck cannot deal to {num_players} players")


def next_seat(
    num_seats: int,
    start: int,
    predicate: Callable[[int], bool],
) -> Optional[int]:
    """
    First seat after `start` (wrapping, `start` itself checked last) that
    satisfies `predicate`, or None when no seat does.
    """
    for offset in range(1, num_seats + 1):
        seat = (start + offset) % num_seats
        if predicate(seat):
            return seat
    return None


def get_blind_positions(
    active_seats: Sequence[int],
    dealer_seat: int,
) -> Tuple[int, int]:
    """
    Calculate small blind and big blind seats.

    Heads-up the dealer posts the small blind; otherwise the blinds are the
    next two active seats clockwise from the dealer.

    Args:
        active_seats: Seat indices of players with chips, in seat order
        dealer_seat: Seat index of the dealer (must be in active_seats)

    Returns:
        Tuple of (small_blind_seat, big_blind_seat)
    """
    if len(active_seats) < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")

    order: List[int] = list(active_seats)
    dealer_pos = order.index(dealer_seat)

    if len(order) == 2:
        sb_pos = dealer_pos
        bb_pos = (dealer_pos + 1) % 2
    else:
        sb_pos = (dealer_pos + 1) % len(order)
        bb_pos = (dealer_pos + 2) % len(order)

    return order[sb_pos], order[bb_pos]


def calculate_min_raise(deficit: int, last_raise_amount: int) -> int:
    """
    Minimum chips a raise must put in.

    The player first matches the highest bet (the deficit) and then adds at
    least the last raise increment. The increment is reset to the big blind
    at the start of every street.
    """
    return deficit + last_raise_amount
