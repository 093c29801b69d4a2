"""
Hand Evaluation for Texas Hold'em.

evaluate_five() ranks exactly 5 cards; evaluate_best() finds the best 5-card
hand among the hole cards and the board. Every evaluation carries a single
integer value where higher is better, so two hands compare with plain `>`.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ 10♠
9. Straight Flush: 5 consecutive cards of same suit
8. Four of a Kind: 4 cards of same rank
7. Full House: 3 of a kind + pair
6. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
4. Three of a Kind: 3 cards of same rank
3. Two Pair: 2 different pairs
2. One Pair: 2 cards of same rank
1. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which ranks 5-high.
"""

from __future__ import annotations
from typing import List, Tuple, Optional, Sequence
from itertools import combinations
from dataclasses import dataclass
from enum import IntEnum
from collections import Counter

from pokeradvisor.core.card import Card, Rank, RANK_NAMES
from pokeradvisor.core.exceptions import InvalidHandError


class HandCategory(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10


HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

HAND_SIZE = 5

# Ranks run 2..14, so base 15 keeps every tie-break position independent.
# value = category * 15**5 + r0 * 15**4 + r1 * 15**3 + ... + r4
RANK_BASE = 15
CATEGORY_WEIGHT = RANK_BASE ** HAND_SIZE


@dataclass(frozen=True)
class HandEvaluation:
    """
    Result of evaluating a 5-card hand.

    Attributes:
        category: The hand category
        value: Comparison value, higher wins, equal values tie
        cards: The 5 cards forming the hand, ordered for display
        description: Human-readable description such as "Full House, Kings full of Twos"
    """
    category: HandCategory
    value: int
    cards: Tuple[Card, ...]
    description: str

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "category": self.category.name,
            "name": self.name,
            "value": self.value,
            "cards": [card.to_dict() for card in self.cards],
            "description": self.description,
        }


def evaluate_five(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate exactly 5 cards.

    Raises:
        InvalidHandError: If the input is not 5 distinct cards
    """
    if len(cards) != HAND_SIZE:
        raise InvalidHandError(f"Need exactly 5 cards, got {len(cards)}")
    if len(set(cards)) != HAND_SIZE:
        raise InvalidHandError(f"Duplicate cards in hand: {list(cards)}")

    sorted_cards = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    is_straight, straight_high = _check_straight(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)

    if is_straight and is_flush:
        if straight_high == Rank.ACE:
            category = HandCategory.ROYAL_FLUSH
        else:
            category = HandCategory.STRAIGHT_FLUSH
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        return _build(category, [straight_high], sorted_cards)

    if counts == [4, 1]:
        quad_rank = _get_rank_with_count(rank_counts, 4)
        kicker = _get_rank_with_count(rank_counts, 1)
        return _build(
            HandCategory.FOUR_OF_A_KIND,
            [quad_rank, kicker],
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [3, 2]:
        trips_rank = _get_rank_with_count(rank_counts, 3)
        pair_rank = _get_rank_with_count(rank_counts, 2)
        return _build(
            HandCategory.FULL_HOUSE,
            [trips_rank, pair_rank],
            _sort_by_count(sorted_cards, rank_counts),
        )

    if is_flush:
        return _build(HandCategory.FLUSH, ranks, sorted_cards)

    if is_straight:
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        return _build(HandCategory.STRAIGHT, [straight_high], sorted_cards)

    if counts == [3, 1, 1]:
        trips_rank = _get_rank_with_count(rank_counts, 3)
        kickers = sorted([r for r, c in rank_counts.items() if c == 1], reverse=True)
        return _build(
            HandCategory.THREE_OF_A_KIND,
            [trips_rank] + kickers,
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [2, 2, 1]:
        pairs = sorted([r for r, c in rank_counts.items() if c == 2], reverse=True)
        kicker = _get_rank_with_count(rank_counts, 1)
        return _build(
            HandCategory.TWO_PAIR,
            pairs + [kicker],
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [2, 1, 1, 1]:
        pair_rank = _get_rank_with_count(rank_counts, 2)
        kickers = sorted([r for r, c in rank_counts.items() if c == 1], reverse=True)
        return _build(
            HandCategory.ONE_PAIR,
            [pair_rank] + kickers,
            _sort_by_count(sorted_cards, rank_counts),
        )

    return _build(HandCategory.HIGH_CARD, ranks, sorted_cards)


def evaluate_best(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
) -> HandEvaluation:
    """
    Evaluate the best 5-card hand from hole cards plus the board.

    Every 5-card subset is scored (at most C(7,5) = 21 of them) and the
    highest value wins; on equal values the first subset found is kept.

    Raises:
        InvalidHandError: If fewer than 5 or more than 7 cards are available
    """
    all_cards = list(hole_cards) + list(community_cards)
    if len(all_cards) < HAND_SIZE or len(all_cards) > 7:
        raise InvalidHandError(f"Need 5-7 cards, got {len(all_cards)}")

    best: Optional[HandEvaluation] = None
    for combo in combinations(all_cards, HAND_SIZE):
        evaluation = evaluate_five(combo)
        if best is None or evaluation.value > best.value:
            best = evaluation

    return best


def compare_hands(first: HandEvaluation, second: HandEvaluation) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if first wins, -1 if second wins, 0 if tie
    """
    if first.value > second.value:
        return 1
    if first.value < second.value:
        return -1
    return 0


def _build(
    category: HandCategory,
    tiebreak_ranks: List[Rank],
    cards: List[Card],
) -> HandEvaluation:
    return HandEvaluation(
        category=category,
        value=_calculate_value(category, tiebreak_ranks),
        cards=tuple(cards),
        description=_describe(category, tiebreak_ranks),
    )


def _check_straight(ranks: List[Rank]) -> Tuple[bool, Optional[Rank]]:
    """
    Check if ranks form a straight.

    Returns:
        Tuple of (is_straight, high_card_rank)
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != HAND_SIZE:
        return False, None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return True, unique_ranks[0]

    if unique_ranks == [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]:
        return True, Rank.FIVE

    return False, None


def _get_rank_with_count(rank_counts: Counter, count: int) -> Rank:
    """Get the rank that appears 'count' times."""
    for rank, c in rank_counts.items():
        if c == count:
            return rank
    raise ValueError(f"No rank with count {count}")


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _reorder_wheel(cards: List[Card]) -> List[Card]:
    """Reorder wheel straight so Ace is last (5-4-3-2-A)."""
    ace = [c for c in cards if c.rank == Rank.ACE][0]
    others = sorted([c for c in cards if c.rank != Rank.ACE],
                    key=lambda c: c.rank, reverse=True)
    return others + [ace]


def _calculate_value(category: HandCategory, tiebreak_ranks: List[Rank]) -> int:
    """
    Encode category and tie-break ranks as one comparable integer.

    Tie-break ranks fill the positions from the most significant down, so
    the category always dominates and earlier ranks dominate later ones.
    """
    value = int(category) * CATEGORY_WEIGHT
    for i, rank in enumerate(tiebreak_ranks):
        value += int(rank) * RANK_BASE ** (HAND_SIZE - 1 - i)
    return value


def _describe(category: HandCategory, ranks: List[Rank]) -> str:
    """Human-readable description from the category and its tie-break ranks."""
    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    if category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {rank_name(ranks[0])} high"
    if category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {rank_plural(ranks[0])}"
    if category == HandCategory.FULL_HOUSE:
        return f"Full House, {rank_plural(ranks[0])} full of {rank_plural(ranks[1])}"
    if category == HandCategory.FLUSH:
        return f"Flush, {rank_name(ranks[0])} high"
    if category == HandCategory.STRAIGHT:
        if ranks[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {rank_name(ranks[0])} high"
    if category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {rank_plural(ranks[0])}"
    if category == HandCategory.TWO_PAIR:
        return f"Two Pair, {rank_plural(ranks[0])} and {rank_plural(ranks[1])}"
    if category == HandCategory.ONE_PAIR:
        return f"Pair of {rank_plural(ranks[0])}"
    return f"High Card, {rank_name(ranks[0])}"


def rank_name(rank: Rank) -> str:
    """Get the name of a rank."""
    return RANK_NAMES[rank]


def rank_plural(rank: Rank) -> str:
    """Plural rank name: 'Aces', 'Sixes'."""
    name = RANK_NAMES[rank]
    return f"{name}es" if name.endswith("x") else f"{name}s"
