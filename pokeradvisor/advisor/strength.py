"""
Hand strength heuristics on a 0-1 scale.

Pre-flop strength comes from a piecewise-linear table over pairs, broadway
cards, connectors and high cards. After the flop strength follows the made
hand category only; it is not a win probability.
"""

from typing import Sequence

from pokeradvisor.core.card import Card, Rank
from pokeradvisor.core.hand import HandCategory, evaluate_best


CATEGORY_STRENGTH = {
    HandCategory.ROYAL_FLUSH: 1.0,
    HandCategory.STRAIGHT_FLUSH: 0.95,
    HandCategory.FOUR_OF_A_KIND: 0.9,
    HandCategory.FULL_HOUSE: 0.8,
    HandCategory.FLUSH: 0.7,
    HandCategory.STRAIGHT: 0.6,
    HandCategory.THREE_OF_A_KIND: 0.5,
    HandCategory.TWO_PAIR: 0.4,
    HandCategory.ONE_PAIR: 0.25,
}

HIGH_CARD_FLOOR = 0.1
HIGH_CARD_SPAN = 0.15
SUITED_BONUS = 0.05


def hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """Strength of a holding in [0, 1]; 0 without two hole cards."""
    if len(hole_cards) < 2:
        return 0.0

    if not community_cards:
        return preflop_strength(hole_cards)

    evaluation = evaluate_best(hole_cards, community_cards)
    if evaluation.category == HandCategory.HIGH_CARD:
        top = evaluation.cards[0].rank
        return HIGH_CARD_FLOOR + (top - Rank.TWO) / 13 * HIGH_CARD_SPAN
    return CATEGORY_STRENGTH[evaluation.category]


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    """
    Heuristic strength of two hole cards before the flop.

    Tiers, strongest first:
    - Premium pairs (JJ+): 0.90 - 0.975
    - Medium pairs (88-TT): 0.80 - 0.866
    - Small pairs (22-77): 0.60 - 0.765
    - Two close broadway cards (AK, AQ, AJ, KQ, KJ, KT, QJ, QT, JT): from
      0.70, +0.05 suited
    - Connectors: from 0.50, +0.05 suited
    - One Queen or better: from 0.40, +0.05 suited
    - Everything else: 0.10 - 0.50
    """
    if len(hole_cards) < 2:
        return 0.0

    first, second = hole_cards[0], hole_cards[1]
    high = max(first.rank, second.rank)
    low = min(first.rank, second.rank)
    suited = first.suit == second.suit
    gap = high - low

    if gap == 0:
        if high >= Rank.JACK:
            return 0.9 + (high - Rank.JACK) * 0.025
        if high >= Rank.EIGHT:
            return 0.8 + (high - Rank.EIGHT) * 0.033
        return 0.6 + (high - Rank.TWO) * 0.033

    bonus = SUITED_BONUS if suited else 0.0

    if high >= Rank.JACK and low >= Rank.TEN and gap <= 3:
        return 0.7 + (high + low - 21) * 0.02 + bonus

    if gap == 1:
        return 0.5 + (high + low - 3) * 0.01 + bonus

    if high >= Rank.QUEEN:
        return 0.4 + (high - Rank.QUEEN) * 0.05 + (low - Rank.TWO) * 0.01 + bonus

    strength = 0.2 + (high + low - 4) * 0.005 + bonus
    if gap <= 2:
        strength += 0.05
    return max(0.1, min(strength, 0.5))
