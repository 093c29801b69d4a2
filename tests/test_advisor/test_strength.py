"""
Tests for the hand strength heuristics.
"""

import pytest
from pokeradvisor.core.card import parse_cards
from pokeradvisor.advisor.strength import hand_strength, preflop_strength


def preflop(text):
    return preflop_strength(parse_cards(text))


class TestPreflopStrength:

    @pytest.mark.parametrize("cards,expected", [
        ("As Ad", 0.975),
        ("Js Jd", 0.9),
        ("Ts Td", 0.866),
        ("2s 2d", 0.6),
        ("Ah Kh", 0.87),
        ("Ah Kd", 0.82),
        ("Jh Td", 0.7),
        ("7h 2c", 0.225),
    ])
    def test_table_values(self, cards, expected):
        assert preflop(cards) == pytest.approx(expected)

    def test_premium_hands_rank_above_trash(self):
        ordered = ["As Ad", "Ks Kd", "Ah Kh", "9h 8h", "7h 2c"]
        values = [preflop(h) for h in ordered]
        assert values == sorted(values, reverse=True)

    def test_suited_bonus(self):
        assert preflop("9h 8h") == pytest.approx(preflop("9h 8d") + 0.05)

    def test_card_order_does_not_matter(self):
        assert preflop("Kd Ah") == preflop("Ah Kd")

    def test_bounds(self):
        for text in ["3c 8d", "2c 7d", "Qc 3d", "Ac Kc"]:
            assert 0.1 <= preflop(text) <= 1.0


class TestHandStrength:

    def test_no_cards(self):
        assert hand_strength([], parse_cards("2c 3d 4h")) == 0.0

    def test_preflop_without_board(self):
        hole = parse_cards("As Ad")
        assert hand_strength(hole, []) == preflop_strength(hole)

    @pytest.mark.parametrize("hole,board,expected", [
        ("As Ad", "Ac Kc Kd", 0.8),
        ("As 7d", "Ac 9c 2d", 0.25),
        ("As 2s", "Ks 9s 4s", 0.7),
        ("Qs Jd", "Tc 9c 8h", 0.6),
        ("Qs Qd", "Qc 9c 2h Qh", 0.9),
    ])
    def test_made_hands(self, hole, board, expected):
        assert hand_strength(parse_cards(hole), parse_cards(board)) == expected

    def test_high_card(self):
        strength = hand_strength(parse_cards("As 7d"), parse_cards("Kc 9c 2h"))
        assert strength == pytest.approx(0.1 + 12 / 13 * 0.15)
        assert strength < 0.25
