"""
Tests for Card and Deck classes.
"""

import copy
import random

import pytest
from pokeradvisor.core.card import (
    Card, Deck, Rank, Suit, DECK_SIZE, new_deck, draw, parse_cards,
)
from pokeradvisor.core.exceptions import DeckUnderflowError, InvariantViolation


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Rank characters, ten as 'T' or '10', suit letters or symbols."""
        assert Card.from_string("As") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10c") == Card(Rank.TEN, Suit.CLUBS)
        assert Card.from_string(" 2h ") == Card(Rank.TWO, Suit.HEARTS)

    @pytest.mark.parametrize("text", ["", "A", "1s", "Ax", "ZZ"])
    def test_invalid_card_string(self, text):
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_int_encoding(self):
        assert Card.from_int(0) == Card(Rank.TWO, Suit.CLUBS)
        assert Card.from_int(51) == Card(Rank.ACE, Suit.SPADES)
        assert Card(Rank.ACE, Suit.SPADES).to_int() == 51
        with pytest.raises(ValueError):
            Card.from_int(52)

    def test_card_equality_and_hash(self):
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.ACE, Suit.HEARTS)

        assert card1 == card2
        assert card1 != card3
        assert len({card1, card2, card3}) == 2

    def test_card_is_immutable(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_deepcopy_shares_card(self):
        card = Card(Rank.QUEEN, Suit.CLUBS)
        assert copy.deepcopy(card) is card

    def test_card_strings(self):
        card = Card(Rank.TEN, Suit.HEARTS)
        assert str(card) == "10♥"
        assert card.short_str == "10h"

    def test_card_to_dict(self):
        data = Card(Rank.KING, Suit.DIAMONDS).to_dict()
        assert data == {"rank": "K", "suit": "diamonds", "text": "K♦", "color": "red"}
        assert Card(Rank.KING, Suit.SPADES).color == "black"

    def test_parse_cards(self):
        cards = parse_cards("As Kh 10d 2♣")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
            Card(Rank.TWO, Suit.CLUBS),
        ]


class TestDeck:
    """Tests for Deck class."""

    def test_deck_has_52_unique_cards(self, unshuffled_deck):
        cards = unshuffled_deck.cards
        assert len(cards) == DECK_SIZE
        assert len(set(cards)) == DECK_SIZE

    def test_shuffled_deck_is_permutation(self, deck, unshuffled_deck):
        assert set(deck.cards) == set(unshuffled_deck.cards)

    def test_same_seed_same_order(self):
        first = new_deck(random.Random(99))
        second = new_deck(random.Random(99))
        assert first.cards == second.cards

    def test_different_seeds_differ(self):
        first = new_deck(random.Random(1))
        second = new_deck(random.Random(2))
        assert first.cards != second.cards

    def test_deal_from_top(self, unshuffled_deck):
        top = unshuffled_deck.cards[:3]
        assert unshuffled_deck.deal(3) == top
        assert unshuffled_deck.remaining == 49
        assert unshuffled_deck.dealt_cards == top

    def test_draw(self, deck):
        top = deck.cards[0]
        assert draw(deck) == top
        assert len(deck) == 51
        assert top not in deck.cards

    def test_deal_all_cards_no_duplicates(self, deck):
        dealt = [draw(deck) for _ in range(DECK_SIZE)]
        assert len(set(dealt)) == DECK_SIZE
        assert deck.remaining == 0

    def test_draw_from_empty_deck(self, deck):
        deck.deal(DECK_SIZE)
        with pytest.raises(DeckUnderflowError):
            draw(deck)

    def test_underflow_is_invariant_violation(self, deck):
        with pytest.raises(InvariantViolation):
            deck.deal(53)
        # Nothing was dealt by the failed call
        assert deck.remaining == DECK_SIZE

    def test_reset(self, deck):
        deck.deal(10)
        deck.reset()
        assert deck.remaining == DECK_SIZE
        assert deck.dealt_cards == []
