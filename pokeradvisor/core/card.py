"""
Card and Deck classes for Texas Hold'em.

Cards are immutable (rank, suit) values with a compact integer encoding.
Whether a card is visible to the table is not a property of the card: the
game state tracks which players' hands are revealed.
"""

from __future__ import annotations
import random
from typing import List, Optional
from enum import IntEnum

from pokeradvisor.core.exceptions import DeckUnderflowError


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks valued by their pip count, Jack=11 through Ace=14."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

SUIT_NAMES = {
    Suit.CLUBS: "clubs",
    Suit.DIAMONDS: "diamonds",
    Suit.HEARTS: "hearts",
    Suit.SPADES: "spades",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

RANK_NAMES = {
    Rank.TWO: "Two",
    Rank.THREE: "Three",
    Rank.FOUR: "Four",
    Rank.FIVE: "Five",
    Rank.SIX: "Six",
    Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight",
    Rank.NINE: "Nine",
    Rank.TEN: "Ten",
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["T"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


class Card:
    """
    A playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10h"),
      Card.from_string("A♠")
    - Integer (0-51): Card.from_int(51) = Ace of Spades

    The integer encoding is: card_int = (rank - 2) * 4 + suit
    """

    __slots__ = ("rank", "suit", "_int")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "rank", Rank(rank))
        object.__setattr__(self, "suit", Suit(suit))
        object.__setattr__(self, "_int", (int(self.rank) - 2) * 4 + int(self.suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __copy__(self) -> Card:
        return self

    def __deepcopy__(self, memo) -> Card:
        return self

    def __reduce__(self):
        return (Card, (self.rank, self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10d", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int < DECK_SIZE:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(Rank(card_int // 4 + 2), Suit(card_int % 4))

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return self._int

    def __int__(self) -> int:
        return self._int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._int == other._int
        return False

    def __hash__(self) -> int:
        return self._int

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_NAMES[self.suit],
            "text": str(self),
            "color": self.color,
        }


class Deck:
    """
    A standard 52-card deck dealt from the top.

    Usage:
        deck = new_deck(random.Random(7))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        """Initialize a new deck, optionally shuffled with the given source."""
        self.reset()
        if shuffle:
            self.shuffle(rng)

    def reset(self) -> None:
        """Reset the deck to a full 52 cards in order."""
        self._cards: List[Card] = [
            Card(rank, suit)
            for suit in Suit
            for rank in Rank
        ]
        self._dealt: List[Card] = []

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        source = rng if rng is not None else random
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = source.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckUnderflowError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckUnderflowError(
                f"Cannot deal {n} cards, only {len(self._cards)} remain"
            )

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        self._dealt.extend(dealt)
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        """Undealt cards, top first."""
        return self._cards.copy()

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def new_deck(rng: Optional[random.Random] = None) -> Deck:
    """Build a full deck in a freshly randomized order."""
    return Deck(shuffle=True, rng=rng)


def draw(deck: Deck) -> Card:
    """Remove and return the top card of the deck."""
    return deck.deal_one()


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a space-separated string.

    Accepts "As Kh Td", "A♠ K♥ 10♦" and mixes of the two.
    """
    return [Card.from_string(s) for s in cards_str.split()]
