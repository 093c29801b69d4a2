"""
Player class for Texas Hold'em.

Manages player state including:
- Stack (chip count), which persists across hands
- Hole cards
- Current street bet and total committed this hand
- Folded / all-in / active flags and seat roles
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field
from enum import Enum

from pokeradvisor.core.card import Card


class PlayerType(Enum):
    """Who decides for the seat."""
    HUMAN = "human"
    AUTONOMOUS = "autonomous"


@dataclass
class Player:
    """
    A player in the Texas Hold'em game.

    Attributes:
        player_id: Unique, stable identifier for the player
        name: Display name
        player_type: Human or autonomous seat
        chips: Current chip count
        hole_cards: The player's private cards (0 or 2)
        bet: Amount bet in the current street
        total_bet: Total amount committed this hand
        folded: Player has folded this hand
        all_in: Player has no chips left behind this hand
        active: Player had chips when the hand started
    """
    player_id: str
    name: str
    chips: int
    player_type: PlayerType = PlayerType.AUTONOMOUS
    hole_cards: List[Card] = field(default_factory=list)
    bet: int = 0
    total_bet: int = 0
    folded: bool = False
    all_in: bool = False
    active: bool = True

    # Seat roles, reassigned every hand
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False

    def __post_init__(self):
        if self.chips < 0:
            raise ValueError(f"Player {self.player_id} cannot have negative chips")

    def reset_for_new_hand(self) -> None:
        """Reset everything but identity and chips."""
        self.hole_cards = []
        self.bet = 0
        self.total_bet = 0
        self.folded = False
        self.all_in = False
        self.active = self.chips > 0
        self.is_dealer = False
        self.is_small_blind = False
        self.is_big_blind = False

    def reset_for_new_street(self) -> None:
        self.bet = 0

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        Args:
            amount: Chips to put in

        Returns:
            Actual amount committed (capped at the stack)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.chips)

        self.chips -= actual_amount
        self.bet += actual_amount
        self.total_bet += actual_amount

        if self.chips == 0:
            self.all_in = True

        return actual_amount

    def fold(self) -> None:
        self.folded = True

    @property
    def is_human(self) -> bool:
        return self.player_type == PlayerType.HUMAN

    @property
    def is_in_hand(self) -> bool:
        """Check if player is still contesting the pot."""
        return self.active and not self.folded

    @property
    def can_act(self) -> bool:
        """Check if player can still take betting actions."""
        return self.active and not self.folded and not self.all_in

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "type": self.player_type.value,
            "chips": self.chips,
            "bet": self.bet,
            "total_bet": self.total_bet,
            "folded": self.folded,
            "all_in": self.all_in,
            "active": self.active,
            "is_dealer": self.is_dealer,
            "is_small_blind": self.is_small_blind,
            "is_big_blind": self.is_big_blind,
            "cards": None,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.bet}, folded={self.folded}, all_in={self.all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
