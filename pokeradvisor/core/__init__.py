"""
pokeradvisor Core - Pure Python Texas Hold'em Game Logic

Cards, hand evaluation and the betting state machine, without any network
dependencies.
"""

from pokeradvisor.core.card import Card, Deck, Rank, Suit, new_deck, draw
from pokeradvisor.core.player import Player, PlayerType
from pokeradvisor.core.hand import HandCategory, HandEvaluation, evaluate_five, evaluate_best
from pokeradvisor.core.rules import Street, ActionType, BlindStructure
from pokeradvisor.core.game import (
    GameState, LegalAction, ActionRecord,
    start_hand, legal_actions, apply, current_player, default_action,
)
from pokeradvisor.core.view import HandSummary, hand_summary, table_view
from pokeradvisor.core.exceptions import (
    PokerError, IllegalActionError, InvariantViolation,
    DeckUnderflowError, InvalidHandError, HandStateError,
)

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_deck",
    "draw",
    "Player",
    "PlayerType",
    "HandCategory",
    "HandEvaluation",
    "evaluate_five",
    "evaluate_best",
    "Street",
    "ActionType",
    "BlindStructure",
    "GameState",
    "LegalAction",
    "ActionRecord",
    "start_hand",
    "legal_actions",
    "apply",
    "current_player",
    "default_action",
    "HandSummary",
    "hand_summary",
    "table_view",
    "PokerError",
    "IllegalActionError",
    "InvariantViolation",
    "DeckUnderflowError",
    "InvalidHandError",
    "HandStateError",
]
