"""
pokeradvisor - Texas Hold'em Engine with a Decision Advisor

A poker hand engine and advice system:
- Pure Python game core as a functional state machine
- Heuristic hand strength, expected value and regret-matched strategies
- Recommendations with reasoning for humans, decisions for AI seats
- FastAPI + WebSocket server

Usage:
    from pokeradvisor.core import Player, start_hand, apply
    from pokeradvisor.advisor import recommend
    from pokeradvisor.table import create_table
"""

__version__ = "0.1.0"

from pokeradvisor.core.card import Card, Deck
from pokeradvisor.core.player import Player, PlayerType
from pokeradvisor.core.game import GameState, start_hand, apply, legal_actions
from pokeradvisor.core.hand import HandCategory, evaluate_best
from pokeradvisor.advisor.recommend import Recommendation, recommend
from pokeradvisor.advisor.decision import decide_for_autonomous_player
from pokeradvisor.table import Table, create_table

__all__ = [
    "Card",
    "Deck",
    "Player",
    "PlayerType",
    "GameState",
    "start_hand",
    "apply",
    "legal_actions",
    "HandCategory",
    "evaluate_best",
    "Recommendation",
    "recommend",
    "decide_for_autonomous_player",
    "Table",
    "create_table",
    "__version__",
]
