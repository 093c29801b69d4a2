"""
pokeradvisor Advisor - hand strength, expected value and recommendations.

Reads GameState values produced by pokeradvisor.core and never modifies them.
"""

from pokeradvisor.advisor.strength import hand_strength, preflop_strength
from pokeradvisor.advisor.payoff import (
    Archetype, CandidateAction, Equilibrium,
    expected_value, candidate_actions, payoff_matrix,
    regret_matched_strategy, equilibrium,
)
from pokeradvisor.advisor.recommend import Recommendation, Alternative, recommend
from pokeradvisor.advisor.decision import decide_for_autonomous_player

__all__ = [
    "hand_strength",
    "preflop_strength",
    "Archetype",
    "CandidateAction",
    "Equilibrium",
    "expected_value",
    "candidate_actions",
    "payoff_matrix",
    "regret_matched_strategy",
    "equilibrium",
    "Recommendation",
    "Alternative",
    "recommend",
    "decide_for_autonomous_player",
]
