"""
Expected value, payoff matrix and regret matching.

The payoff matrix scores each candidate action of the player to act against
three fixed opponent archetypes. regret_matched_strategy() turns the matrix
into a mixed strategy with a single regret-matching step. It is a heuristic
blend of the archetypes, not an iterated solver, and it does not converge to
an equilibrium.
"""

from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional
from dataclasses import dataclass
from enum import Enum

from pokeradvisor.core.game import GameState, legal_actions
from pokeradvisor.core.rules import ActionType
from pokeradvisor.advisor.strength import hand_strength


class Archetype(Enum):
    """Fixed opponent models the payoff matrix is scored against."""
    AGGRESSIVE = "aggressive"
    PASSIVE = "passive"
    BALANCED = "balanced"


class CandidateAction(NamedTuple):
    """An action with a concrete amount, as scored by the advisor."""
    action_type: ActionType
    amount: int = 0

    @property
    def label(self) -> str:
        if self.amount:
            return f"{self.action_type.value}-{self.amount}"
        return self.action_type.value


# Each extra opponent able to act scales strength by this factor
MULTIWAY_DISCOUNT = 0.85

# (passive line multiplier, aggressive line multiplier) per archetype
ARCHETYPE_MULTIPLIERS = {
    Archetype.AGGRESSIVE: (0.8, 1.2),
    Archetype.PASSIVE: (1.2, 0.8),
    Archetype.BALANCED: (1.0, 1.0),
}

# Bet and raise sizes offered, as multiples of the minimum
SIZING_MULTIPLES = (1, 2, 3)

MAX_FOLD_EQUITY = 0.7

PayoffMatrix = Dict[CandidateAction, Dict[Archetype, float]]
MixedStrategy = Dict[CandidateAction, float]


def players_able_to_act(state: GameState) -> int:
    return sum(1 for p in state.players if p.can_act)


def adjusted_strength(state: GameState, strength: float) -> float:
    """Strength discounted for every additional opponent still able to act."""
    opponents = max(players_able_to_act(state) - 1, 0)
    return strength * MULTIWAY_DISCOUNT ** opponents


def pot_odds(pot: int, call_amount: int) -> float:
    """Share of the final pot a call has to contribute."""
    if call_amount <= 0:
        return 0.0
    return call_amount / (pot + call_amount)


def expected_value(
    state: GameState,
    action_type: ActionType,
    amount: Optional[int],
    strength: float,
) -> float:
    """
    Closed-form heuristic EV of an action for the player to act.

    - fold: minus the chips already committed this hand
    - check: share of the pot at the adjusted strength
    - call: positive only when adjusted strength beats the pot odds
    - bet/raise: fold equity on the current pot plus called equity on the
      grown pot, minus the chips risked
    """
    player = state.players[state.current_player_index]
    pot = state.pot
    adjusted = adjusted_strength(state, strength)
    amount = amount or 0

    if action_type == ActionType.FOLD:
        return -float(player.total_bet)

    if action_type == ActionType.CHECK:
        return pot * adjusted

    if action_type == ActionType.CALL:
        if adjusted > pot_odds(pot, amount):
            return adjusted * (pot + amount) - amount
        return -float(amount)

    # Bigger bets fold out more hands; strong hands want calls, not folds
    bet_to_pot = amount / (pot or 1)
    fold_equity = min(MAX_FOLD_EQUITY, max(0.0, 0.2 + bet_to_pot * 0.3 - adjusted * 0.4))
    call_probability = 1 - fold_equity
    return fold_equity * pot + call_probability * adjusted * (pot + amount) - amount


def candidate_actions(state: GameState) -> List[CandidateAction]:
    """Legal actions with concrete amounts; bets and raises at 1x/2x/3x the minimum."""
    candidates = []
    for option in legal_actions(state):
        if option.action_type.is_aggressive:
            for multiple in SIZING_MULTIPLES:
                size = option.min_amount * multiple
                if size <= option.max_amount:
                    candidates.append(CandidateAction(option.action_type, size))
        elif option.action_type == ActionType.CALL:
            candidates.append(CandidateAction(ActionType.CALL, option.min_amount))
        else:
            candidates.append(CandidateAction(option.action_type))
    return candidates


def archetype_payoff(
    archetype: Archetype,
    action_type: ActionType,
    ev: float,
) -> float:
    """Scale a raw EV for how the archetype responds to the line taken."""
    if action_type == ActionType.FOLD:
        return ev
    passive, aggressive = ARCHETYPE_MULTIPLIERS[archetype]
    return ev * (aggressive if action_type.is_aggressive else passive)


def payoff_matrix(state: GameState) -> PayoffMatrix:
    """Score every candidate action of the player to act against each archetype."""
    player = state.players[state.current_player_index]
    strength = hand_strength(player.hole_cards, state.community_cards)

    matrix: PayoffMatrix = {}
    for candidate in candidate_actions(state):
        ev = expected_value(state, candidate.action_type, candidate.amount, strength)
        matrix[candidate] = {
            archetype: archetype_payoff(archetype, candidate.action_type, ev)
            for archetype in Archetype
        }
    return matrix


def average_payoffs(matrix: PayoffMatrix) -> Dict[CandidateAction, float]:
    return {
        action: (sum(row.values()) / len(row)) if row else 0.0
        for action, row in matrix.items()
    }


def regret_matched_strategy(
    matrix: PayoffMatrix,
    baseline: Optional[float] = None,
) -> MixedStrategy:
    """
    One regret-matching step over the archetype-averaged payoffs.

    Each action's regret is max(0, average - baseline) and the regrets are
    normalized into probabilities. The baseline defaults to the best average,
    against which every regret is zero, so the default result is the uniform
    distribution over the candidates. Whenever all regrets are zero the
    uniform distribution is returned.

    Returns:
        Probability per candidate action; empty for an empty matrix
    """
    if not matrix:
        return {}

    averages = average_payoffs(matrix)
    if baseline is None:
        baseline = max(averages.values())

    regrets = {action: max(0.0, avg - baseline) for action, avg in averages.items()}
    total = sum(regrets.values())

    if total > 0:
        return {action: regret / total for action, regret in regrets.items()}

    uniform = 1.0 / len(matrix)
    return {action: uniform for action in matrix}


@dataclass
class Equilibrium:
    """Mixed strategy and its expected payoff against each archetype."""
    strategy: MixedStrategy
    expected_payoffs: Dict[Archetype, float]

    def to_dict(self) -> dict:
        return {
            "strategy": {action.label: p for action, p in self.strategy.items()},
            "expected_payoffs": {
                archetype.value: payoff
                for archetype, payoff in self.expected_payoffs.items()
            },
        }


def equilibrium(matrix: PayoffMatrix) -> Equilibrium:
    """Approximate equilibrium summary: the regret-matched strategy and its payoffs."""
    strategy = regret_matched_strategy(matrix)
    expected_payoffs = {
        archetype: sum(
            probability * matrix[action][archetype]
            for action, probability in strategy.items()
        )
        for archetype in Archetype
    }
    return Equilibrium(strategy=strategy, expected_payoffs=expected_payoffs)
