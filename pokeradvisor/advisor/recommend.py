"""
Threshold-based action recommendation with reasoning.

recommend() picks a concrete action from the hand strength of the player to
act, scores it with expected_value(), grades its risk and explains it in a
sentence or two. The mixed strategy from the payoff matrix is attached for
display; it does not drive the choice.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any, Sequence
from dataclasses import dataclass, field
import logging

from pokeradvisor.core.card import Card, RANK_CHARS
from pokeradvisor.core.game import GameState, LegalAction, current_player, legal_actions
from pokeradvisor.core.hand import rank_plural
from pokeradvisor.core.rules import Street, ActionType
from pokeradvisor.core.exceptions import HandStateError
from pokeradvisor.advisor.strength import hand_strength
from pokeradvisor.advisor.payoff import (
    expected_value, payoff_matrix, regret_matched_strategy,
)


logger = logging.getLogger(__name__)


# (aggressive, continue, marginal) strength breakpoints
PREFLOP_THRESHOLDS = (0.8, 0.6, 0.4)
POSTFLOP_THRESHOLDS = (0.7, 0.5, 0.3)

# A marginal hand only calls when the price is below pot / divisor
PREFLOP_CALL_DIVISOR = 4
POSTFLOP_CALL_DIVISOR = 3

BASE_CONFIDENCE = 0.7
MAX_ALTERNATIVES = 2

RISK_LOW = "low"
RISK_MEDIUM = "medium"
RISK_HIGH = "high"


@dataclass
class Alternative:
    action: ActionType
    amount: int
    expected_value: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "amount": self.amount,
            "expected_value": round(self.expected_value, 2),
        }


@dataclass
class Recommendation:
    """
    Advice for the player to act.

    Attributes:
        action: Recommended action
        amount: Chips to put in (0 for fold and check)
        confidence: 0.7 to 1.0, growing with hand strength
        reasoning: Human-readable explanation
        expected_value: Heuristic EV of the recommended action
        risk: "low", "medium" or "high"
        alternatives: Up to two other lines with their EVs
        hand_strength: Strength estimate the advice is based on
        mixed_strategy: Regret-matched probability per candidate label
    """
    action: ActionType
    amount: int
    confidence: float
    reasoning: str
    expected_value: float
    risk: str
    alternatives: List[Alternative] = field(default_factory=list)
    hand_strength: float = 0.0
    mixed_strategy: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "amount": self.amount,
            "confidence": round(self.confidence, 3),
            "reasoning": self.reasoning,
            "expected_value": round(self.expected_value, 2),
            "risk": self.risk,
            "alternatives": [a.to_dict() for a in self.alternatives],
            "hand_strength": round(self.hand_strength, 3),
            "mixed_strategy": {
                label: round(p, 4) for label, p in self.mixed_strategy.items()
            },
        }


def recommend(state: GameState) -> Recommendation:
    """
    Recommend an action for the player to act.

    Raises:
        HandStateError: If nobody is waiting to act
    """
    player = current_player(state)
    if player is None:
        raise HandStateError("No player is waiting to act")

    strength = hand_strength(player.hole_cards, state.community_cards)
    options = {a.action_type: a for a in legal_actions(state)}

    if state.street == Street.PRE_FLOP:
        action, amount = _choose(state, options, strength, PREFLOP_THRESHOLDS,
                                 PREFLOP_CALL_DIVISOR, lead_when_strong=False)
        reasoning = preflop_reasoning(player.hole_cards, action, strength)
    else:
        action, amount = _choose(state, options, strength, POSTFLOP_THRESHOLDS,
                                 POSTFLOP_CALL_DIVISOR, lead_when_strong=True)
        reasoning = postflop_reasoning(strength, action, state.street)

    strategy = regret_matched_strategy(payoff_matrix(state))

    recommendation = Recommendation(
        action=action,
        amount=amount,
        confidence=BASE_CONFIDENCE + (1 - BASE_CONFIDENCE) * strength,
        reasoning=reasoning,
        expected_value=expected_value(state, action, amount, strength),
        risk=risk_tier(action, amount, state.pot, strength),
        alternatives=_alternatives(state, options, action, strength),
        hand_strength=strength,
        mixed_strategy={candidate.label: p for candidate, p in strategy.items()},
    )
    logger.debug(
        f"Recommend {action.value} {amount} for {player.name} "
        f"(strength {strength:.2f}, risk {recommendation.risk})"
    )
    return recommendation


def _choose(
    state: GameState,
    options: Dict[ActionType, LegalAction],
    strength: float,
    thresholds: Sequence[float],
    call_divisor: int,
    lead_when_strong: bool,
):
    """Walk the strength tiers and return the first available (action, amount)."""
    aggressive, strong, marginal = thresholds

    if strength > aggressive:
        order = [ActionType.RAISE, ActionType.BET, ActionType.CALL, ActionType.CHECK]
    elif strength > strong:
        # Pre-flop a strong hand prefers to call; post-flop it leads out
        if lead_when_strong:
            order = [ActionType.BET, ActionType.CALL, ActionType.CHECK]
        else:
            order = [ActionType.CALL, ActionType.BET, ActionType.CHECK]
    elif strength > marginal:
        if ActionType.CHECK in options:
            return ActionType.CHECK, 0
        call = options.get(ActionType.CALL)
        if call is not None and call.min_amount < state.pot / call_divisor:
            return ActionType.CALL, call.min_amount
        return ActionType.FOLD, 0
    else:
        order = [ActionType.CHECK]

    for action_type in order:
        option = options.get(action_type)
        if option is not None:
            return action_type, option.min_amount
    return ActionType.FOLD, 0


def risk_tier(action: ActionType, amount: int, pot: int, strength: float) -> str:
    """Grade a line by action, size relative to the pot and hand strength."""
    if action == ActionType.FOLD:
        return RISK_MEDIUM if strength > 0.4 else RISK_LOW
    if action == ActionType.CHECK:
        return RISK_LOW if strength > 0.5 else RISK_MEDIUM
    if action == ActionType.CALL:
        if strength > 0.6:
            return RISK_LOW
        return RISK_MEDIUM if strength > 0.3 else RISK_HIGH
    if amount > pot / 2:
        return RISK_MEDIUM if strength > 0.7 else RISK_HIGH
    return RISK_MEDIUM if strength > 0.5 else RISK_HIGH


def _alternatives(
    state: GameState,
    options: Dict[ActionType, LegalAction],
    chosen: ActionType,
    strength: float,
) -> List[Alternative]:
    """Safer lines for risky choices, a more aggressive line for passive ones."""
    lines = []

    if chosen == ActionType.FOLD:
        if ActionType.CHECK in options:
            lines.append((ActionType.CHECK, 0))
        elif ActionType.CALL in options:
            lines.append((ActionType.CALL, options[ActionType.CALL].min_amount))

    if chosen in (ActionType.CALL, ActionType.BET, ActionType.RAISE) and strength < 0.5:
        lines.append((ActionType.FOLD, 0))

    if chosen == ActionType.CHECK and strength > 0.4 and ActionType.BET in options:
        lines.append((ActionType.BET, options[ActionType.BET].min_amount))
    elif chosen == ActionType.CALL and strength > 0.6 and ActionType.RAISE in options:
        lines.append((ActionType.RAISE, options[ActionType.RAISE].min_amount))

    return [
        Alternative(action, amount, expected_value(state, action, amount, strength))
        for action, amount in lines[:MAX_ALTERNATIVES]
    ]


def describe_hole_cards(hole_cards: Sequence[Card]) -> str:
    """Short description such as 'a pair of Eights' or 'AK suited connected cards'."""
    first, second = hole_cards[0], hole_cards[1]
    if first.rank == second.rank:
        return f"a pair of {rank_plural(first.rank)}"

    high, low = sorted((first, second), key=lambda c: c.rank, reverse=True)
    ranks = f"{RANK_CHARS[high.rank]}{RANK_CHARS[low.rank]}"
    suited = first.suit == second.suit
    connected = high.rank - low.rank <= 2

    if connected and suited:
        return f"{ranks} suited connected cards"
    if connected:
        return f"{ranks} connected cards"
    if suited:
        return f"{ranks} suited"
    return ranks


def preflop_reasoning(hole_cards: Sequence[Card], action: ActionType, strength: float) -> str:
    hand = describe_hole_cards(hole_cards)
    passive = action in (ActionType.CHECK, ActionType.CALL)

    if strength > 0.7:
        if action == ActionType.FOLD:
            detail = ("This is a strong hand, but folding may be right given the "
                      "table dynamics.")
        elif passive:
            detail = "This is a strong hand that warrants at least calling to see more cards."
        else:
            detail = "This is a strong hand that justifies aggressive play."
    elif strength > 0.4:
        if action == ActionType.FOLD:
            detail = ("This is a decent hand, but folding may be the right move "
                      "given the current betting.")
        elif passive:
            detail = "This is a decent hand worth seeing more cards with minimal investment."
        else:
            detail = ("This hand has potential and may benefit from aggressive play "
                      "to build the pot.")
    else:
        if action == ActionType.FOLD:
            detail = "This hand is relatively weak and folding is often the correct play."
        elif passive:
            detail = "This hand is marginal but may be worth continuing with minimal investment."
        else:
            detail = ("While this hand is weak, a well-timed bet or raise might win "
                      "the pot immediately.")

    return f"You have {hand}. {detail}"


def strength_label(strength: float) -> str:
    if strength > 0.8:
        return "a very strong hand"
    if strength > 0.6:
        return "a strong hand"
    if strength > 0.4:
        return "a decent hand"
    if strength > 0.2:
        return "a marginal hand"
    return "a weak hand"


def postflop_reasoning(strength: float, action: ActionType, street: Street) -> str:
    lead = f"You have {strength_label(strength)} on the {street.value}."

    if action == ActionType.FOLD:
        detail = "The risk of continuing does not justify the potential reward."
    elif action == ActionType.CHECK:
        detail = "Checking lets you see more cards without additional investment."
    elif action == ActionType.CALL:
        detail = "Calling keeps you in the hand at minimal cost to see if your hand improves."
    elif strength > 0.6:
        detail = "Betting or raising builds the pot with your strong hand."
    elif strength > 0.3:
        detail = ("A bet might win the pot now or set up a free card on the "
                  "next street.")
    else:
        detail = ("This is a bluff that could take the pot if your opponents hold "
                  "weak hands.")

    return f"{lead} {detail}"


def format_recommendation(recommendation: Optional[Recommendation]) -> str:
    """One-line summary for logs and text clients."""
    if recommendation is None:
        return "No recommendation"
    amount = f" {recommendation.amount}" if recommendation.amount else ""
    return (
        f"{recommendation.action.value}{amount} "
        f"(confidence {recommendation.confidence:.0%}, risk {recommendation.risk})"
    )
