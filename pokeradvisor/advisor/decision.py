"""
Action selection for autonomous players.

Autonomous seats follow the advisor, re-checked against the current legal
actions, with a random chance of taking the first alternative line instead
so their play is not fully predictable.
"""

from __future__ import annotations
from typing import Optional, Tuple
import logging
import random

from pokeradvisor.core.game import GameState, find_legal_action, legal_actions
from pokeradvisor.core.rules import ActionType
from pokeradvisor.advisor.recommend import recommend


logger = logging.getLogger(__name__)


# Chance of playing the first alternative instead of the recommendation
ALTERNATIVE_RATE = 0.3

# Safest legal action, in order of preference
FALLBACK_ORDER = (ActionType.CHECK, ActionType.CALL, ActionType.FOLD)


def decide_for_autonomous_player(
    state: GameState,
    rng: Optional[random.Random] = None,
) -> Tuple[ActionType, int]:
    """
    Choose an action for the player to act.

    Args:
        state: Current hand state
        rng: Random source for the alternative substitution

    Returns:
        (action, amount) that is legal in ``state``
    """
    source = rng or random
    player = state.players[state.current_player_index]

    if not legal_actions(state):
        return ActionType.FOLD, 0

    recommendation = recommend(state)
    action, amount = recommendation.action, recommendation.amount

    if not _is_legal(state, action, amount):
        logger.warning(
            f"Recommendation {action.value} {amount} is not legal for "
            f"{player.name}, falling back"
        )
        return safest_action(state)

    amount = min(amount, player.chips)

    if recommendation.alternatives and source.random() < ALTERNATIVE_RATE:
        alternative = recommendation.alternatives[0]
        if _is_legal(state, alternative.action, alternative.amount):
            logger.debug(f"{player.name} mixes in {alternative.action.value}")
            return alternative.action, min(alternative.amount, player.chips)

    return action, amount


def safest_action(state: GameState) -> Tuple[ActionType, int]:
    """Check if free, otherwise call, otherwise fold."""
    for action_type in FALLBACK_ORDER:
        option = find_legal_action(state, action_type)
        if option is not None:
            return action_type, option.min_amount
    return ActionType.FOLD, 0


def _is_legal(state: GameState, action: ActionType, amount: int) -> bool:
    option = find_legal_action(state, action)
    if option is None:
        return False
    if action.is_aggressive:
        return option.min_amount <= amount <= option.max_amount
    if action == ActionType.CALL:
        return amount == option.min_amount
    return True
