"""
Agents that play autonomous seats.

AdvisorAgent follows the decision engine. CallAgent always checks or calls
and is handy for scripted tables and tests.
"""

import random
from typing import Optional, Tuple

from pokeradvisor.agents.base import BaseAgent
from pokeradvisor.advisor.decision import decide_for_autonomous_player
from pokeradvisor.core.game import GameState, find_legal_action
from pokeradvisor.core.rules import ActionType


class AdvisorAgent(BaseAgent):
    """
    Plays the advisor's recommendation, occasionally mixing in an alternative.

    Each agent owns its random source so a seeded table replays the same way.
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(player_id, name or f"AI-{player_id}")
        self.rng = rng or random.Random()

    def act(self, state: GameState) -> Tuple[ActionType, int]:
        return decide_for_autonomous_player(state, self.rng)


class CallAgent(BaseAgent):
    """An agent that always checks or calls, folding only when it can do neither."""

    def __init__(self, player_id: str, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def act(self, state: GameState) -> Tuple[ActionType, int]:
        if find_legal_action(state, ActionType.CHECK) is not None:
            return ActionType.CHECK, 0

        call = find_legal_action(state, ActionType.CALL)
        if call is not None:
            return ActionType.CALL, call.min_amount

        return ActionType.FOLD, 0
