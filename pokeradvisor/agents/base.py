"""
Base Agent Interface for pokeradvisor.

An agent decides for one seat. The table asks it for an action whenever that
seat is the player to act, passing the current GameState.

Usage:
    class MyAgent(BaseAgent):
        def act(self, state):
            return ActionType.CALL, 0
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from pokeradvisor.core.game import GameState
from pokeradvisor.core.rules import ActionType
from pokeradvisor.core.view import HandSummary


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        player_id: Id of the seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def act(self, state: GameState) -> Tuple[ActionType, int]:
        """
        Choose an action for the player to act in ``state``.

        The state must not be modified.

        Returns:
            (action type, amount); the amount only matters for BET and RAISE
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, summary: HandSummary) -> None:
        """Called with the completed-hand record once a hand is over."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"


class HumanAgent(BaseAgent):
    """
    Marks a seat as controlled by a person.

    Human actions arrive through the API or WebSocket, never from act().
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        super().__init__(player_id, name or f"Human-{player_id}")

    def act(self, state: GameState) -> Tuple[ActionType, int]:
        raise NotImplementedError("Human actions should come through the API")
