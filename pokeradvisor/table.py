"""
Table session - a stateful game object over the functional core.

A Table seats the players, keeps the latest GameState and drives autonomous
seats through their agents. Each start_hand()/take_action() call replaces the
stored state with the value returned by the core.

Usage:
    table = create_table(num_ai_players=3, seed=7)
    table.start_hand()

    while table.is_hand_running():
        table.play_autonomous()
        if table.is_hand_running():
            advice = table.recommendation()
            table.take_action(advice.action, advice.amount)

    print(table.summary().to_dict())
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any, Sequence, Union
import logging
import random

from pokeradvisor.core.game import (
    GameState, LegalAction, start_hand, apply, current_player, legal_actions,
)
from pokeradvisor.core.player import Player, PlayerType
from pokeradvisor.core.rules import (
    ActionType, BlindStructure, validate_table_size, MIN_PLAYERS,
    DEFAULT_BLINDS, DEFAULT_AI_PLAYERS, DEFAULT_BUY_IN, DEFAULT_HUMAN_NAME,
    DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND,
)
from pokeradvisor.core.view import HandSummary, hand_summary, table_view
from pokeradvisor.core.exceptions import IllegalActionError, HandStateError
from pokeradvisor.advisor.recommend import Recommendation, recommend, format_recommendation
from pokeradvisor.advisor.payoff import payoff_matrix, equilibrium
from pokeradvisor.agents.base import BaseAgent, HumanAgent
from pokeradvisor.agents.advisor_agent import AdvisorAgent


logger = logging.getLogger(__name__)


HUMAN_PLAYER_ID = "human"


class Table:
    """
    One poker table and its sequence of hands.

    Attributes:
        players: Seated players in seat order, with chips as of the last
            finished hand
        blinds: Blind amounts used for every hand
        agents: Decision maker per player id
        state: Latest GameState, None before the first hand
        history: Summaries of completed hands, oldest first
    """

    def __init__(
        self,
        players: Sequence[Player],
        blinds: Optional[BlindStructure] = None,
        agents: Optional[Dict[str, BaseAgent]] = None,
        rng: Optional[random.Random] = None,
        table_id: Optional[str] = None,
    ):
        """
        Seat the players.

        Autonomous players without an explicit agent get an AdvisorAgent.

        Raises:
            ValueError: For an invalid player count or duplicate player ids
        """
        validate_table_size(len(players))
        ids = [p.player_id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError("Player ids must be unique")

        self.table_id = table_id
        self.players: List[Player] = list(players)
        self.blinds = blinds or DEFAULT_BLINDS
        self.rng = rng
        self.state: Optional[GameState] = None
        self.history: List[HandSummary] = []

        self.agents: Dict[str, BaseAgent] = dict(agents or {})
        for player in self.players:
            if player.player_id in self.agents:
                continue
            if player.is_human:
                self.agents[player.player_id] = HumanAgent(player.player_id, player.name)
            else:
                self.agents[player.player_id] = AdvisorAgent(
                    player.player_id, player.name, rng=self._agent_rng()
                )

    def _agent_rng(self) -> Optional[random.Random]:
        if self.rng is None:
            return None
        return random.Random(self.rng.getrandbits(32))

    @property
    def hand_number(self) -> int:
        return self.state.hand_number if self.state is not None else 0

    @property
    def current_player(self) -> Optional[Player]:
        if not self.is_hand_running():
            return None
        return current_player(self.state)

    @property
    def human_player_ids(self) -> List[str]:
        return [p.player_id for p in self.players if p.is_human]

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.state is not None and not self.state.hand_over

    def is_game_running(self) -> bool:
        """Check if another hand can be dealt (at least 2 players with chips)."""
        return sum(1 for p in self.players if p.chips > 0) >= MIN_PLAYERS

    def start_hand(self) -> GameState:
        """
        Deal the next hand, rotating the button from the previous one.

        Raises:
            HandStateError: If a hand is running or too few players have chips
        """
        if self.is_hand_running():
            raise HandStateError("A hand is already in progress")
        if not self.is_game_running():
            raise HandStateError("Cannot start hand: not enough players with chips")

        self.state = start_hand(self.players, self.blinds, previous=self.state, rng=self.rng)
        for agent in self.agents.values():
            agent.on_hand_start(self.state.hand_number)

        if self.state.hand_over:
            self._finish_hand()
        return self.state

    def legal_actions(self) -> List[LegalAction]:
        if not self.is_hand_running():
            return []
        return legal_actions(self.state)

    def take_action(
        self,
        action_type: Union[ActionType, str],
        amount: Optional[int] = None,
        player_id: Optional[str] = None,
    ) -> GameState:
        """
        Apply an action for the player to act.

        Args:
            action_type: Action to take
            amount: Chips for BET/RAISE
            player_id: If given, the action is refused unless it is this
                player's turn

        Raises:
            HandStateError: If no hand is running
            IllegalActionError: If the action is not legal or out of turn
        """
        if not self.is_hand_running():
            raise HandStateError("No hand in progress")

        actor = current_player(self.state)
        if player_id is not None and actor.player_id != player_id:
            raise IllegalActionError(f"Not {player_id}'s turn")

        self.state = apply(self.state, action_type, amount)
        if self.state.hand_over:
            self._finish_hand()
        return self.state

    def play_autonomous(self) -> GameState:
        """
        Let agents act until a human seat must act or the hand ends.

        Returns:
            The latest state (None only if no hand was ever dealt)
        """
        while self.is_hand_running():
            actor = current_player(self.state)
            if actor.is_human:
                break
            action_type, amount = self.agents[actor.player_id].act(self.state)
            logger.debug(f"{actor.name} plays {action_type.value} {amount}")
            self.take_action(action_type, amount)
        return self.state

    def recommendation(self) -> Optional[Recommendation]:
        """Advice for the player to act, or None when no hand is running."""
        if not self.is_hand_running():
            return None
        advice = recommend(self.state)
        logger.debug(f"Advice for {self.current_player.name}: {format_recommendation(advice)}")
        return advice

    def analysis(self) -> Optional[Dict[str, Any]]:
        """Payoff matrix and equilibrium summary for the player to act."""
        if not self.is_hand_running():
            return None
        matrix = payoff_matrix(self.state)
        return {
            "player_id": self.current_player.player_id,
            "payoff_matrix": {
                action.label: {archetype.value: payoff for archetype, payoff in row.items()}
                for action, row in matrix.items()
            },
            "equilibrium": equilibrium(matrix).to_dict(),
        }

    def summary(self) -> Optional[HandSummary]:
        """Summary of the most recent completed hand."""
        return self.history[-1] if self.history else None

    def view(self, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """Renderable state; seats only when no hand has been dealt yet."""
        if self.state is None:
            view: Dict[str, Any] = {
                "hand_number": 0,
                "players": [
                    dict(p.to_dict(hide_cards=True), seat=seat)
                    for seat, p in enumerate(self.players)
                ],
                "hand_over": True,
            }
        else:
            view = table_view(self.state, viewer_id)
        view["table_id"] = self.table_id
        view["game_running"] = self.is_game_running()
        return view

    def _finish_hand(self) -> None:
        # Chips and identities carry into the next hand
        self.players = list(self.state.players)
        summary = hand_summary(self.state)
        self.history.append(summary)
        for agent in self.agents.values():
            agent.on_hand_end(summary)
        logger.info(
            f"Hand #{summary.hand_number} complete: winners {summary.winner_ids}, "
            f"pot {summary.pot}"
        )


def create_table(
    num_ai_players: int = DEFAULT_AI_PLAYERS,
    buy_in: int = DEFAULT_BUY_IN,
    small_blind: int = DEFAULT_SMALL_BLIND,
    big_blind: int = DEFAULT_BIG_BLIND,
    human_name: str = DEFAULT_HUMAN_NAME,
    seed: Optional[int] = None,
    table_id: Optional[str] = None,
) -> Table:
    """
    Seat one human and ``num_ai_players`` autonomous players.

    Args:
        num_ai_players: Autonomous opponents
        buy_in: Starting chips for every player
        small_blind: Small blind amount
        big_blind: Big blind amount
        human_name: Display name of the human seat
        seed: Seed for shuffling and agent randomness; random when omitted
        table_id: Identifier reported in views

    Raises:
        ValueError: For invalid blinds or table size
    """
    blinds = BlindStructure(small_blind, big_blind)
    players = [Player(HUMAN_PLAYER_ID, human_name, buy_in, PlayerType.HUMAN)]
    players.extend(
        Player(f"ai-{i}", f"AI {i}", buy_in, PlayerType.AUTONOMOUS)
        for i in range(1, num_ai_players + 1)
    )
    rng = random.Random(seed) if seed is not None else None
    return Table(players, blinds=blinds, rng=rng, table_id=table_id)
