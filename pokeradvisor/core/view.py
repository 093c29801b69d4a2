"""
Boundary views of a GameState.

table_view() is what a renderer needs after every transition; hand_summary()
is the flattened record a store keeps once the hand is over. Neither knows
anything about transport or storage schemas.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field

from pokeradvisor.core.game import (
    GameState, current_player, highest_bet, legal_actions,
)
from pokeradvisor.core.exceptions import HandStateError


@dataclass
class HandSummary:
    """Completed-hand record for persistence."""
    hand_number: int
    pot: int
    winner_ids: List[str]
    players: List[Dict[str, Any]] = field(default_factory=list)
    actions: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def player_count(self) -> int:
        return len(self.players)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand_number": self.hand_number,
            "player_count": self.player_count,
            "pot": self.pot,
            "winner_ids": list(self.winner_ids),
            "players": [dict(p) for p in self.players],
            "actions": [dict(a) for a in self.actions],
        }


def hand_summary(state: GameState) -> HandSummary:
    """
    Flatten a finished hand for storage.

    Raises:
        HandStateError: If the hand is still running
    """
    if not state.hand_over:
        raise HandStateError("Hand is still in progress")

    return HandSummary(
        hand_number=state.hand_number,
        pot=state.pot,
        winner_ids=list(state.winners),
        players=[
            {"id": p.player_id, "name": p.name, "chips": p.chips}
            for p in state.players
        ],
        actions=[
            {
                "player_id": record.player_id,
                "action": record.action_type.value,
                "amount": record.amount,
            }
            for record in state.action_log
        ],
    )


def table_view(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Everything needed to draw the table.

    Args:
        state: Current hand state
        viewer_id: Player whose own hole cards are always shown

    Returns:
        Game state dictionary
    """
    actor = current_player(state)

    players = []
    for seat, player in enumerate(state.players):
        show = state.is_revealed(player) or player.player_id == viewer_id
        entry = player.to_dict(hide_cards=not show)
        entry["seat"] = seat
        entry["revealed"] = player.player_id in state.revealed
        players.append(entry)

    return {
        "hand_number": state.hand_number,
        "street": state.street.value,
        "pot": state.pot,
        "highest_bet": highest_bet(state),
        "board": [c.to_dict() for c in state.community_cards],
        "dealer_index": state.dealer_index,
        "small_blind_index": state.small_blind_index,
        "big_blind_index": state.big_blind_index,
        "small_blind": state.small_blind_amount,
        "big_blind": state.big_blind_amount,
        "current_player": actor.player_id if actor else None,
        "players": players,
        "legal_actions": [a.to_dict() for a in legal_actions(state)],
        "hand_over": state.hand_over,
        "winners": list(state.winners),
        "payouts": dict(state.payouts),
        "hand_evaluations": {
            pid: evaluation.to_dict()
            for pid, evaluation in state.hand_evaluations.items()
        },
        "actions": [record.to_dict() for record in state.action_log],
    }
