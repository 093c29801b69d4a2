"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from pokeradvisor.core.rules import (
    DEFAULT_AI_PLAYERS, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND,
    DEFAULT_HUMAN_NAME, MAX_PLAYERS,
)


# ============= Request Schemas =============

class CreateTableRequest(BaseModel):
    """Request to seat a new table: one human plus autonomous players."""
    num_ai_players: int = Field(ge=1, le=MAX_PLAYERS - 1, default=DEFAULT_AI_PLAYERS)
    buy_in: int = Field(gt=0, default=DEFAULT_BUY_IN)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    human_name: str = Field(min_length=1, max_length=32, default=DEFAULT_HUMAN_NAME)
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible table")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: fold, check, call, bet, raise")
    amount: Optional[int] = Field(default=None, ge=0, description="Chips to put in for bet/raise")
    player_id: Optional[str] = Field(default=None, description="Acting player; defaults to the player to act")


# ============= Response Schemas =============

class LegalActionSchema(BaseModel):
    """Available action with its amount bounds."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class LegalActionsSchema(BaseModel):
    player_id: Optional[str] = None
    actions: List[LegalActionSchema] = []


class AlternativeSchema(BaseModel):
    action: str
    amount: int
    expected_value: float


class RecommendationSchema(BaseModel):
    """Advice for the player to act."""
    action: str
    amount: int
    confidence: float = Field(ge=0, le=1)
    reasoning: str
    expected_value: float
    risk: str
    alternatives: List[AlternativeSchema] = []
    hand_strength: float
    mixed_strategy: Dict[str, float] = {}


class HandSummarySchema(BaseModel):
    """Completed-hand record."""
    hand_number: int
    player_count: int
    pot: int
    winner_ids: List[str]
    players: List[Dict[str, Any]]
    actions: List[Dict[str, Any]]


class TableCreatedSchema(BaseModel):
    table_id: str
    player_ids: List[str]
    human_player_id: str
    small_blind: int
    big_blind: int
    buy_in: int
