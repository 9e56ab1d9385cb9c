"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class DealRequest(BaseModel):
    """Request to start a round."""
    ante: Optional[int] = Field(default=None, ge=0, description="Ante per player; server default if omitted")


class ActionRequest(BaseModel):
    """Request to take a betting action."""
    action: str = Field(..., min_length=1, description="Action: fold, check, call, bet, raise")
    amount: int = Field(default=0, ge=0, description="Bet size for bet, increment for raise")


class DiscardRequest(BaseModel):
    """Request to exchange cards."""
    indices: List[int] = Field(default_factory=list, max_length=5)


class ESPGuessRequest(BaseModel):
    """Request to guess one card from each ESP row."""
    index1: int = Field(ge=0, le=4)
    index2: int = Field(ge=0, le=4)


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    suit: str
    rank: str


class PlayerPublicSchema(BaseModel):
    """Public player information (visible to both seats)."""
    name: str
    is_ai: bool
    sanity: int
    bet: int
    folded: bool
    discarded: bool


class PublicInfoSchema(BaseModel):
    """Public game state information."""
    phase: str
    pot: int
    current_bet: int
    turn: str
    last_action: str
    winner: str
    players: List[PlayerPublicSchema]
    deck_remaining: int


class ESPPublicSchema(BaseModel):
    """ESP round information shown to the player."""
    theme: str
    attempts: int
    cards_per_row: int


class PrivateInfoSchema(BaseModel):
    """Information for the human player."""
    hand: List[CardSchema] = []
    amount_to_call: int = 0
    available_moves: List[str] = []
    can_discard: bool = False
    can_showdown: bool = False
    can_start_esp: bool = False
    opponent_hand: Optional[List[CardSchema]] = None
    esp: Optional[ESPPublicSchema] = None


class GameStateSchema(BaseModel):
    """Complete game state as seen by the human."""
    public_info: PublicInfoSchema
    private_info: PrivateInfoSchema


class ShowdownSchema(BaseModel):
    """Showdown result plus the state after it."""
    winner: str
    message: str
    state: GameStateSchema


class ESPGuessSchema(BaseModel):
    """Outcome of an ESP guess."""
    correct: bool
    sanity_change: int
    message: str
    state: GameStateSchema


class ErrorSchema(BaseModel):
    """Error response."""
    detail: str
