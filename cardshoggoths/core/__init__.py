"""
Card Shoggoths Core - Pure Python five-card draw game logic

This module contains all game logic without any network dependencies.
"""

from cardshoggoths.core.card import Card, Deck, Rank, Suit
from cardshoggoths.core.hand import (
    HandRank, HandValue, HandResult, evaluate_hand, compare_hands,
)
from cardshoggoths.core.rules import GamePhase, ActionType
from cardshoggoths.core.player import Player, RoundState
from cardshoggoths.core.esp import ESPState
from cardshoggoths.core.game import GameState, ActionResult, new_game

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "HandRank",
    "HandValue",
    "HandResult",
    "evaluate_hand",
    "compare_hands",
    "GamePhase",
    "ActionType",
    "Player",
    "RoundState",
    "ESPState",
    "GameState",
    "ActionResult",
    "new_game",
]
