"""
Card Shoggoths - Five-Card Draw against The Ancient One

A heads-up five-card draw poker engine with:
- Deterministic hand evaluation with full tie-break ordering
- A Monte-Carlo discard search and heuristic betting opponent
- A round/betting state machine with JSON-serializable state
- A thin FastAPI host for browser play

Usage:
    from cardshoggoths.core import new_game, evaluate_hand
    from cardshoggoths.agents import ShoggothAgent
"""

__version__ = "0.2.0"

from cardshoggoths.core.card import Card, Deck
from cardshoggoths.core.player import Player, RoundState
from cardshoggoths.core.game import GameState, new_game
from cardshoggoths.core.hand import HandRank, HandValue, evaluate_hand, compare_hands
from cardshoggoths.config import AIConfig, GameConfig

__all__ = [
    "Card",
    "Deck",
    "Player",
    "RoundState",
    "GameState",
    "new_game",
    "HandRank",
    "HandValue",
    "evaluate_hand",
    "compare_hands",
    "AIConfig",
    "GameConfig",
    "__version__",
]
