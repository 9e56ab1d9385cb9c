"""
Base Agent Interface for Card Shoggoths.

An agent makes the two decisions the computer opponent faces in a round of
five-card draw: which cards to exchange in the discard round, and what to do
when it holds the turn in a betting round.

Usage:
    class MyAgent(BaseAgent):
        def choose_discard(self, hand):
            return [4]

        def decide_action(self, hand, game):
            return ActionType.CHECK, 0
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple, TYPE_CHECKING

from cardshoggoths.core.card import Card
from cardshoggoths.core.rules import ActionType

if TYPE_CHECKING:
    from cardshoggoths.core.game import GameState


class BaseAgent(ABC):
    """
    Abstract base class for opponent agents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: str = "Agent"):
        self.name = name

    @abstractmethod
    def choose_discard(self, hand: Sequence[Card]) -> List[int]:
        """
        Choose which cards to exchange.

        Args:
            hand: The agent's 5 cards

        Returns:
            Indices into hand to discard (0 to 5 of them, ascending)
        """
        pass

    @abstractmethod
    def decide_action(self, hand: Sequence[Card], game: GameState) -> Tuple[ActionType, int]:
        """
        Choose a betting action.

        The game is passed read-only; the state machine validates and applies
        the returned action, degrading it if it is not feasible.

        Args:
            hand: The agent's 5 cards
            game: Current game state

        Returns:
            Tuple of (action, amount). The amount is the bet size for BET and
            the raise increment for RAISE; it is ignored otherwise.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
