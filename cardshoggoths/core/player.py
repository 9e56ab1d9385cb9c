"""
Player identity and per-round state.

A Player lives for the whole session and carries its sanity (chip stack)
from round to round. A RoundState holds everything that resets each round:
the hand, the amount wagered in the current betting round, and the fold and
discard flags. GameState keeps one RoundState per Player, index-aligned.
"""

from __future__ import annotations
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from cardshoggoths.core.card import Card


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        name: Display name
        is_ai: True for the computer opponent
        sanity: Chip stack; must stay nonnegative to keep playing
    """
    name: str
    is_ai: bool = False
    sanity: int = 0

    def pay(self, amount: int) -> None:
        """Deduct sanity. Callers check affordability first."""
        self.sanity -= amount

    def can_afford(self, amount: int) -> bool:
        return self.sanity >= amount

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "is_ai": self.is_ai, "sanity": self.sanity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        return cls(name=data["name"], is_ai=data["is_ai"], sanity=data["sanity"])

    def __str__(self) -> str:
        return f"{self.name} ({self.sanity} sanity)"


@dataclass
class RoundState:
    """
    Transient per-round state for one player.

    Attributes:
        hand: The player's cards (5 once dealt)
        bet: Amount put in during the current betting round
        folded: Has folded this round
        discarded: Has exchanged cards this round
    """
    hand: List[Card] = field(default_factory=list)
    bet: int = 0
    folded: bool = False
    discarded: bool = False

    def reset(self, hand: Optional[List[Card]] = None) -> None:
        """Reset for a new round, optionally with a fresh hand."""
        self.hand = list(hand) if hand else []
        self.bet = 0
        self.folded = False
        self.discarded = False

    def to_dict(self, hide_cards: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, omit the hand
        """
        result: Dict[str, Any] = {
            "bet": self.bet,
            "folded": self.folded,
            "discarded": self.discarded,
        }
        if not hide_cards:
            result["hand"] = [card.to_dict() for card in self.hand]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RoundState:
        return cls(
            hand=[Card.from_dict(c) for c in data.get("hand", [])],
            bet=data.get("bet", 0),
            folded=data.get("folded", False),
            discarded=data.get("discarded", False),
        )
