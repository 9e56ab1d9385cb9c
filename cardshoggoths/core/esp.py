"""
ESP training minigame.

Between hands the player may test their "sight": two rows of five cards are
dealt face down from a themed deck built from a few ranks, and the player
picks one card from each row. Matching ranks restore sanity; a miss costs
some. Every deal contains at least one matching pair.
"""

from __future__ import annotations
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from cardshoggoths.core.card import Card, Rank, Suit
from cardshoggoths.core.rules import HAND_SIZE


# Each theme deals from a subset of ranks
ESP_THEMES = {
    "primes": (Rank.TWO, Rank.THREE, Rank.FIVE, Rank.SEVEN),
    "faces": (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE),
    "odds": (Rank.THREE, Rank.FIVE, Rank.SEVEN, Rank.NINE, Rank.JACK, Rank.KING),
    "evens": (Rank.TWO, Rank.FOUR, Rank.SIX, Rank.EIGHT, Rank.TEN, Rank.QUEEN),
}

ESP_THEME_MESSAGES = {
    "primes": "The primes align... 2, 3, 5, 7...",
    "faces": "Royal visions emerge...",
    "odds": "Odd energies swirl...",
    "evens": "Even patterns crystallize...",
}


@dataclass
class ESPState:
    """
    State of one ESP round.

    Attributes:
        hand1: Top row (opponent's side)
        hand2: Bottom row (player's side)
        match_index1: Index in hand1 of a card known to have a match
        match_index2: Index in hand2 of that match
        attempts: Number of guesses made
        theme: Theme name, a key of ESP_THEMES
        start_time: Unix timestamp when the round started
    """
    hand1: List[Card] = field(default_factory=list)
    hand2: List[Card] = field(default_factory=list)
    match_index1: int = 0
    match_index2: int = 0
    attempts: int = 0
    theme: str = "primes"
    start_time: int = 0

    def is_match(self, index1: int, index2: int) -> bool:
        return self.hand1[index1].rank == self.hand2[index2].rank

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand1": [c.to_dict() for c in self.hand1],
            "hand2": [c.to_dict() for c in self.hand2],
            "match_index1": self.match_index1,
            "match_index2": self.match_index2,
            "attempts": self.attempts,
            "theme": self.theme,
            "start_time": self.start_time,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Information the player may see: the theme and the attempts so far."""
        return {
            "theme": self.theme,
            "attempts": self.attempts,
            "cards_per_row": len(self.hand1),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ESPState:
        return cls(
            hand1=[Card.from_dict(c) for c in data["hand1"]],
            hand2=[Card.from_dict(c) for c in data["hand2"]],
            match_index1=data["match_index1"],
            match_index2=data["match_index2"],
            attempts=data.get("attempts", 0),
            theme=data["theme"],
            start_time=data.get("start_time", 0),
        )


def deal_esp(rng: Optional[random.Random] = None) -> ESPState:
    """Deal a new ESP round with a random theme and a guaranteed match."""
    rng = rng or random
    theme = rng.choice(sorted(ESP_THEMES))

    deck = [Card(rank, suit) for suit in Suit for rank in ESP_THEMES[theme]]
    rng.shuffle(deck)
    hand1, hand2, rest = deck[:HAND_SIZE], deck[HAND_SIZE:2 * HAND_SIZE], deck[2 * HAND_SIZE:]

    match = _find_match(hand1, hand2)
    if match is None:
        match = _force_match(hand1, hand2, rest, rng)

    return ESPState(
        hand1=hand1,
        hand2=hand2,
        match_index1=match[0],
        match_index2=match[1],
        theme=theme,
        start_time=int(time.time()),
    )


def _find_match(hand1: List[Card], hand2: List[Card]) -> Optional[Tuple[int, int]]:
    for i, a in enumerate(hand1):
        for j, b in enumerate(hand2):
            if a.rank == b.rank:
                return i, j
    return None


def _force_match(
    hand1: List[Card],
    hand2: List[Card],
    rest: List[Card],
    rng,
) -> Tuple[int, int]:
    """
    Swap an undealt card into hand2 so it matches a card in hand1.

    With no match dealt, at least one rank in hand1 still has a copy left
    in the undealt cards (five cards cannot exhaust every rank they hold).
    """
    candidates = [
        i for i, card in enumerate(hand1)
        if any(c.rank == card.rank for c in rest)
    ]
    index1 = rng.choice(candidates)
    index2 = rng.randrange(len(hand2))
    replacement = next(c for c in rest if c.rank == hand1[index1].rank)
    hand2[index2] = replacement
    return index1, index2
