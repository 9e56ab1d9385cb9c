"""
Card and Deck classes for five-card draw.

Ranks carry their evaluator value directly (2..14, ace high), so hand
evaluation never needs a lookup table. The wire format mirrors what the
browser client stores: {"suit": "spades", "rank": "ace"}.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks, valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# Wire names
SUIT_NAMES = {
    Suit.SPADES: "spades",
    Suit.HEARTS: "hearts",
    Suit.DIAMONDS: "diamonds",
    Suit.CLUBS: "clubs",
}

RANK_NAMES = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "jack",
    Rank.QUEEN: "queen",
    Rank.KING: "king",
    Rank.ACE: "ace",
}

SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
NAME_TO_SUIT = {v: k for k, v in SUIT_NAMES.items()}
NAME_TO_RANK = {v: k for k, v in RANK_NAMES.items()}
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN  # Also accept "10"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - Short notation: Card.from_string("As"), Card.from_string("10h")
    - Wire dicts: Card.from_dict({"suit": "spades", "rank": "ace"})
    """
    rank: Rank
    suit: Suit

    def __post_init__(self):
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from short notation.

        Accepts "As", "Kh", "Td", "10d", "2c" and symbol forms like "K♥".
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s[:2] == "10":
            rank_part, suit_part = "10", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Card:
        """Create a card from its wire form."""
        try:
            return cls(NAME_TO_RANK[str(data["rank"])], NAME_TO_SUIT[data["suit"]])
        except KeyError as e:
            raise ValueError(f"Invalid card data: {data}") from e

    def to_dict(self) -> Dict[str, str]:
        """Convert to the wire form used for persistence and the client."""
        return {
            "suit": SUIT_NAMES[self.suit],
            "rank": RANK_NAMES[self.rank],
        }

    @property
    def value(self) -> int:
        """Numeric evaluator value (2-14)."""
        return int(self.rank)

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Th'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    A 52-card deck consumed from the front.

    A card dealt from the deck never comes back; build a new Deck for a new
    round.

    Usage:
        deck = Deck(rng=random.Random(7))
        hand = deck.deal(5)
        deck.replace_cards(hand, [0, 3])
    """

    def __init__(
        self,
        shuffle: bool = True,
        rng: Optional[random.Random] = None,
        cards: Optional[Iterable[Card]] = None,
    ):
        """
        Initialize a deck.

        Args:
            shuffle: Shuffle the cards on creation
            rng: Random source for shuffling (module random if omitted)
            cards: Explicit remaining cards, used when restoring saved state
        """
        self._rng = rng or random
        if cards is not None:
            self._cards: List[Card] = list(cards)
        else:
            self._cards = full_deck()
            if shuffle:
                self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        self._rng.shuffle(self._cards)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            ValueError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self._cards)} remain")

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def replace_cards(self, hand: List[Card], indices: Iterable[int]) -> None:
        """Replace hand[i] with a fresh card for every index, in the given order."""
        for i in indices:
            hand[i] = self.deal_one()

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        """Copy of the remaining cards, top first."""
        return list(self._cards)

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]], rng: Optional[random.Random] = None) -> Deck:
        return cls(shuffle=False, rng=rng, cards=[Card.from_dict(c) for c in data])

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def unknown_cards(exclusions: Iterable[Card]) -> List[Card]:
    """Every card of a full deck not in exclusions, in fixed order."""
    excluded = set(exclusions)
    return [card for card in full_deck() if card not in excluded]


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a space-separated string.

    Example:
        parse_cards("As Kh 10d 2c 2s")
    """
    return [Card.from_string(s) for s in cards_str.split()]
