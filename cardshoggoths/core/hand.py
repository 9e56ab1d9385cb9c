"""
Hand Evaluation for five-card draw.

Evaluates exactly 5 cards into a HandValue: a hand category plus the
grouped values and kickers that break ties between hands of the same
category.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
9. Straight Flush: 5 consecutive cards of same suit
8. Four of a Kind: 4 cards of same rank
7. Full House: 3 of a kind + pair
6. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
4. Three of a Kind: 3 cards of same rank
3. Two Pair: 2 different pairs
2. One Pair: 2 cards of same rank
1. High Card: No made hand

Tie-break order: category, primary grouped value (quad/trip/pair rank or
straight high card), secondary grouped value (quad kicker, full house pair,
low pair), then kickers from highest to lowest.

Note: Ace plays low in the A-2-3-4-5 straight (wheel), which is the lowest
straight with a high card of 5.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum, IntEnum
from collections import Counter
import logging

from cardshoggoths.core.card import Card, Rank
from cardshoggoths.core.rules import HAND_SIZE


logger = logging.getLogger(__name__)


class HandRank(IntEnum):
    """Hand categories from best (highest value) to worst (lowest value)."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

WHEEL_VALUES = [14, 5, 4, 3, 2]


class HandResult(Enum):
    """Outcome of comparing two hands."""
    HAND1_WINS = 1
    HAND2_WINS = -1
    TIE = 0


@dataclass(frozen=True)
class HandValue:
    """
    The evaluated value of a 5-card hand.

    Attributes:
        rank: Hand category
        primary: Main grouped value (quad/trip/pair rank, straight high card)
        secondary: Second grouped value (quad kicker, full house pair, low pair)
        kickers: Remaining tie-breakers, highest first
    """
    rank: HandRank
    primary: int = 0
    secondary: int = 0
    kickers: Tuple[int, ...] = ()

    @property
    def key(self) -> Tuple[int, int, int, Tuple[int, ...]]:
        """Comparison key; a larger key is a better hand."""
        return (int(self.rank), self.primary, self.secondary, self.kickers)

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]


def evaluate_hand(cards: Sequence[Card]) -> HandValue:
    """
    Evaluate a 5-card poker hand.

    Args:
        cards: Exactly 5 Card objects

    Returns:
        HandValue for the hand. Input of any other length yields a bare
        HIGH_CARD value with no kickers.
    """
    if len(cards) != HAND_SIZE:
        logger.warning(f"Evaluating malformed hand of {len(cards)} cards as High Card")
        return HandValue(HandRank.HIGH_CARD)

    values = sorted((c.value for c in cards), reverse=True)

    is_flush = len({c.suit for c in cards}) == 1
    is_straight, straight_high = _check_straight(values)

    value_counts = Counter(values)
    counts = sorted(value_counts.values(), reverse=True)

    if is_straight and is_flush:
        if straight_high == Rank.ACE:
            return HandValue(HandRank.ROYAL_FLUSH, primary=straight_high)
        return HandValue(HandRank.STRAIGHT_FLUSH, primary=straight_high)

    if counts == [4, 1]:
        return HandValue(
            HandRank.FOUR_OF_A_KIND,
            primary=_values_with_count(value_counts, 4)[0],
            secondary=_values_with_count(value_counts, 1)[0],
        )

    if counts == [3, 2]:
        return HandValue(
            HandRank.FULL_HOUSE,
            primary=_values_with_count(value_counts, 3)[0],
            secondary=_values_with_count(value_counts, 2)[0],
        )

    if is_flush:
        return HandValue(HandRank.FLUSH, kickers=tuple(values))

    if is_straight:
        return HandValue(HandRank.STRAIGHT, primary=straight_high)

    if counts == [3, 1, 1]:
        return HandValue(
            HandRank.THREE_OF_A_KIND,
            primary=_values_with_count(value_counts, 3)[0],
            kickers=tuple(_values_with_count(value_counts, 1)),
        )

    if counts == [2, 2, 1]:
        high_pair, low_pair = _values_with_count(value_counts, 2)
        return HandValue(
            HandRank.TWO_PAIR,
            primary=high_pair,
            secondary=low_pair,
            kickers=tuple(_values_with_count(value_counts, 1)),
        )

    if counts == [2, 1, 1, 1]:
        return HandValue(
            HandRank.ONE_PAIR,
            primary=_values_with_count(value_counts, 2)[0],
            kickers=tuple(_values_with_count(value_counts, 1)),
        )

    return HandValue(HandRank.HIGH_CARD, kickers=tuple(values))


def _check_straight(values: List[int]) -> Tuple[bool, int]:
    """
    Check if values (sorted descending) form a straight.

    Returns:
        Tuple of (is_straight, high_card_value); the wheel is 5-high.
    """
    if len(set(values)) != HAND_SIZE:
        return False, 0

    if values[0] - values[4] == 4:
        return True, values[0]

    if values == WHEEL_VALUES:
        return True, 5

    return False, 0


def _values_with_count(value_counts: Counter, count: int) -> List[int]:
    """Values appearing exactly 'count' times, highest first."""
    return sorted((v for v, c in value_counts.items() if c == count), reverse=True)


def compare_values(value1: HandValue, value2: HandValue) -> HandResult:
    """Compare two evaluated hands."""
    if value1.key > value2.key:
        return HandResult.HAND1_WINS
    if value1.key < value2.key:
        return HandResult.HAND2_WINS
    return HandResult.TIE


def compare_hands(hand1: Sequence[Card], hand2: Sequence[Card]) -> HandResult:
    """
    Compare two 5-card hands.

    Returns:
        HAND1_WINS, HAND2_WINS or TIE
    """
    return compare_values(evaluate_hand(hand1), evaluate_hand(hand2))


def get_hand_name(rank: HandRank) -> str:
    """Human-readable name of a hand category."""
    return HAND_RANK_NAMES.get(rank, "Unknown")


def describe_hand(value: HandValue) -> str:
    """Get a human-readable description of an evaluated hand."""
    rank = value.rank
    if rank == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    elif rank == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(value.primary)} high"
    elif rank == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_rank_plural(value.primary)}"
    elif rank == HandRank.FULL_HOUSE:
        return (
            f"Full House, {_rank_plural(value.primary)} "
            f"full of {_rank_plural(value.secondary)}"
        )
    elif rank == HandRank.FLUSH:
        return f"Flush, {_rank_name(value.kickers[0])} high"
    elif rank == HandRank.STRAIGHT:
        if value.primary == 5:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(value.primary)} high"
    elif rank == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_rank_plural(value.primary)}"
    elif rank == HandRank.TWO_PAIR:
        return (
            f"Two Pair, {_rank_plural(value.primary)} "
            f"and {_rank_plural(value.secondary)}"
        )
    elif rank == HandRank.ONE_PAIR:
        return f"Pair of {_rank_plural(value.primary)}"
    elif value.kickers:
        return f"High Card, {_rank_name(value.kickers[0])}"
    return "High Card"


def describe_showdown(
    player_hand: Sequence[Card],
    opponent_hand: Sequence[Card],
    opponent_name: str,
) -> Tuple[HandResult, str]:
    """
    Compare the human's hand with the opponent's for display.

    Returns:
        Tuple of (result from the human's side, message)
    """
    player_value = evaluate_hand(player_hand)
    opponent_value = evaluate_hand(opponent_hand)
    result = compare_values(player_value, opponent_value)

    mine = describe_hand(player_value)
    theirs = describe_hand(opponent_value)

    if result == HandResult.HAND1_WINS:
        message = f"You win with {mine}! {opponent_name} had {theirs}."
    elif result == HandResult.HAND2_WINS:
        message = f"{opponent_name} wins with {theirs}! You had {mine}."
    else:
        message = f"It's a tie! Both hands have {mine}."
    return result, message


def _rank_name(value: int) -> str:
    """Get the name of a rank value."""
    names = {
        2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six",
        7: "Seven", 8: "Eight", 9: "Nine", 10: "Ten",
        11: "Jack", 12: "Queen", 13: "King", 14: "Ace",
    }
    return names[value]


def _rank_plural(value: int) -> str:
    name = _rank_name(value)
    return f"{name}es" if name == "Six" else f"{name}s"
