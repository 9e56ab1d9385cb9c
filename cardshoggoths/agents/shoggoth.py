"""
The Ancient One: the computer opponent.

Discards are chosen by brute force. Every one of the 2^5 = 32 keep/discard
subsets of the hand is scored: keeping all five is scored exactly, any other
subset by averaging the evaluated result of refilling the hand from a freshly
shuffled copy of the 47 unseen cards, over `discard_simulations` trials. The
subset with the best average wins; ties go to the first subset in bitmask
order (mask 0, keep everything, is the baseline).

Betting is a lookup, not a simulation: the hand category gives a rough win
probability, scaled by the configured courage and compared against pot odds.
"""

from __future__ import annotations
import random
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING
import logging

from cardshoggoths.agents.base import BaseAgent
from cardshoggoths.config import AIConfig
from cardshoggoths.core.card import Card, unknown_cards
from cardshoggoths.core.hand import HandRank, HandValue, evaluate_hand
from cardshoggoths.core.rules import ActionType, AI_NAME, AI_SEAT, HAND_SIZE

if TYPE_CHECKING:
    from cardshoggoths.core.game import GameState


logger = logging.getLogger(__name__)

# Kicker weights decay geometrically in base 15 (card values top out at 14),
# so no kicker sequence can outweigh one step of the secondary value.
KICKER_BASE = 15.0

WIN_PROBABILITY_CAP = 0.99
VALUE_BET_THRESHOLD = 0.6
RAISE_THRESHOLD = 0.8
SAFETY_MARGIN = 0.1
BLUFF_BET_RATE = 0.1
RAISE_RATE = 0.7
BLUFF_CALL_RATE = 0.05


def score_hand(value: HandValue) -> float:
    """
    Convert a HandValue into a float that can be averaged over simulations.

    rank*1e6 + primary*1e4 + secondary*1e2 + sum(kicker_i / 15^(i+1))
    """
    score = int(value.rank) * 1_000_000.0
    score += value.primary * 10_000.0
    score += value.secondary * 100.0

    divisor = 1.0
    for kicker in value.kickers:
        divisor *= KICKER_BASE
        score += kicker / divisor
    return score


def estimate_win_probability(value: HandValue) -> float:
    """Rough heads-up win probability from the hand category alone."""
    if value.rank == HandRank.HIGH_CARD:
        # Face card high
        return 0.2 if value.kickers and value.kickers[0] > 10 else 0.1
    if value.rank == HandRank.ONE_PAIR:
        return 0.55 if value.primary > 10 else 0.4
    if value.rank == HandRank.TWO_PAIR:
        return 0.7
    if value.rank == HandRank.THREE_OF_A_KIND:
        return 0.85
    return 0.95


class ShoggothAgent(BaseAgent):
    """
    Monte-Carlo discard search plus heuristic betting.

    Each agent owns its random source, so its draws never interleave with
    another agent's or the deck's.
    """

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        rng: Optional[random.Random] = None,
        name: str = AI_NAME,
    ):
        """
        Initialize the agent.

        Args:
            config: Tuning values (defaults if omitted)
            rng: Random source for simulations and bluffs
            name: Display name
        """
        super().__init__(name)
        self.config = config or AIConfig()
        self.rng = rng or random.Random()

    def choose_discard(self, hand: Sequence[Card]) -> List[int]:
        """Return the discard indices with the best expected score."""
        n = len(hand)
        base_unknown = unknown_cards(hand)

        best_discards: List[int] = []
        best_score = -1.0

        for mask in range(1 << n):
            kept = [hand[i] for i in range(n) if not (mask >> i) & 1]
            discards = [i for i in range(n) if (mask >> i) & 1]

            needed = HAND_SIZE - len(kept)
            if needed == 0:
                score = score_hand(evaluate_hand(kept))
            elif needed > len(base_unknown):
                continue
            else:
                score = self._simulate(kept, needed, base_unknown)

            if score > best_score:
                best_score = score
                best_discards = discards

        logger.debug(
            f"{self.name} discards {best_discards} from "
            f"{' '.join(c.short_str for c in hand)} (expected {best_score:.1f})"
        )
        return best_discards

    def _simulate(self, kept: List[Card], needed: int, unknown: List[Card]) -> float:
        """Average score of refilling kept with random unseen cards."""
        trials = self.config.discard_simulations
        if trials <= 0:
            return -1.0

        total = 0.0
        sim_deck = list(unknown)
        for _ in range(trials):
            self.rng.shuffle(sim_deck)
            total += score_hand(evaluate_hand(kept + sim_deck[:needed]))
        return total / trials

    def decide_action(self, hand: Sequence[Card], game: GameState) -> Tuple[ActionType, int]:
        """Pick a betting action from hand strength, courage and pot odds."""
        courage = self.config.courage
        win_prob = min(
            estimate_win_probability(evaluate_hand(hand)) * courage,
            WIN_PROBABILITY_CAP,
        )

        call_amount = game.amount_to_call(AI_SEAT)

        if call_amount <= 0:
            if win_prob > VALUE_BET_THRESHOLD:
                action = (ActionType.BET, self.config.value_bet)
            elif self.rng.random() < BLUFF_BET_RATE * courage:
                action = (ActionType.BET, self.config.bluff_bet)
            else:
                action = (ActionType.CHECK, 0)
        else:
            pot_odds = call_amount / (game.pot + call_amount)
            if win_prob > pot_odds + SAFETY_MARGIN:
                if win_prob > RAISE_THRESHOLD and self.rng.random() < RAISE_RATE * courage:
                    action = (ActionType.RAISE, self.config.raise_amount)
                else:
                    action = (ActionType.CALL, 0)
            elif self.rng.random() < BLUFF_CALL_RATE * courage:
                action = (ActionType.CALL, 0)
            else:
                action = (ActionType.FOLD, 0)

        logger.debug(
            f"{self.name} win_prob={win_prob:.2f} to_call={call_amount} -> "
            f"{action[0].value} {action[1]}"
        )
        return action
