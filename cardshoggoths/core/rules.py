"""
Five-card draw rules and constants.

A round runs:

1. Ante: both players pay the ante into the pot, five cards each are dealt.
2. Pre-draw betting: the human acts first.
3. Discard: each player exchanges any subset of their five cards once.
4. Post-draw betting: the human acts first again.
5. Showdown: the better hand takes the pot; a tie splits it.

A fold at any point of the hand ends the round in favor of the other player.

Phases serialize to one canonical wire vocabulary. Older saved games used a
few other spellings; those are accepted on load through PHASE_ALIASES only.
"""

from enum import Enum
from typing import Sequence


class GamePhase(str, Enum):
    """Phases of a game session, valued by their wire names."""
    ANTE = "ante"
    PRE_DRAW_BETTING = "bet_pre"
    DISCARD = "discard"
    POST_DRAW_BETTING = "bet_post"
    SHOWDOWN = "showdown"
    COMPLETE = "complete"
    GAME_OVER = "game_over"
    ESP = "esp"


# Legacy spellings found in saved games
PHASE_ALIASES = {
    "deal": GamePhase.ANTE,
    "bet": GamePhase.PRE_DRAW_BETTING,
    "end": GamePhase.COMPLETE,
}

BETTING_PHASES = (GamePhase.PRE_DRAW_BETTING, GamePhase.POST_DRAW_BETTING)

# Phases in which a hand is live and a fold is accepted
IN_HAND_PHASES = (
    GamePhase.PRE_DRAW_BETTING,
    GamePhase.DISCARD,
    GamePhase.POST_DRAW_BETTING,
)

# Phases from which the ESP minigame may start
ESP_ENTRY_PHASES = (GamePhase.COMPLETE, GamePhase.ANTE, GamePhase.GAME_OVER)


class ActionType(str, Enum):
    """Possible betting actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"


# Seats
HUMAN_SEAT = 0
AI_SEAT = 1
FIRST_TO_ACT = HUMAN_SEAT

HUMAN_NAME = "You"
AI_NAME = "The Ancient One"
TIE = "tie"

# Default game settings
DEFAULT_STARTING_SANITY = 100
DEFAULT_ANTE = 10

# Hand evaluation
HAND_SIZE = 5

# ESP minigame
ESP_REWARD = 15
ESP_PENALTY = 5


def parse_phase(text: str) -> GamePhase:
    """
    Parse a phase from its wire name or a legacy alias.

    Raises:
        ValueError: For unknown names.
    """
    if text in PHASE_ALIASES:
        return PHASE_ALIASES[text]
    try:
        return GamePhase(text)
    except ValueError:
        raise ValueError(f"Unknown game phase: {text}") from None


def parse_action(action) -> ActionType:
    """
    Parse an action from an ActionType or its (case-insensitive) name.

    Raises:
        ValueError: For unknown actions.
    """
    if isinstance(action, ActionType):
        return action
    return ActionType(str(action).strip().lower())


def betting_round_closed(
    phase: GamePhase,
    bets: Sequence[int],
    actor: int,
    action: ActionType,
) -> bool:
    """
    Decide whether an action just taken closes the betting round.

    Heads-up, the first seat always opens each betting round, so:
    - a call that leaves both contributions equal closes the round;
    - a check closes the round only when made by the second seat, with
      contributions already equal;
    - bets, raises and a first-seat check pass the turn instead.

    Args:
        phase: Phase the action was taken in
        bets: Each seat's contribution this betting round, after the action
        actor: Seat that acted
        action: The action taken
    """
    if phase not in BETTING_PHASES:
        return False
    if action == ActionType.CALL:
        return bets[0] == bets[1]
    if action == ActionType.CHECK:
        return actor != FIRST_TO_ACT and bets[0] == bets[1]
    return False
