"""
Configuration for the engine and its opponent.

Both configs are plain values. The host builds them once (usually from the
environment) and passes them to new_game / ShoggothAgent; nothing in the
engine reads the environment on its own.

Environment variables:
    AI_COURAGE               win-probability multiplier (>1 aggressive)
    AI_DISCARD_SIMULATIONS   Monte-Carlo trials per discard subset
    ANTE                     ante collected at the start of each round
    REVEAL_ON_FOLD           show the opponent's hand after a fold
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar
import logging
import os

from cardshoggoths.core.rules import DEFAULT_ANTE, DEFAULT_STARTING_SANITY


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class AIConfig:
    """
    Opponent tuning.

    Attributes:
        discard_simulations: Monte-Carlo trials per keep/discard subset
        courage: Multiplier on estimated win probability
        value_bet: Bet size when betting a strong hand
        bluff_bet: Bet size when bluffing
        raise_amount: Raise size when facing a bet with a strong hand
    """
    discard_simulations: int = 100
    courage: float = 1.2
    value_bet: int = 20
    bluff_bet: int = 10
    raise_amount: int = 20

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AIConfig:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            discard_simulations=_env_value(
                env, "AI_DISCARD_SIMULATIONS", int, defaults.discard_simulations
            ),
            courage=_env_value(env, "AI_COURAGE", float, defaults.courage),
        )


@dataclass(frozen=True)
class GameConfig:
    """
    Table settings.

    Attributes:
        starting_sanity: Sanity each player starts with (and the AI
            regenerates to)
        ante: Ante per player per round
        reveal_on_fold: Show the opponent's hand when a round ends by fold
    """
    starting_sanity: int = DEFAULT_STARTING_SANITY
    ante: int = DEFAULT_ANTE
    reveal_on_fold: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GameConfig:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            ante=_env_value(env, "ANTE", int, defaults.ante),
            reveal_on_fold=_env_value(env, "REVEAL_ON_FOLD", _parse_bool, defaults.reveal_on_fold),
        )


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {text}")


def _env_value(env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    """Read and parse an environment variable, falling back to default."""
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
