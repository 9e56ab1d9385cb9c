"""
Pytest configuration and shared fixtures for Card Shoggoths tests.
"""

import random

import pytest
from cardshoggoths.agents.base import BaseAgent
from cardshoggoths.config import GameConfig
from cardshoggoths.core.card import Card, Deck, Rank, Suit, parse_cards
from cardshoggoths.core.game import new_game
from cardshoggoths.core.rules import ActionType


class ScriptedAgent(BaseAgent):
    """Opponent that plays a fixed list of actions, then checks."""

    def __init__(self, actions=None, discards=None):
        super().__init__("Scripted")
        self.actions = list(actions or [])
        self.discards = list(discards or [])
        self.seen_hands = []

    def choose_discard(self, hand):
        self.seen_hands.append(list(hand))
        return list(self.discards)

    def decide_action(self, hand, game):
        self.seen_hands.append(list(hand))
        if self.actions:
            return self.actions.pop(0)
        return ActionType.CHECK, 0


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def scripted_agent():
    """An opponent that always checks and stands pat."""
    return ScriptedAgent()


@pytest.fixture
def make_game():
    """Factory for games against a scripted opponent."""
    def _make(actions=None, discards=None, seed=7, **config):
        agent = ScriptedAgent(actions, discards)
        return new_game(config=GameConfig(**config), agent=agent, rng=random.Random(seed))
    return _make


@pytest.fixture
def game(make_game):
    """A game against an opponent that always checks and stands pat."""
    return make_game()


@pytest.fixture
def dealt_game(game):
    """A game with the ante collected and hands dealt."""
    assert game.collect_ante(10).success
    return game


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js Ts")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return parse_cards("As 2h 3d 4c 5s")


@pytest.fixture
def high_card_hand():
    """A seven-high nothing."""
    return parse_cards("7c 5d 4h 3s 2c")
