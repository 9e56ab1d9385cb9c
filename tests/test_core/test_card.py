"""
Tests for Card and Deck classes.
"""

import random

import pytest
from cardshoggoths.core.card import (
    Card, Deck, Rank, Suit, full_deck, parse_cards, unknown_cards,
)


class TestCard:
    """Tests for Card class."""

    def test_create_card(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.value == 14

    def test_ints_are_coerced(self):
        card = Card(10, 2)
        assert card.rank is Rank.TEN
        assert card.suit is Suit.HEARTS

    def test_invalid_rank_rejected(self):
        with pytest.raises(ValueError):
            Card(1, Suit.SPADES)

    def test_from_string(self):
        assert Card.from_string("As") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10h") == Card(Rank.TEN, Suit.HEARTS)
        assert Card.from_string("2c") == Card(Rank.TWO, Suit.CLUBS)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    def test_from_string_invalid(self):
        for bad in ("", "A", "1s", "Ax", "Zz"):
            with pytest.raises(ValueError):
                Card.from_string(bad)

    def test_wire_format(self):
        """Cards serialize to suit and rank names."""
        assert Card(Rank.ACE, Suit.SPADES).to_dict() == {"suit": "spades", "rank": "ace"}
        assert Card(Rank.TEN, Suit.HEARTS).to_dict() == {"suit": "hearts", "rank": "10"}
        assert Card(Rank.JACK, Suit.CLUBS).to_dict() == {"suit": "clubs", "rank": "jack"}

    def test_from_dict(self):
        assert Card.from_dict({"suit": "diamonds", "rank": "queen"}) == Card(Rank.QUEEN, Suit.DIAMONDS)
        assert Card.from_dict({"suit": "spades", "rank": "7"}) == Card(Rank.SEVEN, Suit.SPADES)

    def test_from_dict_invalid(self):
        with pytest.raises(ValueError):
            Card.from_dict({"suit": "stars", "rank": "ace"})
        with pytest.raises(ValueError):
            Card.from_dict({"suit": "spades"})

    def test_all_cards_survive_wire_format(self):
        for card in full_deck():
            assert Card.from_dict(card.to_dict()) == card

    def test_string_forms(self):
        card = Card(Rank.TEN, Suit.HEARTS)
        assert card.short_str == "Th"
        assert str(card) == "T♥"
        assert repr(card) == "Card(Th)"

    def test_hashable(self):
        cards = {Card(Rank.ACE, Suit.SPADES), Card.from_string("As"), Card(Rank.KING, Suit.SPADES)}
        assert len(cards) == 2

    def test_parse_cards(self):
        cards = parse_cards("As Kh 10d 2c")
        assert [c.short_str for c in cards] == ["As", "Kh", "Td", "2c"]


class TestDeck:
    """Tests for Deck class."""

    def test_full_deck(self, unshuffled_deck):
        assert unshuffled_deck.remaining == 52
        assert len(set(unshuffled_deck.cards)) == 52

    def test_deal(self, deck):
        cards = deck.deal(5)
        assert len(cards) == 5
        assert deck.remaining == 47
        assert not set(cards) & set(deck.cards)

    def test_deal_too_many(self, deck):
        deck.deal(50)
        with pytest.raises(ValueError):
            deck.deal(3)
        assert deck.remaining == 2

    def test_seeded_shuffle_is_reproducible(self):
        assert Deck(rng=random.Random(3)).cards == Deck(rng=random.Random(3)).cards

    def test_shuffle_changes_order(self, unshuffled_deck):
        deck = Deck(rng=random.Random(3))
        assert deck.cards != unshuffled_deck.cards

    def test_replace_cards(self, deck):
        hand = deck.deal(5)
        kept = hand[1:4]
        top = deck.cards[:2]

        deck.replace_cards(hand, [0, 4])

        assert hand[0] == top[0]
        assert hand[4] == top[1]
        assert hand[1:4] == kept
        assert deck.remaining == 45

    def test_replace_nothing(self, deck):
        hand = deck.deal(5)
        before = list(hand)
        deck.replace_cards(hand, [])
        assert hand == before
        assert deck.remaining == 47

    def test_list_round_trip(self, deck):
        deck.deal(7)
        restored = Deck.from_list([c.to_dict() for c in deck.cards])
        assert restored.cards == deck.cards


class TestUnknownCards:
    """Tests for the unseen-card helper used by the opponent."""

    def test_excludes_hand(self, sample_hand):
        unknown = unknown_cards(sample_hand)
        assert len(unknown) == 47
        assert not set(unknown) & set(sample_hand)

    def test_fixed_order(self, sample_hand):
        assert unknown_cards(sample_hand) == unknown_cards(reversed(sample_hand))
