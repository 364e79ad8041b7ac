"""
Tests for cards, piles, decks and the seeded RNG.

Tests:
- Card immutability of rank/suit
- Pile LIFO behaviour
- Deck construction, shuffling and drawing
- LCG determinism
"""

import pytest

from ..engine_core.cards import Card, Rank, Suit, RANKS, SUITS, create_card
from ..engine_core.deck import (
    create_standard_deck,
    create_deck_from,
    shuffle,
    draw,
    draw_or_raise,
)
from ..engine_core.errors import EmptySourceError
from ..engine_core.pile import Pile
from ..engine_core.rng import SeededRng, create_seeded_rng, choose_index


class TestCard:
    """Tests for the card value type."""

    def test_defaults_face_down(self):
        card = create_card(Rank.ACE, Suit.SPADES)
        assert card.face_up is False

    def test_face_up_is_mutable(self):
        card = create_card(Rank.ACE, Suit.SPADES)
        card.face_up = True
        assert card.face_up is True

    def test_rank_and_suit_are_fixed(self):
        """Rank and suit cannot change after creation."""
        card = create_card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING
        with pytest.raises(AttributeError):
            card.suit = Suit.HEARTS
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_copy_is_independent(self):
        card = create_card(Rank.TEN, Suit.HEARTS, face_up=False)
        clone = card.copy()
        clone.face_up = True

        assert clone == Card(Rank.TEN, Suit.HEARTS, True)
        assert card.face_up is False
        assert clone is not card

    def test_rank_order(self):
        assert RANKS[0] == Rank.ACE
        assert RANKS[-1] == Rank.KING
        assert len(RANKS) == 13
        assert SUITS == (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)


class TestPile:
    """Tests for Pile."""

    def test_push_pop_is_lifo(self):
        a = create_card(Rank.ACE, Suit.CLUBS)
        b = create_card(Rank.TWO, Suit.CLUBS)
        pile = Pile()
        pile.push(a, b)

        assert pile.peek() is b
        assert pile.pop() is b
        assert pile.pop() is a
        assert pile.pop() is None
        assert pile.is_empty()

    def test_pop_or_raise_on_empty(self):
        with pytest.raises(EmptySourceError):
            Pile().pop_or_raise()

    def test_to_list_is_a_copy(self):
        pile = Pile([create_card(Rank.ACE, Suit.CLUBS)])
        cards = pile.to_list()
        cards.clear()
        assert pile.size() == 1
        assert len(pile) == 1

    def test_clear(self):
        pile = Pile([create_card(Rank.ACE, Suit.CLUBS)])
        pile.clear()
        assert pile.is_empty()
        assert pile.peek() is None


class TestDeck:
    """Tests for deck construction and operations."""

    def test_standard_deck(self):
        deck = create_standard_deck()

        assert len(deck) == 52
        assert len({(c.rank, c.suit) for c in deck}) == 52
        assert all(not c.face_up for c in deck)
        assert (deck[0].rank, deck[0].suit) == (Rank.ACE, Suit.CLUBS)
        assert (deck[-1].rank, deck[-1].suit) == (Rank.KING, Suit.SPADES)

    def test_create_deck_from(self):
        deck = create_deck_from([
            (Rank.ACE, Suit.HEARTS),
            (Rank.KING, Suit.SPADES, True),
        ])
        assert deck == [
            Card(Rank.ACE, Suit.HEARTS, False),
            Card(Rank.KING, Suit.SPADES, True),
        ]

    def test_shuffle_is_deterministic(self):
        first = shuffle(create_standard_deck(), create_seeded_rng(123))
        second = shuffle(create_standard_deck(), create_seeded_rng(123))
        assert first == second

    def test_shuffle_is_a_permutation(self):
        deck = create_standard_deck()
        result = shuffle(deck, create_seeded_rng(5))

        assert result is deck
        assert sorted((c.suit.value, c.rank.value) for c in deck) == sorted(
            (c.suit.value, c.rank.value) for c in create_standard_deck()
        )

    def test_different_seeds_differ(self):
        first = shuffle(create_standard_deck(), create_seeded_rng(1))
        second = shuffle(create_standard_deck(), create_seeded_rng(2))
        assert first != second

    def test_draw_takes_the_top(self):
        deck = create_standard_deck()
        top = deck[-1]
        assert draw(deck) is top
        assert len(deck) == 51

    def test_draw_empty(self):
        assert draw([]) is None
        with pytest.raises(EmptySourceError):
            draw_or_raise([])


class TestSeededRng:
    """Tests for the LCG."""

    def test_first_value(self):
        rng = SeededRng(0)
        assert rng() == 1013904223 / 2 ** 32

    def test_same_seed_same_sequence(self):
        a = create_seeded_rng(99)
        b = create_seeded_rng(99)
        assert [a() for _ in range(20)] == [b() for _ in range(20)]

    def test_values_in_unit_interval(self):
        rng = create_seeded_rng(2 ** 40 + 17)
        for _ in range(1000):
            value = rng()
            assert 0.0 <= value < 1.0

    def test_choose_index(self):
        assert choose_index(lambda: 0.0, 5) == 0
        assert choose_index(lambda: 0.999, 5) == 4
