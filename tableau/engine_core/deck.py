"""
Deck - Factory and operations over plain card lists.

A deck is a list of cards whose last element is the top. Shuffling
is Fisher-Yates in place driven by a caller-supplied Rng so deals
are reproducible.
"""

from __future__ import annotations
from typing import Iterable

from .cards import Card, Rank, Suit, RANKS, SUITS, create_card
from .errors import EmptySourceError
from .rng import Rng, default_rng


def create_standard_deck() -> list[Card]:
    """
    Create the 52-card deck (no jokers), all face-down.

    Ordered suit-major (clubs, diamonds, hearts, spades), then Ace to King.
    """
    return [create_card(rank, suit) for suit in SUITS for rank in RANKS]


def create_deck_from(specs: Iterable[tuple[Rank, Suit] | tuple[Rank, Suit, bool]]) -> list[Card]:
    """Build cards from (rank, suit) or (rank, suit, face_up) tuples."""
    deck = []
    for spec in specs:
        rank, suit, *rest = spec
        deck.append(create_card(rank, suit, bool(rest[0]) if rest else False))
    return deck


def shuffle(deck: list[Card], rng: Rng | None = None) -> list[Card]:
    """
    Shuffle in place with Fisher-Yates.

    Returns the same list for chaining.
    """
    rand = rng or default_rng()
    for i in range(len(deck) - 1, 0, -1):
        j = int(rand() * (i + 1))
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def draw(deck: list[Card]) -> Card | None:
    """Remove and return the top card, or None if the deck is empty."""
    if not deck:
        return None
    return deck.pop()


def draw_or_raise(deck: list[Card]) -> Card:
    """
    Remove and return the top card.

    Use where an empty deck is a logic error, e.g. dealing.
    """
    if not deck:
        raise EmptySourceError("Cannot draw from an empty deck")
    return deck.pop()
