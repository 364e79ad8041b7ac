"""
Cards - Rank, suit and the playing card value type.

A card's rank and suit are fixed at creation; face_up is the only
field that may change afterwards. Cards carry no identity beyond
their rank and suit: a standard deck is exactly the 52 distinct pairs.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Rank(Enum):
    """Standard playing card ranks, Ace low."""
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


class Suit(Enum):
    """Standard playing card suits."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"


# Ace through King
RANKS: tuple[Rank, ...] = tuple(Rank)

# Alphabetical; also the deck construction order
SUITS: tuple[Suit, ...] = tuple(Suit)

_FIXED_FIELDS = frozenset({"rank", "suit"})


@dataclass
class Card:
    """
    A playing card.

    rank and suit are read-only once set; assigning to them raises
    AttributeError. face_up can be flipped freely.
    """
    rank: Rank
    suit: Suit
    face_up: bool = False

    def __setattr__(self, name, value):
        if name in _FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"Card.{name} cannot be changed after creation")
        super().__setattr__(name, value)

    def copy(self) -> Card:
        """Return an independent card with the same rank, suit and face."""
        return Card(self.rank, self.suit, self.face_up)

    def __str__(self) -> str:
        return f"{self.rank.value} of {self.suit.value}"


def create_card(rank: Rank, suit: Suit, face_up: bool = False) -> Card:
    """Create a single card, face-down by default."""
    return Card(rank=rank, suit=suit, face_up=face_up)
