"""
Pile - LIFO stack of cards.

The last element is the top of the pile. Only the top can be
observed or removed in one step; interior order is never changed.
Used for discard piles, foundations and tableau columns.
"""

from __future__ import annotations
from typing import Iterable

from .cards import Card
from .errors import EmptySourceError


class Pile:
    """A stack of cards, bottom first."""

    def __init__(self, cards: Iterable[Card] | None = None):
        self._cards: list[Card] = list(cards) if cards is not None else []

    def push(self, *cards: Card) -> None:
        """Push one or more cards onto the top, in the order given."""
        self._cards.extend(cards)

    def pop(self) -> Card | None:
        """Remove and return the top card, or None if empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def pop_or_raise(self) -> Card:
        """Remove and return the top card; raise EmptySourceError if empty."""
        if not self._cards:
            raise EmptySourceError("Cannot pop from an empty pile")
        return self._cards.pop()

    def peek(self) -> Card | None:
        """Return the top card without removing it, or None if empty."""
        return self._cards[-1] if self._cards else None

    def is_empty(self) -> bool:
        return not self._cards

    def size(self) -> int:
        return len(self._cards)

    def to_list(self) -> list[Card]:
        """Shallow copy of the cards, bottom to top."""
        return list(self._cards)

    def clear(self) -> None:
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Pile({self._cards!r})"
