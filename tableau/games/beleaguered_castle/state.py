"""
Beleaguered Castle State - Board layout and move types.

All cards are face-up (open information). Termination is never
stored: won/stuck are predicates over the board in rules.py.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Union

from ...engine_core.cards import Suit
from ...engine_core.pile import Pile

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 8
CARDS_PER_COLUMN = 6
CARDS_PER_SUIT = 13

# Foundation index -> suit it builds
FOUNDATION_SUITS: tuple[Suit, ...] = (
    Suit.CLUBS,
    Suit.DIAMONDS,
    Suit.HEARTS,
    Suit.SPADES,
)


@dataclass(frozen=True)
class TableauToTableauMove:
    """Top card of one column onto another column."""
    kind: ClassVar[str] = "tableau-to-tableau"
    from_col: int
    to_col: int

    def describe(self) -> str:
        return f"Move column {self.from_col} -> column {self.to_col}"


@dataclass(frozen=True)
class TableauToFoundationMove:
    """Top card of a column onto a foundation."""
    kind: ClassVar[str] = "tableau-to-foundation"
    from_col: int
    to_foundation: int

    def describe(self) -> str:
        return f"Move column {self.from_col} -> foundation {self.to_foundation}"


BCMove = Union[TableauToTableauMove, TableauToFoundationMove]


@dataclass
class BeleagueredCastleState:
    """
    Complete Beleaguered Castle board.

    foundations are indexed like FOUNDATION_SUITS and build A..K by suit.
    tableau columns build down regardless of suit; top = last card.
    move_count goes up by one per applied move and down by one per undo.
    """
    foundations: list[Pile] = field(
        default_factory=lambda: [Pile() for _ in range(FOUNDATION_COUNT)]
    )
    tableau: list[Pile] = field(
        default_factory=lambda: [Pile() for _ in range(TABLEAU_COUNT)]
    )
    seed: int = 0
    move_count: int = 0

    def card_count(self) -> int:
        """Cards on the board; 52 for any state reached from a deal."""
        return sum(p.size() for p in self.foundations) + sum(p.size() for p in self.tableau)
