"""
Golf Scoring - Lower is better.

Point values: A=1, 2=-2, 3-10 face value, J=10, Q=10, K=0.
A column whose three cards share a rank scores 0.
"""

from __future__ import annotations

from ...engine_core.cards import Card, Rank
from .grid import GolfGrid, GRID_COLS, column_cards

POINT_VALUES: dict[Rank, int] = {
    Rank.ACE: 1,
    Rank.TWO: -2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 0,
}


def card_point_value(card: Card) -> int:
    return POINT_VALUES[card.rank]


def _is_matched_column(cards: list[Card]) -> bool:
    return all(c.rank == cards[0].rank for c in cards[1:])


def score_grid(grid: GolfGrid) -> int:
    """Full score, hidden cards included."""
    total = 0
    for col in range(GRID_COLS):
        cards = column_cards(grid, col)
        if _is_matched_column(cards):
            continue
        total += sum(card_point_value(c) for c in cards)
    return total


def score_visible_cards(grid: GolfGrid) -> int:
    """
    Score counting only face-up cards.

    A column is zeroed only when all three of its cards are face-up
    and share a rank.
    """
    total = 0
    for col in range(GRID_COLS):
        cards = column_cards(grid, col)
        if all(c.face_up for c in cards) and _is_matched_column(cards):
            continue
        total += sum(card_point_value(c) for c in cards if c.face_up)
    return total
