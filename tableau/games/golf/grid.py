"""
Golf Grid - A 3x3 arrangement of cards, stored flat in row-major order.

    [0][1][2]   row 0
    [3][4][5]   row 1
    [6][7][8]   row 2

Columns are indices {0,3,6}, {1,4,7}, {2,5,8}. Cells may be replaced
but a grid always has exactly 9 of them.
"""

from __future__ import annotations
from typing import Iterable

from ...engine_core.cards import Card
from ...engine_core.errors import MalformedConstructionError, OutOfBoundsError

GRID_ROWS = 3
GRID_COLS = 3
GRID_SIZE = GRID_ROWS * GRID_COLS

GolfGrid = list[Card]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_ROWS and 0 <= col < GRID_COLS


def grid_index(row: int, col: int) -> int:
    """
    (row, col) -> flat index.

    Raises:
        OutOfBoundsError: row or col outside 0..2
    """
    if not in_bounds(row, col):
        raise OutOfBoundsError(
            f"Grid position ({row}, {col}) is out of bounds "
            f"(valid: 0-{GRID_ROWS - 1}, 0-{GRID_COLS - 1})"
        )
    return row * GRID_COLS + col


def grid_position(index: int) -> tuple[int, int]:
    """Flat index -> (row, col)."""
    return index // GRID_COLS, index % GRID_COLS


def get_grid_card(grid: GolfGrid, row: int, col: int) -> Card:
    return grid[grid_index(row, col)]


def column_cards(grid: GolfGrid, col: int) -> list[Card]:
    return [grid[row * GRID_COLS + col] for row in range(GRID_ROWS)]


def is_grid_fully_revealed(grid: GolfGrid) -> bool:
    return all(card.face_up for card in grid)


def count_face_up(grid: GolfGrid) -> int:
    return sum(1 for card in grid if card.face_up)


def create_golf_grid(cards: Iterable[Card]) -> GolfGrid:
    """
    Build a grid from exactly 9 cards.

    Raises:
        MalformedConstructionError: wrong number of cards
    """
    cells = list(cards)
    if len(cells) != GRID_SIZE:
        raise MalformedConstructionError(
            f"GolfGrid requires exactly {GRID_SIZE} cards, got {len(cells)}"
        )
    return cells


def copy_grid(grid: GolfGrid) -> GolfGrid:
    """Value copy: each card is copied, nothing is shared with the source."""
    return [card.copy() for card in grid]
