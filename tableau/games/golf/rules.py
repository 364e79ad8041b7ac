"""
Golf Rules - Move legality, application, initial reveal and round end.

Moves (after drawing one card):
- swap(row, col): drawn card replaces the grid card; the old card
  goes face-up to the discard pile. Legal at any position.
- discard-and-flip(row, col): drawn card goes to the discard pile and
  the target cell is turned face-up. Legal only on a face-down cell.

The round ends once one player's grid is fully face-up and every
other player has taken one more turn.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Union

from ...engine_core.cards import Card
from ...engine_core.errors import IllegalMoveError, InitialRevealError
from .grid import GolfGrid, grid_index, in_bounds, is_grid_fully_revealed

INITIAL_REVEAL_COUNT = 3


class DrawSource(Enum):
    STOCK = "stock"
    DISCARD = "discard"


# =============================================================================
# Moves
# =============================================================================

@dataclass(frozen=True)
class SwapMove:
    row: int
    col: int
    kind: ClassVar[str] = "swap"

    def describe(self) -> str:
        return f"swap ({self.row}, {self.col})"


@dataclass(frozen=True)
class DiscardAndFlipMove:
    row: int
    col: int
    kind: ClassVar[str] = "discard-and-flip"

    def describe(self) -> str:
        return f"discard and flip ({self.row}, {self.col})"


GolfMove = Union[SwapMove, DiscardAndFlipMove]


@dataclass(frozen=True)
class LegalityResult:
    legal: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.legal


LEGAL = LegalityResult(True)


@dataclass(frozen=True)
class MoveResult:
    discarded_card: Card


def check_move_legality(grid: GolfGrid, move: GolfMove) -> LegalityResult:
    """Legal, or illegal with the rule that was broken."""
    if not in_bounds(move.row, move.col):
        return LegalityResult(
            False, f"Position ({move.row}, {move.col}) is out of bounds"
        )

    if isinstance(move, SwapMove):
        return LEGAL
    if isinstance(move, DiscardAndFlipMove):
        if grid[grid_index(move.row, move.col)].face_up:
            return LegalityResult(
                False,
                f"Card at ({move.row}, {move.col}) is already face-up; "
                "discard-and-flip requires a face-down card",
            )
        return LEGAL
    raise TypeError(f"Unknown Golf move: {move!r}")


def is_legal_move(grid: GolfGrid, move: GolfMove) -> bool:
    return check_move_legality(grid, move).legal


def apply_move(grid: GolfGrid, drawn_card: Card, move: GolfMove) -> MoveResult:
    """
    Apply a move with the drawn card. Mutates the grid in place.

    Raises:
        IllegalMoveError: the move is illegal; nothing is changed
    """
    check = check_move_legality(grid, move)
    if not check.legal:
        raise IllegalMoveError(check.reason)

    idx = grid_index(move.row, move.col)
    if isinstance(move, SwapMove):
        old_card = grid[idx]
        drawn_card.face_up = True
        grid[idx] = drawn_card
        old_card.face_up = True
        return MoveResult(discarded_card=old_card)

    drawn_card.face_up = True
    grid[idx].face_up = True
    return MoveResult(discarded_card=drawn_card)


# =============================================================================
# Initial reveal
# =============================================================================

def check_initial_reveal(
    grid: GolfGrid,
    positions: Iterable[tuple[int, int]],
) -> LegalityResult:
    positions = list(positions)
    if len(positions) != INITIAL_REVEAL_COUNT:
        return LegalityResult(
            False,
            f"Initial reveal requires exactly {INITIAL_REVEAL_COUNT} positions, "
            f"got {len(positions)}",
        )

    seen: set[int] = set()
    for row, col in positions:
        if not in_bounds(row, col):
            return LegalityResult(False, f"Position ({row}, {col}) is out of bounds")
        idx = grid_index(row, col)
        if idx in seen:
            return LegalityResult(False, f"Duplicate position ({row}, {col})")
        seen.add(idx)
        if grid[idx].face_up:
            return LegalityResult(False, f"Card at ({row}, {col}) is already face-up")

    return LEGAL


def apply_initial_reveal(grid: GolfGrid, positions: Iterable[tuple[int, int]]) -> None:
    """
    Turn exactly three face-down cells face-up.

    Raises:
        InitialRevealError: wrong count, duplicate, out of bounds or
            already face-up
    """
    positions = list(positions)
    check = check_initial_reveal(grid, positions)
    if not check.legal:
        raise InitialRevealError(check.reason)

    for row, col in positions:
        grid[grid_index(row, col)].face_up = True


# =============================================================================
# Round end
# =============================================================================

@dataclass
class RoundEndState:
    """
    Tracks who triggered the round end and who has had a final turn.

    Once triggering_player_index is set it does not change.
    """
    player_count: int
    triggering_player_index: int | None = None
    final_turns_taken: set[int] = field(default_factory=set)


def create_round_end_state(player_count: int) -> RoundEndState:
    return RoundEndState(player_count=player_count)


def check_round_end(
    state: RoundEndState,
    acting_player_index: int,
    acting_player_grid: GolfGrid,
) -> bool:
    """
    Update the tracker after a player acts. Returns True when the round is over.

    The trigger turn itself always returns False.
    """
    if state.triggering_player_index is None:
        if is_grid_fully_revealed(acting_player_grid):
            state.triggering_player_index = acting_player_index
        return False

    if acting_player_index != state.triggering_player_index:
        state.final_turns_taken.add(acting_player_index)

    return len(state.final_turns_taken) >= state.player_count - 1


def is_in_final_turns(state: RoundEndState) -> bool:
    return state.triggering_player_index is not None


def needs_final_turn(state: RoundEndState, player_index: int) -> bool:
    if state.triggering_player_index is None:
        return False
    return (
        player_index != state.triggering_player_index
        and player_index not in state.final_turns_taken
    )
