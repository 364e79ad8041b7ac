"""
Beleaguered Castle Commands - Reversible moves for the undo/redo manager.

A MoveCommand holds only the board handle and the move; undo is the
paired inverse from rules.py.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Sequence

from ...engine_core.undo import Command, CompoundCommand
from .rules import apply_move, undo_move, ensure_legal, apply_safe_auto_moves
from .state import BeleagueredCastleState, BCMove


class MoveCommand(Command):
    """Apply or undo a single move on a board."""

    def __init__(self, state: BeleagueredCastleState, move: BCMove, automatic: bool = False):
        self.state = state
        self.move = move
        self.automatic = automatic
        prefix = "Auto: " if automatic else ""
        self.description = prefix + move.describe()

    def execute(self) -> None:
        apply_move(self.state, self.move)

    def undo(self) -> None:
        undo_move(self.state, self.move)


def plan_auto_moves(state: BeleagueredCastleState, move: BCMove) -> list[BCMove]:
    """
    Safe auto-moves that would follow `move`, worked out on a copy.

    Raises:
        IllegalMoveError: `move` is not legal on the live board
    """
    ensure_legal(state, move)

    scratch = deepcopy(state)
    apply_move(scratch, move)
    return apply_safe_auto_moves(scratch)


def build_move_command(
    state: BeleagueredCastleState,
    move: BCMove,
    auto_move: bool = True,
) -> Command:
    """
    Command for a player move, plus the safe auto-moves it unlocks.

    With auto_move the result is a CompoundCommand so one undo
    reverts the player move and its auto-moves together.
    """
    if not auto_move:
        ensure_legal(state, move)
        return MoveCommand(state, move)

    auto_moves = plan_auto_moves(state, move)
    if not auto_moves:
        return MoveCommand(state, move)

    commands = [MoveCommand(state, move)]
    commands.extend(MoveCommand(state, m, automatic=True) for m in auto_moves)
    return CompoundCommand(commands, description=move.describe())


def build_sequence_command(
    state: BeleagueredCastleState,
    moves: Sequence[BCMove],
    description: str,
    automatic: bool = True,
) -> CompoundCommand:
    """One undoable step made of several moves, e.g. an auto-complete run."""
    return CompoundCommand(
        [MoveCommand(state, m, automatic=automatic) for m in moves],
        description=description,
    )


def moves_in(command: Command) -> list[MoveCommand]:
    """Flatten a command into the MoveCommands it contains, in execution order."""
    if isinstance(command, MoveCommand):
        return [command]
    if isinstance(command, CompoundCommand):
        flat: list[MoveCommand] = []
        for sub in command.commands:
            flat.extend(moves_in(sub))
        return flat
    return []
