"""
Undo/Redo - Reversible commands and an unbounded linear history.

Commands hold exactly the data needed to invert themselves plus a
handle to the state they act on. Executing a new command drops the
redo stack: there are no branching timelines.

Callers must not execute a command from inside another command's
execute(); the manager has no reentrancy guard.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

from .errors import MalformedConstructionError


class Command(ABC):
    """A reversible game action."""

    description: str | None = None

    @abstractmethod
    def execute(self) -> None:
        """Apply the command."""

    @abstractmethod
    def undo(self) -> None:
        """Reverse a previous execute()."""


class CompoundCommand(Command):
    """
    Several commands treated as one undoable step.

    Sub-commands execute in order and undo in strict reverse order,
    e.g. a player move followed by the auto-moves it unlocked.
    """

    def __init__(self, commands: Sequence[Command], description: str | None = None):
        if not commands:
            raise MalformedConstructionError(
                "CompoundCommand requires at least one sub-command"
            )
        self._commands = tuple(commands)
        self.description = description

    def execute(self) -> None:
        for command in self._commands:
            command.execute()

    def undo(self) -> None:
        for command in reversed(self._commands):
            command.undo()

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    @property
    def size(self) -> int:
        return len(self._commands)


class UndoRedoManager:
    """
    Linear undo/redo history.

    undo() and redo() on an empty stack are no-ops.
    """

    def __init__(self):
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []

    def execute(self, command: Command) -> None:
        """Run a command, push it to history and clear the redo stack."""
        command.execute()
        self._undo_stack.append(command)
        self._redo_stack.clear()

    def undo(self) -> Command | None:
        """Undo the latest command. Returns it, or None if nothing to undo."""
        if not self._undo_stack:
            return None
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        return command

    def redo(self) -> Command | None:
        """Redo the latest undone command. Returns it, or None."""
        if not self._redo_stack:
            return None
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        return command

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_size(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_size(self) -> int:
        return len(self._redo_stack)

    @property
    def history(self) -> list[Command]:
        """Undo history, oldest first (a copy)."""
        return list(self._undo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
