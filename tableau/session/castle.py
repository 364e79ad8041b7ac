"""
Castle Session - Interactive Beleaguered Castle driver.

Owns the board, the undo/redo manager, the transcript recorder and
the event emitter. Every step (move, undo, redo, auto-complete)
emits turn-completed then state-settled; game-ended follows when the
board is won or has no legal move left.

A won game is over: further steps raise PhaseError. A stuck board is
reported as a loss but stays open so the player can undo out of it.
"""

from __future__ import annotations
import logging
import time

from ..engine_core.errors import PhaseError
from ..engine_core.events import (
    GameEvent,
    GameEventEmitter,
    GameEndedPayload,
    StateSettledPayload,
    TurnCompletedPayload,
)
from ..engine_core.state import GamePhase
from ..engine_core.undo import Command, UndoRedoManager
from ..games.beleaguered_castle.commands import (
    build_move_command,
    build_sequence_command,
    moves_in,
)
from ..games.beleaguered_castle.rules import (
    deal,
    get_auto_complete_moves,
    get_legal_moves,
    has_no_moves,
    is_trivially_winnable,
    is_won,
)
from ..games.beleaguered_castle.state import BCMove
from ..games.beleaguered_castle.transcript import (
    BoardSnapshot,
    CastleTranscript,
    CastleTranscriptRecorder,
    GameOutcome,
    snapshot_board,
)

logger = logging.getLogger(__name__)

PLAYER_NAME = "Player"


class CastleSession:
    """
    One Beleaguered Castle deal and its history.

    Usage:
        session = CastleSession(seed=42)
        session.events.on(GameEvent.GAME_ENDED, print)
        session.move(session.legal_moves()[0])
        session.undo()
    """

    def __init__(self, seed: int, auto_move: bool = True):
        self.seed = seed
        self.auto_move = auto_move
        self.state = deal(seed)
        self.phase = GamePhase.PLAYING
        self.history = UndoRedoManager()
        self.events = GameEventEmitter()
        self.recorder = CastleTranscriptRecorder(seed, self.state)
        self.started_at = time.monotonic()
        self._stuck_reported = False

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def move_count(self) -> int:
        return self.state.move_count

    def legal_moves(self) -> list[BCMove]:
        return get_legal_moves(self.state)

    def is_won(self) -> bool:
        return is_won(self.state)

    def is_stuck(self) -> bool:
        return not self.is_won() and has_no_moves(self.state)

    def can_auto_complete(self) -> bool:
        return self.phase == GamePhase.PLAYING and is_trivially_winnable(self.state)

    @property
    def outcome(self) -> GameOutcome:
        if self.is_won():
            return GameOutcome.WIN
        if self.is_stuck():
            return GameOutcome.LOSS
        return GameOutcome.IN_PROGRESS

    def snapshot(self) -> BoardSnapshot:
        return snapshot_board(self.state)

    # =========================================================================
    # Steps
    # =========================================================================

    def move(self, move: BCMove) -> list[BCMove]:
        """
        Play a move, followed by any safe auto-moves when enabled.

        Returns every move applied, player move first.

        Raises:
            PhaseError: the game is already won
            IllegalMoveError: the move is not legal; nothing changes
        """
        self._require_playing()
        command = build_move_command(self.state, move, auto_move=self.auto_move)
        self.history.execute(command)

        applied = [m.move for m in moves_in(command)]
        self.recorder.record_move(move, self.state.move_count - len(applied) + 1)
        for auto in applied[1:]:
            self.recorder.record_auto_move(auto)

        logger.debug("Castle %d: %s (+%d auto)", self.seed, move.describe(), len(applied) - 1)
        self._after_step()
        return applied

    def undo(self) -> Command | None:
        """Undo the last step. No-op (returns None) when there is nothing to undo."""
        self._require_playing()
        command = self.history.undo()
        if command is None:
            return None
        self.recorder.record_undo(self.state.move_count)
        self._after_step()
        return command

    def redo(self) -> Command | None:
        """Redo the last undone step. No-op (returns None) when there is nothing to redo."""
        self._require_playing()
        command = self.history.redo()
        if command is None:
            return None
        self.recorder.record_redo(self.state.move_count)
        self._after_step()
        return command

    def auto_complete(self) -> list[BCMove]:
        """
        Finish a trivially winnable board as one undoable step.

        Returns the moves applied; empty when the board is not
        trivially winnable.
        """
        self._require_playing()
        moves = get_auto_complete_moves(self.state)
        if not moves:
            return []

        command = build_sequence_command(self.state, moves, description="Auto-complete")
        self.history.execute(command)
        for m in moves:
            self.recorder.record_auto_move(m)

        logger.debug("Castle %d: auto-completed with %d moves", self.seed, len(moves))
        self._after_step()
        return moves

    def finalize(self) -> CastleTranscript:
        elapsed = time.monotonic() - self.started_at
        return self.recorder.finalize(self.outcome, self.state.move_count, elapsed)

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_playing(self) -> None:
        if self.phase != GamePhase.PLAYING:
            raise PhaseError("Game is over")

    def _after_step(self) -> None:
        won = self.is_won()
        if won:
            self.phase = GamePhase.ENDED

        self.events.emit(GameEvent.TURN_COMPLETED, TurnCompletedPayload(
            turn_number=self.state.move_count,
            player_index=0,
            player_name=PLAYER_NAME,
            phase=self.phase,
        ))
        self.events.emit(GameEvent.STATE_SETTLED, StateSettledPayload(
            turn_number=self.state.move_count,
            phase=self.phase,
        ))

        if won:
            logger.info("Castle %d won in %d moves", self.seed, self.state.move_count)
            self.events.emit(GameEvent.GAME_ENDED, GameEndedPayload(
                final_turn_number=self.state.move_count,
                winner_index=0,
                reason="won",
            ))
            return

        stuck = self.is_stuck()
        if stuck and not self._stuck_reported:
            logger.info("Castle %d stuck after %d moves", self.seed, self.state.move_count)
            self.events.emit(GameEvent.GAME_ENDED, GameEndedPayload(
                final_turn_number=self.state.move_count,
                winner_index=-1,
                reason="no-moves",
            ))
        self._stuck_reported = stuck
