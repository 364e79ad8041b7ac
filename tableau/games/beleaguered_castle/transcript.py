"""
Beleaguered Castle Transcript - Replay-ready record of a game.

Captures the dealt board, every player move, auto-move, undo and
redo, and the final outcome. All records are pydantic models built
from copied values.

Usage:
    recorder = CastleTranscriptRecorder(seed, state)
    recorder.record_move(move, state.move_count)
    recorder.record_auto_move(move)
    recorder.record_undo(state.move_count)
    transcript = recorder.finalize(GameOutcome.WIN, state.move_count, elapsed)
"""

from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ...engine_core.cards import Rank, Suit
from ...engine_core.transcript import CardSnapshot, snapshot_card
from .state import (
    BeleagueredCastleState,
    BCMove,
    TableauToFoundationMove,
    TableauToTableauMove,
    FOUNDATION_SUITS,
)


# =============================================================================
# Snapshots
# =============================================================================

class FoundationSnapshot(BaseModel):
    suit: Suit
    size: int = Field(ge=0, le=13)
    top_rank: Optional[Rank] = None


class ColumnSnapshot(BaseModel):
    """Cards bottom to top."""
    cards: list[CardSnapshot] = Field(default_factory=list)


class BoardSnapshot(BaseModel):
    foundations: list[FoundationSnapshot]
    tableau: list[ColumnSnapshot]


def snapshot_board(state: BeleagueredCastleState) -> BoardSnapshot:
    """Copy the board into plain data."""
    foundations = []
    for fi, pile in enumerate(state.foundations):
        top = pile.peek()
        foundations.append(FoundationSnapshot(
            suit=FOUNDATION_SUITS[fi],
            size=pile.size(),
            top_rank=top.rank if top else None,
        ))

    tableau = [
        ColumnSnapshot(cards=[snapshot_card(c) for c in column.to_list()])
        for column in state.tableau
    ]
    return BoardSnapshot(foundations=foundations, tableau=tableau)


# =============================================================================
# Moves
# =============================================================================

class MoveRecord(BaseModel):
    """Serializable form of a move."""
    kind: Literal["tableau-to-tableau", "tableau-to-foundation"]
    from_col: int
    to_col: Optional[int] = None
    to_foundation: Optional[int] = None


def move_to_record(move: BCMove) -> MoveRecord:
    if isinstance(move, TableauToFoundationMove):
        return MoveRecord(kind=move.kind, from_col=move.from_col, to_foundation=move.to_foundation)
    return MoveRecord(kind=move.kind, from_col=move.from_col, to_col=move.to_col)


def record_to_move(record: MoveRecord) -> BCMove:
    """
    Raises:
        ValueError: the record lacks the target for its kind
    """
    if record.kind == TableauToFoundationMove.kind:
        if record.to_foundation is None:
            raise ValueError("tableau-to-foundation move needs to_foundation")
        return TableauToFoundationMove(from_col=record.from_col, to_foundation=record.to_foundation)
    if record.to_col is None:
        raise ValueError("tableau-to-tableau move needs to_col")
    return TableauToTableauMove(from_col=record.from_col, to_col=record.to_col)


class PlayerMoveEntry(BaseModel):
    kind: Literal["player-move"] = "player-move"
    move: MoveRecord
    move_count: int  # after the move


class AutoMoveEntry(BaseModel):
    kind: Literal["auto-move"] = "auto-move"
    move: MoveRecord


class UndoEntry(BaseModel):
    kind: Literal["undo"] = "undo"
    move_count: int


class RedoEntry(BaseModel):
    kind: Literal["redo"] = "redo"
    move_count: int


TranscriptEntry = Union[PlayerMoveEntry, AutoMoveEntry, UndoEntry, RedoEntry]


# =============================================================================
# Transcript
# =============================================================================

class GameOutcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    IN_PROGRESS = "in-progress"


class GameResult(BaseModel):
    outcome: GameOutcome
    move_count: int
    elapsed_seconds: float


class CastleTranscript(BaseModel):
    version: int = 1
    game: Literal["beleaguered-castle"] = "beleaguered-castle"
    seed: int
    started_at: str
    ended_at: str = ""
    initial_state: BoardSnapshot
    moves: list[TranscriptEntry] = Field(default_factory=list)
    result: Optional[GameResult] = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CastleTranscriptRecorder:
    """Appends entries as actions happen."""

    def __init__(self, seed: int, initial_state: BeleagueredCastleState):
        self._transcript = CastleTranscript(
            seed=seed,
            started_at=_now(),
            initial_state=snapshot_board(initial_state),
        )

    def record_move(self, move: BCMove, move_count: int) -> None:
        self._transcript.moves.append(
            PlayerMoveEntry(move=move_to_record(move), move_count=move_count)
        )

    def record_auto_move(self, move: BCMove) -> None:
        self._transcript.moves.append(AutoMoveEntry(move=move_to_record(move)))

    def record_undo(self, move_count: int) -> None:
        self._transcript.moves.append(UndoEntry(move_count=move_count))

    def record_redo(self, move_count: int) -> None:
        self._transcript.moves.append(RedoEntry(move_count=move_count))

    def finalize(
        self,
        outcome: GameOutcome,
        move_count: int,
        elapsed_seconds: float,
    ) -> CastleTranscript:
        """Stamp the result. Returns a copy; later entries do not change it."""
        self._transcript.ended_at = _now()
        self._transcript.result = GameResult(
            outcome=outcome,
            move_count=move_count,
            elapsed_seconds=elapsed_seconds,
        )
        return self._transcript.model_copy(deep=True)

    @property
    def transcript(self) -> CastleTranscript:
        """The transcript so far (may not be finalized)."""
        return self._transcript
