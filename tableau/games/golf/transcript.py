"""
Golf Transcript - Replay-ready record of a round.

Call record_turn() right after each execute_turn() and finalize()
once the game has ended. All records are pydantic models holding
copied values, so later play never changes a recorded turn.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field

from ...engine_core.transcript import CardSnapshot, snapshot_card
from .game import GolfSession, TurnResult
from .grid import GolfGrid, count_face_up
from .rules import DrawSource, GolfMove, SwapMove, DiscardAndFlipMove
from .scoring import score_grid, score_visible_cards


class BoardSnapshot(BaseModel):
    grid: list[CardSnapshot]  # row-major
    face_up_count: int
    visible_score: int
    total_score: int


def snapshot_board(grid: GolfGrid) -> BoardSnapshot:
    return BoardSnapshot(
        grid=[snapshot_card(c) for c in grid],
        face_up_count=count_face_up(grid),
        visible_score=score_visible_cards(grid),
        total_score=score_grid(grid),
    )


class MoveRecord(BaseModel):
    kind: Literal["swap", "discard-and-flip"]
    row: int
    col: int


def move_to_record(move: GolfMove) -> MoveRecord:
    return MoveRecord(kind=move.kind, row=move.row, col=move.col)


def record_to_move(record: MoveRecord) -> GolfMove:
    if record.kind == SwapMove.kind:
        return SwapMove(record.row, record.col)
    return DiscardAndFlipMove(record.row, record.col)


class TurnRecord(BaseModel):
    turn_number: int
    player_index: int
    player_name: str
    draw_source: DrawSource
    drawn_card: CardSnapshot
    move: MoveRecord
    discarded_card: CardSnapshot
    board_states: list[BoardSnapshot]  # after the move
    discard_top: Optional[CardSnapshot] = None
    stock_remaining: int
    round_ended: bool


class PlayerRecord(BaseModel):
    name: str
    is_ai: bool
    strategy: Optional[str] = None


class GameMetadata(BaseModel):
    started_at: str
    ended_at: str = ""
    players: list[PlayerRecord]


class InitialState(BaseModel):
    board_states: list[BoardSnapshot]
    discard_top: Optional[CardSnapshot] = None
    stock_remaining: int


class GameResults(BaseModel):
    scores: list[int]
    winner_index: int
    winner_name: str


class GolfTranscript(BaseModel):
    version: int = 1
    game: Literal["golf"] = "golf"
    metadata: GameMetadata
    initial_state: InitialState
    turns: list[TurnRecord] = Field(default_factory=list)
    results: Optional[GameResults] = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _discard_top(session: GolfSession) -> CardSnapshot | None:
    top = session.shared.discard_pile.peek()
    return snapshot_card(top) if top else None


def _board_states(session: GolfSession) -> list[BoardSnapshot]:
    return [snapshot_board(ps.grid) for ps in session.game_state.player_states]


class TranscriptRecorder:
    """
    Records a Golf transcript by capturing the table after each turn.

    Usage:
        recorder = TranscriptRecorder(session, ["greedy", "random"])
        result = execute_turn(session, action)
        recorder.record_turn(result, action.draw_source)
        transcript = recorder.finalize()
    """

    def __init__(
        self,
        session: GolfSession,
        player_strategies: Sequence[str | None] | None = None,
    ):
        self.session = session
        strategies = list(player_strategies or [])

        players = [
            PlayerRecord(
                name=p.name,
                is_ai=p.is_ai,
                strategy=strategies[i] if i < len(strategies) else None,
            )
            for i, p in enumerate(session.game_state.players)
        ]
        self._transcript = GolfTranscript(
            metadata=GameMetadata(started_at=_now(), players=players),
            initial_state=InitialState(
                board_states=_board_states(session),
                discard_top=_discard_top(session),
                stock_remaining=len(session.shared.stock_pile),
            ),
        )

    def record_turn(self, result: TurnResult, draw_source: DrawSource) -> TurnRecord:
        game_state = self.session.game_state
        record = TurnRecord(
            turn_number=len(self._transcript.turns),
            player_index=result.player_index,
            player_name=game_state.players[result.player_index].name,
            draw_source=draw_source,
            drawn_card=snapshot_card(result.drawn_card),
            move=move_to_record(result.move),
            discarded_card=snapshot_card(result.discarded_card),
            board_states=_board_states(self.session),
            discard_top=_discard_top(self.session),
            stock_remaining=len(self.session.shared.stock_pile),
            round_ended=result.round_ended,
        )
        self._transcript.turns.append(record)
        return record

    def finalize(self) -> GolfTranscript:
        """
        Stamp the end time and compute scores. Lowest score wins, first seat on ties.

        Returns a copy; turns recorded later do not change it.
        """
        self._transcript.metadata.ended_at = _now()

        scores = [score_grid(ps.grid) for ps in self.session.game_state.player_states]
        winner_index = scores.index(min(scores))
        self._transcript.results = GameResults(
            scores=scores,
            winner_index=winner_index,
            winner_name=self.session.game_state.players[winner_index].name,
        )
        return self._transcript.model_copy(deep=True)

    @property
    def transcript(self) -> GolfTranscript:
        """The transcript so far (may not be finalized)."""
        return self._transcript
