"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Converts engine errors to ErrorResponse
4. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from ..engine_core.cards import Card
from ..engine_core.errors import EngineError, PhaseError, MalformedConstructionError
from ..games.beleaguered_castle.transcript import (
    CastleTranscript,
    MoveRecord as CastleMoveRecord,
    move_to_record as castle_move_to_record,
    record_to_move as castle_record_to_move,
)
from ..games.golf.grid import count_face_up
from ..games.golf.scoring import score_visible_cards
from ..games.golf.transcript import GolfTranscript, record_to_move as golf_record_to_move
from ..games.golf.game import GolfAction
from ..session import SessionManager, Session, GameKind
from ..session.manager import SessionState
from .schemas import (
    # Requests
    CreateCastleSessionRequest,
    CastleMoveRequest,
    CreateGolfSessionRequest,
    GolfTurnRequest,
    # Responses
    CastleStateResponse,
    CastleMoveResponse,
    GolfStateResponse,
    GolfTurnResponse,
    GolfPlayerView,
    ErrorResponse,
    SessionSummary,
    # Shared
    CardView,
    # Enums
    ErrorCode,
    GameType,
    SessionStatus,
)

logger = logging.getLogger(__name__)


def card_view(card: Card) -> CardView:
    """Rank and suit only for face-up cards."""
    if not card.face_up:
        return CardView(face_up=False)
    return CardView(rank=card.rank, suit=card.suit, face_up=True)


def error_response(exc: Exception) -> ErrorResponse:
    """Map an engine or validation error to its structured code."""
    if isinstance(exc, PhaseError):
        code = ErrorCode.GAME_OVER
    elif isinstance(exc, (MalformedConstructionError, KeyError, ValueError)):
        code = ErrorCode.VALIDATION_ERROR
    elif isinstance(exc, EngineError):
        code = ErrorCode.ILLEGAL_MOVE
    else:
        code = ErrorCode.INTERNAL_ERROR

    message = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    return ErrorResponse(
        error=message,
        error_code=code,
        details={"type": type(exc).__name__},
    )


def session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_castle_session(CreateCastleSessionRequest(seed=42))
        result = service.castle_move(state.session_id, move_request)

        table = service.create_golf_session(CreateGolfSessionRequest())
        result = service.golf_turn(table.session_id, turn_request)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Beleaguered Castle
    # =========================================================================

    def create_castle_session(
        self,
        request: CreateCastleSessionRequest,
    ) -> CastleStateResponse:
        session = self.session_manager.create_castle_session(
            seed=request.seed,
            auto_move=request.auto_move,
        )
        return self._castle_state(session)

    def get_castle_state(self, session_id: str) -> CastleStateResponse | ErrorResponse:
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)
        return self._castle_state(session)

    def castle_move(
        self,
        session_id: str,
        request: CastleMoveRequest,
    ) -> CastleMoveResponse | ErrorResponse:
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)

        try:
            move = castle_record_to_move(CastleMoveRecord(**request.model_dump()))
            applied = session.castle.move(move)
        except (EngineError, ValueError) as e:
            return self._rejected(session_id, e)

        return self._castle_move_response(session, applied)

    def castle_undo(self, session_id: str) -> CastleMoveResponse | ErrorResponse:
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)

        try:
            session.castle.undo()
        except EngineError as e:
            return self._rejected(session_id, e)
        return self._castle_move_response(session, [])

    def castle_redo(self, session_id: str) -> CastleMoveResponse | ErrorResponse:
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)

        try:
            session.castle.redo()
        except EngineError as e:
            return self._rejected(session_id, e)
        return self._castle_move_response(session, [])

    def castle_auto_complete(self, session_id: str) -> CastleMoveResponse | ErrorResponse:
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)

        try:
            applied = session.castle.auto_complete()
        except EngineError as e:
            return self._rejected(session_id, e)
        return self._castle_move_response(session, applied)

    def castle_transcript(self, session_id: str) -> CastleTranscript | ErrorResponse:
        """Transcript with the result as of now."""
        session = self._get(session_id, GameKind.BELEAGUERED_CASTLE)
        if session is None:
            return session_not_found(session_id)
        return session.castle.finalize()

    # =========================================================================
    # Golf
    # =========================================================================

    def create_golf_session(
        self,
        request: CreateGolfSessionRequest,
    ) -> GolfStateResponse | ErrorResponse:
        """Deal a round; AI seats ahead of the first human play immediately."""
        try:
            session = self.session_manager.create_golf_session(
                player_names=request.player_names,
                strategies=request.strategies,
                seed=request.seed,
            )
        except (EngineError, KeyError, ValueError) as e:
            logger.warning("Rejected golf session request: %s", e)
            return error_response(e)

        session.golf.run_ai_turns()
        session.refresh_state()
        return self._golf_state(session)

    def get_golf_state(self, session_id: str) -> GolfStateResponse | ErrorResponse:
        session = self._get(session_id, GameKind.GOLF)
        if session is None:
            return session_not_found(session_id)
        return self._golf_state(session)

    def golf_turn(
        self,
        session_id: str,
        request: GolfTurnRequest,
    ) -> GolfTurnResponse | ErrorResponse:
        """
        Play the human turn, then every AI turn up to the next human.
        """
        session = self._get(session_id, GameKind.GOLF)
        if session is None:
            return session_not_found(session_id)

        loop = session.golf
        if not loop.is_over and not loop.current_player_needs_input():
            return error_response(ValueError("It is not a human player's turn"))

        before = len(loop.recorder.transcript.turns)
        try:
            action = GolfAction(
                draw_source=request.draw_source,
                move=golf_record_to_move(request.move),
            )
            loop.play_turn(action)
        except (EngineError, ValueError) as e:
            return self._rejected(session_id, e)

        loop.run_ai_turns()
        session.refresh_state()
        return GolfTurnResponse(
            turns=loop.recorder.transcript.turns[before:],
            state=self._golf_state(session),
        )

    def golf_transcript(self, session_id: str) -> GolfTranscript | ErrorResponse:
        session = self._get(session_id, GameKind.GOLF)
        if session is None:
            return session_not_found(session_id)
        if session.golf.is_over:
            return session.golf.finalize()
        return session.golf.recorder.transcript.model_copy(deep=True)

    # =========================================================================
    # Sessions
    # =========================================================================

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a session. Returns False if it did not exist."""
        return self.session_manager.end_session(session_id, reason) is not None

    def list_sessions(self) -> list[SessionSummary]:
        self.session_manager.list_active_sessions()
        return [self._summary(s) for s in self.session_manager.list_sessions()]

    def cleanup(self, max_age_seconds: float) -> list[str]:
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _get(self, session_id: str, kind: GameKind) -> Session | None:
        session = self.session_manager.get_session(session_id)
        if session is None or session.kind != kind:
            return None
        return session

    def _rejected(self, session_id: str, exc: Exception) -> ErrorResponse:
        logger.warning("Rejected action in session %s: %s", session_id, exc)
        return error_response(exc)

    def _status(self, session: Session) -> SessionStatus:
        session.refresh_state()
        if session.state != SessionState.ACTIVE:
            return SessionStatus.GAME_OVER
        if session.golf is not None and session.golf.current_player_needs_input():
            return SessionStatus.YOUR_TURN
        return SessionStatus.ACTIVE

    def _summary(self, session: Session) -> SessionSummary:
        return SessionSummary(
            session_id=session.session_id,
            game=GameType(session.kind.value),
            status=self._status(session),
            seed=session.seed,
            created_at=session.created_at,
        )

    def _castle_state(self, session: Session) -> CastleStateResponse:
        castle = session.castle
        return CastleStateResponse(
            session_id=session.session_id,
            status=self._status(session),
            seed=castle.seed,
            move_count=castle.move_count,
            outcome=castle.outcome,
            board=castle.snapshot(),
            legal_moves=[castle_move_to_record(m) for m in castle.legal_moves()],
            can_undo=castle.history.can_undo(),
            can_redo=castle.history.can_redo(),
            can_auto_complete=castle.can_auto_complete(),
        )

    def _castle_move_response(self, session: Session, applied) -> CastleMoveResponse:
        return CastleMoveResponse(
            applied_moves=[castle_move_to_record(m) for m in applied],
            state=self._castle_state(session),
        )

    def _golf_state(self, session: Session) -> GolfStateResponse:
        loop = session.golf
        game_state = loop.session.game_state
        shared = loop.session.shared

        players = []
        for i, (player, ps) in enumerate(zip(game_state.players, game_state.player_states)):
            strategy = loop.strategies.get(i)
            players.append(GolfPlayerView(
                name=player.name,
                is_ai=player.is_ai,
                strategy=strategy.get_name() if strategy else None,
                grid=[card_view(c) for c in ps.grid],
                face_up_count=count_face_up(ps.grid),
                visible_score=score_visible_cards(ps.grid),
                is_current_turn=not loop.is_over and i == game_state.current_player_index,
            ))

        discard_top = shared.discard_pile.peek()
        scores = loop.scores() if loop.is_over else None
        return GolfStateResponse(
            session_id=session.session_id,
            status=self._status(session),
            seed=session.seed,
            turn_number=game_state.turn_number,
            current_player_index=game_state.current_player_index,
            players=players,
            discard_top=card_view(discard_top) if discard_top else None,
            stock_remaining=len(shared.stock_pile),
            round_end_triggered_by=shared.round_end.triggering_player_index,
            scores=scores,
            winner_index=scores.index(min(scores)) if scores else None,
        )
