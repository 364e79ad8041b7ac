"""
Tests for API layer.

Tests:
- API service methods
- Request/response serialization
- Session lifecycle via API
- Error handling
"""

import pytest

from ..api.schemas import (
    CastleMoveRequest,
    CreateCastleSessionRequest,
    CreateGolfSessionRequest,
    ErrorCode,
    ErrorResponse,
    GolfTurnRequest,
    SessionStatus,
)
from ..api.service import APIService, card_view, error_response
from ..engine_core.cards import Card, Rank, Suit
from ..engine_core.errors import (
    EmptySourceError,
    IllegalMoveError,
    MalformedConstructionError,
    PhaseError,
)
from ..games.golf.transcript import MoveRecord as GolfMoveRecord

C, D, H, S = Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES


def flip_request(row, col, draw_source="stock"):
    return GolfTurnRequest(
        draw_source=draw_source,
        move=GolfMoveRecord(kind="discard-and-flip", row=row, col=col),
    )


class TestHelpers:
    """Tests for the response helpers."""

    def test_card_view_hides_face_down(self):
        hidden = card_view(Card(Rank.KING, Suit.HEARTS))
        shown = card_view(Card(Rank.KING, Suit.HEARTS, face_up=True))

        assert hidden.rank is None and hidden.suit is None
        assert shown.rank == Rank.KING and shown.suit == Suit.HEARTS

    @pytest.mark.parametrize("exc, code", [
        (IllegalMoveError("no"), ErrorCode.ILLEGAL_MOVE),
        (EmptySourceError("empty"), ErrorCode.ILLEGAL_MOVE),
        (PhaseError("over"), ErrorCode.GAME_OVER),
        (MalformedConstructionError("bad"), ErrorCode.VALIDATION_ERROR),
        (KeyError("Unknown strategy"), ErrorCode.VALIDATION_ERROR),
        (ValueError("bad"), ErrorCode.VALIDATION_ERROR),
        (RuntimeError("boom"), ErrorCode.INTERNAL_ERROR),
    ])
    def test_error_codes(self, exc, code):
        response = error_response(exc)
        assert response.error_code == code
        assert response.details["type"] == type(exc).__name__

    def test_key_error_message_is_unquoted(self):
        assert error_response(KeyError("Unknown strategy")).error == "Unknown strategy"


class TestCastleAPI:
    """Tests for the Beleaguered Castle endpoints of APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    @pytest.fixture
    def open_board(self, service, make_castle):
        """Session on a hand-built board: K,9 / 10 / 5 over bare aces."""
        response = service.create_castle_session(CreateCastleSessionRequest(seed=1))
        session = service.session_manager.get_session(response.session_id)
        session.castle.state = make_castle(columns=[
            [(Rank.KING, C), (Rank.NINE, H)],
            [(Rank.TEN, S)],
            [(Rank.FIVE, D)],
        ])
        return response.session_id

    def test_create_session(self, service):
        """Dealing returns the full board and its legal moves."""
        response = service.create_castle_session(CreateCastleSessionRequest(seed=42))

        assert response.seed == 42
        assert response.move_count == 0
        assert [len(c.cards) for c in response.board.tableau] == [6] * 8
        assert [f.size for f in response.board.foundations] == [1] * 4
        assert not response.can_undo

    def test_same_seed_same_board(self, service):
        """Seeded deals are reproducible across sessions."""
        first = service.create_castle_session(CreateCastleSessionRequest(seed=7))
        second = service.create_castle_session(CreateCastleSessionRequest(seed=7))
        assert first.board == second.board
        assert first.legal_moves == second.legal_moves

    def test_move_undo_redo(self, service, open_board):
        """A move can be undone and redone."""
        request = CastleMoveRequest(kind="tableau-to-tableau", from_col=0, to_col=1)

        moved = service.castle_move(open_board, request)
        assert [m.kind for m in moved.applied_moves] == ["tableau-to-tableau"]
        assert moved.state.move_count == 1
        assert moved.state.can_undo

        undone = service.castle_undo(open_board)
        assert undone.state.move_count == 0
        assert undone.state.can_redo

        redone = service.castle_redo(open_board)
        assert redone.state.board == moved.state.board

    def test_illegal_move(self, service, open_board):
        """Illegal moves are rejected with ILLEGAL_MOVE."""
        request = CastleMoveRequest(kind="tableau-to-tableau", from_col=2, to_col=0)
        response = service.castle_move(open_board, request)

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.ILLEGAL_MOVE
        assert service.get_castle_state(open_board).move_count == 0

    def test_move_missing_target(self, service, open_board):
        """A tableau move without to_col is a validation error."""
        request = CastleMoveRequest(kind="tableau-to-tableau", from_col=0)
        response = service.castle_move(open_board, request)
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_game_over(self, service, make_castle):
        """Moves after a win are rejected with GAME_OVER."""
        created = service.create_castle_session(CreateCastleSessionRequest(seed=1))
        session = service.session_manager.get_session(created.session_id)
        session.castle.state = make_castle(
            heights=(13, 13, 12, 11),
            columns=[[(Rank.KING, S), (Rank.QUEEN, S)], [(Rank.KING, H)]],
        )

        finished = service.castle_auto_complete(created.session_id)
        assert len(finished.applied_moves) == 3
        assert finished.state.status == SessionStatus.GAME_OVER
        assert finished.state.outcome == "win"

        response = service.castle_undo(created.session_id)
        assert response.error_code == ErrorCode.GAME_OVER

    def test_transcript(self, service, open_board):
        """The transcript lists every step."""
        service.castle_move(
            open_board, CastleMoveRequest(kind="tableau-to-tableau", from_col=0, to_col=1)
        )
        service.castle_undo(open_board)

        transcript = service.castle_transcript(open_board)
        assert [e.kind for e in transcript.moves] == ["player-move", "undo"]
        assert transcript.result.move_count == 0

    def test_unknown_session(self, service):
        """Unknown session IDs return SESSION_NOT_FOUND."""
        for response in (
            service.get_castle_state("nonexistent-id"),
            service.castle_undo("nonexistent-id"),
            service.castle_transcript("nonexistent-id"),
        ):
            assert response.error_code == ErrorCode.SESSION_NOT_FOUND


class TestGolfAPI:
    """Tests for the Golf endpoints of APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    def test_create_session(self, service):
        """Default table: human first seat, greedy AI second."""
        response = service.create_golf_session(CreateGolfSessionRequest(seed=3))

        assert response.status == SessionStatus.YOUR_TURN
        assert response.current_player_index == 0
        assert response.stock_remaining == 33
        assert response.scores is None
        assert [p.strategy for p in response.players] == [None, "greedy"]
        assert response.players[0].is_current_turn

        grid = response.players[1].grid
        assert [c.face_up for c in grid] == [True] * 3 + [False] * 6
        assert all(c.rank is None for c in grid[3:])

    def test_ai_first_seat_plays_immediately(self, service):
        """AI seats before the first human play on creation."""
        response = service.create_golf_session(
            CreateGolfSessionRequest(strategies=["greedy", None], seed=3)
        )
        assert response.turn_number == 1
        assert response.current_player_index == 1
        assert response.status == SessionStatus.YOUR_TURN

    def test_turn_plays_ai_reply(self, service):
        """A human turn is followed by the AI turn."""
        created = service.create_golf_session(CreateGolfSessionRequest(seed=3))

        response = service.golf_turn(created.session_id, flip_request(1, 0))

        assert [t.player_index for t in response.turns] == [0, 1]
        assert response.turns[0].move.kind == "discard-and-flip"
        assert response.state.current_player_index == 0
        assert response.state.players[0].face_up_count == 4

    def test_illegal_turn(self, service):
        """Flipping a face-up card is rejected."""
        created = service.create_golf_session(CreateGolfSessionRequest(seed=3))

        response = service.golf_turn(created.session_id, flip_request(0, 0))

        assert response.error_code == ErrorCode.ILLEGAL_MOVE
        assert service.get_golf_state(created.session_id).turn_number == 0

    def test_bad_requests(self, service):
        """Unknown strategies and player counts are validation errors."""
        unknown = service.create_golf_session(
            CreateGolfSessionRequest(strategies=[None, "perfect"])
        )
        too_many = service.create_golf_session(
            CreateGolfSessionRequest(player_names=[f"P{i}" for i in range(6)])
        )

        assert unknown.error_code == ErrorCode.VALIDATION_ERROR
        assert too_many.error_code == ErrorCode.VALIDATION_ERROR
        assert len(service.session_manager) == 0

    def test_all_ai_round(self, service):
        """An all-AI table plays out on creation."""
        response = service.create_golf_session(
            CreateGolfSessionRequest(strategies=["random", "random"], seed=5)
        )

        assert response.status == SessionStatus.GAME_OVER
        assert len(response.scores) == 2
        assert response.winner_index == response.scores.index(min(response.scores))

        turn = service.golf_turn(response.session_id, flip_request(1, 0))
        assert turn.error_code == ErrorCode.GAME_OVER

        transcript = service.golf_transcript(response.session_id)
        assert transcript.results.scores == response.scores

    def test_transcript_does_not_track_later_turns(self, service):
        """A fetched transcript is a snapshot of the round so far."""
        created = service.create_golf_session(CreateGolfSessionRequest(seed=3))
        transcript = service.golf_transcript(created.session_id)

        service.golf_turn(created.session_id, flip_request(1, 0))

        assert transcript.turns == []
        assert len(service.golf_transcript(created.session_id).turns) == 2

    def test_wrong_game_kind(self, service):
        """A castle session is not found through the Golf endpoints."""
        castle = service.create_castle_session(CreateCastleSessionRequest(seed=1))
        response = service.get_golf_state(castle.session_id)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND


class TestSessions:
    """Tests for session listing and ending."""

    @pytest.fixture
    def service(self):
        return APIService()

    def test_list_sessions(self, service):
        """Lists every session with its game type."""
        service.create_castle_session(CreateCastleSessionRequest(seed=1))
        service.create_golf_session(CreateGolfSessionRequest(seed=1))

        sessions = service.list_sessions()

        assert sorted(s.game.value for s in sessions) == ["beleaguered-castle", "golf"]

    def test_end_session(self, service):
        """Ended sessions are gone."""
        created = service.create_castle_session(CreateCastleSessionRequest(seed=1))

        assert service.end_session(created.session_id)
        assert not service.end_session(created.session_id)
        response = service.get_castle_state(created.session_id)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND
