"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.
Board snapshots reuse the transcript models so that what a client
sees is exactly what a transcript records.

Error Codes:
- ILLEGAL_MOVE: The move or turn broke a rule, or drew from an empty pile
- GAME_OVER: The game has already ended
- SESSION_NOT_FOUND: Session does not exist or has been cleaned up
- VALIDATION_ERROR: Request parameters are malformed
"""

from enum import Enum
from typing import Optional, Any, Literal
from pydantic import BaseModel, Field

from ..engine_core.cards import Rank, Suit
from ..games.beleaguered_castle.transcript import (
    BoardSnapshot as CastleBoardSnapshot,
    GameOutcome,
    MoveRecord as CastleMoveRecord,
)
from ..games.golf.rules import DrawSource
from ..games.golf.transcript import MoveRecord as GolfMoveRecord, TurnRecord


# =============================================================================
# Enums
# =============================================================================

class GameType(str, Enum):
    BELEAGUERED_CASTLE = "beleaguered-castle"
    GOLF = "golf"


class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    YOUR_TURN = "your_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    GAME_OVER = "GAME_OVER"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardView(BaseModel):
    """A card as a client may see it. Face-down cards hide rank and suit."""
    rank: Optional[Rank] = None
    suit: Optional[Suit] = None
    face_up: bool


class SessionSummary(BaseModel):
    session_id: str
    game: GameType
    status: SessionStatus
    seed: int
    created_at: float


# =============================================================================
# Request Models
# =============================================================================

class CreateCastleSessionRequest(BaseModel):
    """Request to deal a new Beleaguered Castle game."""
    seed: Optional[int] = Field(None, ge=0, description="Deal seed for reproducible games")
    auto_move: bool = Field(True, description="Play safe foundation moves automatically")


class CastleMoveRequest(BaseModel):
    """A Beleaguered Castle move."""
    kind: Literal["tableau-to-tableau", "tableau-to-foundation"]
    from_col: int = Field(..., ge=0)
    to_col: Optional[int] = Field(None, ge=0, description="Target column (tableau-to-tableau)")
    to_foundation: Optional[int] = Field(None, ge=0, description="Target foundation (tableau-to-foundation)")


class CreateGolfSessionRequest(BaseModel):
    """Request to deal a new Golf round."""
    player_names: Optional[list[str]] = Field(None, description="One name per seat, at least 2")
    strategies: Optional[list[Optional[str]]] = Field(
        None, description="Strategy per seat (random, greedy), null for a human seat"
    )
    seed: Optional[int] = Field(None, ge=0, description="Seed for reproducible games")


class GolfTurnRequest(BaseModel):
    """A human Golf turn."""
    draw_source: DrawSource
    move: GolfMoveRecord


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class CastleStateResponse(BaseModel):
    """Beleaguered Castle board and what can be done next."""
    session_id: str
    status: SessionStatus
    seed: int
    move_count: int
    outcome: GameOutcome
    board: CastleBoardSnapshot
    legal_moves: list[CastleMoveRecord] = Field(default_factory=list)
    can_undo: bool = False
    can_redo: bool = False
    can_auto_complete: bool = False
    api_version: str = "v1"


class CastleMoveResponse(BaseModel):
    """Result of a move, undo, redo or auto-complete."""
    applied_moves: list[CastleMoveRecord] = Field(default_factory=list)
    state: CastleStateResponse
    api_version: str = "v1"


class GolfPlayerView(BaseModel):
    name: str
    is_ai: bool
    strategy: Optional[str] = None
    grid: list[CardView]
    face_up_count: int
    visible_score: int
    is_current_turn: bool = False


class GolfStateResponse(BaseModel):
    """Golf table as seen by a client."""
    session_id: str
    status: SessionStatus
    seed: int
    turn_number: int
    current_player_index: int
    players: list[GolfPlayerView] = Field(default_factory=list)
    discard_top: Optional[CardView] = None
    stock_remaining: int
    round_end_triggered_by: Optional[int] = None
    scores: Optional[list[int]] = Field(None, description="Full scores, once the round is over")
    winner_index: Optional[int] = None
    api_version: str = "v1"


class GolfTurnResponse(BaseModel):
    """Turns played by one request: the human turn and any AI turns after it."""
    turns: list[TurnRecord] = Field(default_factory=list)
    state: GolfStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[SessionSummary]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
