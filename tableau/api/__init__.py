"""
API Module - HTTP interface to game sessions.

Exposes the engine via a REST API. A client:
1. Creates a Beleaguered Castle or Golf session
2. Submits moves / turns and reads back the table
3. Fetches the transcript and ends the session

All state is session-scoped and in memory.
"""

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
    ErrorResponse,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateCastleSessionRequest",
    "CastleMoveRequest",
    "CreateGolfSessionRequest",
    "GolfTurnRequest",
    # Responses
    "CastleStateResponse",
    "CastleMoveResponse",
    "GolfStateResponse",
    "GolfTurnResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
