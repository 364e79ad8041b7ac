"""
FastAPI Application - REST API for patience game sessions.

Endpoints:
    POST   /api/v1/castle/sessions                      Deal a Beleaguered Castle game
    GET    /api/v1/castle/sessions/{id}                 Board, legal moves, undo/redo state
    POST   /api/v1/castle/sessions/{id}/moves           Play a move (+ safe auto-moves)
    POST   /api/v1/castle/sessions/{id}/undo            Undo the last step
    POST   /api/v1/castle/sessions/{id}/redo            Redo the last undone step
    POST   /api/v1/castle/sessions/{id}/auto-complete   Finish a trivially winnable board
    GET    /api/v1/castle/sessions/{id}/transcript      Game transcript
    POST   /api/v1/golf/sessions                        Deal a Golf round
    GET    /api/v1/golf/sessions/{id}                   Table state
    POST   /api/v1/golf/sessions/{id}/turns             Play a human turn (AI turns follow)
    GET    /api/v1/golf/sessions/{id}/transcript        Round transcript
    GET    /api/v1/sessions                             List sessions
    DELETE /api/v1/sessions/{id}                        End session

All responses are JSON with explicit Pydantic schemas. Errors use
ErrorResponse: 404 for unknown sessions, 409 once a game is over,
400 otherwise.
"""

from typing import Annotated, Optional, Union
import logging
import os

# Environment configuration
TABLEAU_ENV = os.getenv("TABLEAU_ENV", "development")
TABLEAU_LOG_LEVEL = os.getenv("TABLEAU_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
TABLEAU_SESSION_MAX_AGE = float(os.getenv("TABLEAU_SESSION_MAX_AGE", "3600"))

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Query
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        CreateCastleSessionRequest,
        CastleMoveRequest,
        CreateGolfSessionRequest,
        GolfTurnRequest,
        # Response models
        CastleStateResponse,
        CastleMoveResponse,
        GolfStateResponse,
        GolfTurnResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..games.beleaguered_castle.transcript import CastleTranscript
    from ..games.golf.transcript import GolfTranscript

    logging.getLogger("tableau").setLevel(TABLEAU_LOG_LEVEL.upper())

    app = FastAPI(
        title="Tableau Engine API",
        description="""
Patience card game engine - Beleaguered Castle and 9-Card Golf.

## Error Codes

| Code | Description |
|------|-------------|
| `ILLEGAL_MOVE` | The move broke a rule or drew from an empty pile |
| `GAME_OVER` | The game has already ended |
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Request parameters are malformed |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    STATUS_CODES = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.GAME_OVER: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=STATUS_CODES.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            return make_error_response(result)
        return result

    error_responses = {
        400: {"model": ErrorResponse, "description": "Illegal move or bad request"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Game is over"},
    }

    # =========================================================================
    # Beleaguered Castle Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/castle/sessions",
        response_model=CastleStateResponse,
        tags=["Beleaguered Castle"],
        summary="Deal a new Beleaguered Castle game",
    )
    async def create_castle_session(
        request: Optional[CreateCastleSessionRequest] = None,
    ) -> CastleStateResponse:
        """Deal a game. The same seed always produces the same deal."""
        api_service.cleanup(TABLEAU_SESSION_MAX_AGE)
        return api_service.create_castle_session(request or CreateCastleSessionRequest())

    @app.get(
        "/api/v1/castle/sessions/{session_id}",
        response_model=CastleStateResponse,
        responses={404: error_responses[404]},
        tags=["Beleaguered Castle"],
        summary="Get the board",
    )
    async def get_castle_session(session_id: str) -> Union[CastleStateResponse, JSONResponse]:
        return respond(api_service.get_castle_state(session_id))

    @app.post(
        "/api/v1/castle/sessions/{session_id}/moves",
        response_model=CastleMoveResponse,
        responses=error_responses,
        tags=["Beleaguered Castle"],
        summary="Play a move",
    )
    async def castle_move(
        session_id: str,
        request: CastleMoveRequest,
    ) -> Union[CastleMoveResponse, JSONResponse]:
        """
        Play a move. With auto-move enabled, safe foundation moves that
        follow are applied too and undo together with it.
        """
        return respond(api_service.castle_move(session_id, request))

    @app.post(
        "/api/v1/castle/sessions/{session_id}/undo",
        response_model=CastleMoveResponse,
        responses=error_responses,
        tags=["Beleaguered Castle"],
        summary="Undo the last step",
    )
    async def castle_undo(session_id: str) -> Union[CastleMoveResponse, JSONResponse]:
        return respond(api_service.castle_undo(session_id))

    @app.post(
        "/api/v1/castle/sessions/{session_id}/redo",
        response_model=CastleMoveResponse,
        responses=error_responses,
        tags=["Beleaguered Castle"],
        summary="Redo the last undone step",
    )
    async def castle_redo(session_id: str) -> Union[CastleMoveResponse, JSONResponse]:
        return respond(api_service.castle_redo(session_id))

    @app.post(
        "/api/v1/castle/sessions/{session_id}/auto-complete",
        response_model=CastleMoveResponse,
        responses=error_responses,
        tags=["Beleaguered Castle"],
        summary="Finish a trivially winnable board",
    )
    async def castle_auto_complete(session_id: str) -> Union[CastleMoveResponse, JSONResponse]:
        return respond(api_service.castle_auto_complete(session_id))

    @app.get(
        "/api/v1/castle/sessions/{session_id}/transcript",
        response_model=CastleTranscript,
        responses={404: error_responses[404]},
        tags=["Beleaguered Castle"],
        summary="Get the game transcript",
    )
    async def castle_transcript(session_id: str) -> Union[CastleTranscript, JSONResponse]:
        return respond(api_service.castle_transcript(session_id))

    # =========================================================================
    # Golf Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/golf/sessions",
        response_model=GolfStateResponse,
        responses={400: error_responses[400]},
        tags=["Golf"],
        summary="Deal a new Golf round",
    )
    async def create_golf_session(
        request: Optional[CreateGolfSessionRequest] = None,
    ) -> Union[GolfStateResponse, JSONResponse]:
        """
        Deal a round. Seats with a strategy are played by the engine;
        seats without one wait for `POST /turns`.
        """
        api_service.cleanup(TABLEAU_SESSION_MAX_AGE)
        return respond(api_service.create_golf_session(request or CreateGolfSessionRequest()))

    @app.get(
        "/api/v1/golf/sessions/{session_id}",
        response_model=GolfStateResponse,
        responses={404: error_responses[404]},
        tags=["Golf"],
        summary="Get the table",
    )
    async def get_golf_session(session_id: str) -> Union[GolfStateResponse, JSONResponse]:
        return respond(api_service.get_golf_state(session_id))

    @app.post(
        "/api/v1/golf/sessions/{session_id}/turns",
        response_model=GolfTurnResponse,
        responses=error_responses,
        tags=["Golf"],
        summary="Play a human turn",
    )
    async def golf_turn(
        session_id: str,
        request: GolfTurnRequest,
    ) -> Union[GolfTurnResponse, JSONResponse]:
        """Play the human turn; AI turns up to the next human follow."""
        return respond(api_service.golf_turn(session_id, request))

    @app.get(
        "/api/v1/golf/sessions/{session_id}/transcript",
        response_model=GolfTranscript,
        responses={404: error_responses[404]},
        tags=["Golf"],
        summary="Get the round transcript",
    )
    async def golf_transcript(session_id: str) -> Union[GolfTranscript, JSONResponse]:
        return respond(api_service.golf_transcript(session_id))

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: error_responses[404]},
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> Union[EndSessionResponse, JSONResponse]:
        """End a session and release its memory."""
        if not api_service.end_session(session_id, reason):
            return make_error_response(ErrorResponse(
                error=f"Session {session_id} not found",
                error_code=ErrorCode.SESSION_NOT_FOUND,
            ))
        return EndSessionResponse(success=True, session_id=session_id)

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="tableau-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tableau Engine API",
            "version": API_VERSION,
            "environment": TABLEAU_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    logger.info("Created app (env=%s)", TABLEAU_ENV)
    return app


# For running directly: uvicorn tableau.api.app:app
app = create_app()
