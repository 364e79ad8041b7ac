"""
Session module - In-memory game sessions.

Provides:
- CastleSession: Beleaguered Castle driver with undo/redo
- GolfGameLoop: Golf turn driver with AI seats
- SessionManager: create, track and clean up sessions
"""

from .castle import CastleSession
from .golf_loop import GolfGameLoop, LoopState
from .manager import SessionManager, Session, SessionState, GameKind

__all__ = [
    "CastleSession",
    "GolfGameLoop",
    "LoopState",
    "SessionManager",
    "Session",
    "SessionState",
    "GameKind",
]
