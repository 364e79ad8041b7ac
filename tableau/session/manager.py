"""
Session Manager - Creates and tracks game sessions.

LIFECYCLE:
1. Client creates a session (Beleaguered Castle deal or Golf round)
2. Moves/turns are applied through the session driver
3. Session ends on request or is cleaned up once stale
4. Ended sessions are removed from memory

PERSISTENCE RULES:
- In-memory only, no database
- A session lives for one deal/round and has no identity beyond it
- Transcripts are handed back to the client, never stored
"""

from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from ..bots.policy import get_strategy
from ..engine_core.rng import create_seeded_rng
from ..games.golf.game import setup_golf_game
from .castle import CastleSession
from .golf_loop import GolfGameLoop

logger = logging.getLogger(__name__)

SEED_RANGE = 2 ** 32


class GameKind(Enum):
    BELEAGUERED_CASTLE = "beleaguered-castle"
    GOLF = "golf"


class SessionState(Enum):
    """State of a managed session."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    A managed game session.

    Exactly one of castle / golf is set, matching kind.
    """
    session_id: str
    kind: GameKind
    seed: int
    created_at: float
    state: SessionState = SessionState.ACTIVE

    castle: CastleSession | None = None
    golf: GolfGameLoop | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def is_game_over(self) -> bool:
        if self.castle is not None:
            return self.castle.is_won()
        if self.golf is not None:
            return self.golf.is_over
        return True

    def refresh_state(self) -> None:
        """Mark the session over once its game has ended."""
        if self.state == SessionState.ACTIVE and self.is_game_over():
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with reproducible seeds
    - Track active sessions
    - Clean up ended and stale sessions
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_castle_session(
        self,
        seed: int | None = None,
        auto_move: bool = True,
    ) -> Session:
        """
        Deal a new Beleaguered Castle game.

        Args:
            seed: Deal seed; random when omitted
            auto_move: Apply safe auto-moves after each player move
        """
        if seed is None:
            seed = random.randrange(SEED_RANGE)

        session = Session(
            session_id=str(uuid.uuid4()),
            kind=GameKind.BELEAGUERED_CASTLE,
            seed=seed,
            created_at=time.time(),
            castle=CastleSession(seed, auto_move=auto_move),
        )
        self._sessions[session.session_id] = session
        logger.info("Created castle session %s (seed %d)", session.session_id, seed)
        return session

    def create_golf_session(
        self,
        player_names: Sequence[str] | None = None,
        strategies: Sequence[str | None] | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Deal a new Golf round.

        Args:
            player_names: One name per seat (defaults to two seats)
            strategies: Strategy name per seat, None for a human seat.
                Defaults to a human first seat and greedy AI for the rest.
            seed: Shuffle and AI seed; random when omitted

        Raises:
            KeyError: unknown strategy name
            MalformedConstructionError: unsupported player count
        """
        if seed is None:
            seed = random.randrange(SEED_RANGE)

        if player_names is not None:
            player_count = len(player_names)
        elif strategies is not None:
            player_count = len(strategies)
        else:
            player_count = 2

        if strategies is None:
            strategies = [None] + ["greedy"] * (player_count - 1)
        if len(strategies) != player_count:
            raise ValueError(
                f"Expected {player_count} strategy entries, got {len(strategies)}"
            )

        bots = {i: get_strategy(name) for i, name in enumerate(strategies) if name is not None}

        rng = create_seeded_rng(seed)
        golf_session = setup_golf_game(
            player_count=player_count,
            player_names=player_names,
            is_ai=[i in bots for i in range(player_count)],
            rng=rng,
        )

        session = Session(
            session_id=str(uuid.uuid4()),
            kind=GameKind.GOLF,
            seed=seed,
            created_at=time.time(),
            golf=GolfGameLoop(golf_session, bots, rng),
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Created golf session %s (seed %d, %d players)",
            session.session_id, seed, player_count,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """
        End a session and drop it from memory.

        Returns the removed session, or None if it was unknown.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            if reason == "completed" or session.is_game_over():
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
            logger.info("Ended session %s (%s)", session_id, reason)
        return session

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        for session in self._sessions.values():
            session.refresh_state()
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: float = 3600) -> list[str]:
        """
        Drop sessions older than max_age_seconds. Returns the removed IDs.

        Called periodically to free memory.
        """
        current_time = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale

    def __len__(self) -> int:
        return len(self._sessions)
