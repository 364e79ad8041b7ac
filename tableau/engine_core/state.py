"""
Game State - Generic turn-based state container.

Design principles:
- Game-agnostic: per-player data is a type parameter
- Mutated in place by the turn sequencer and rule engines
- Lives for one deal/session, no identity beyond it
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, TypeVar

from .errors import MalformedConstructionError

T = TypeVar("T")


class GamePhase(Enum):
    """
    High-level game phases.

    setup -> playing -> ended, or setup -> ended. Nothing leaves ended.
    """
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass(frozen=True)
class PlayerInfo:
    """Who sits in a seat."""
    name: str
    is_ai: bool = False


@dataclass
class GameState(Generic[T]):
    """
    Players, their game-specific state, and whose turn it is.

    player_states is parallel to players. turn_number starts at 0 and
    only ever increases.
    """
    players: list[PlayerInfo]
    player_states: list[T]
    current_player_index: int = 0
    phase: GamePhase = GamePhase.SETUP
    turn_number: int = 0

    @property
    def num_players(self) -> int:
        return len(self.players)


def create_game_state(
    players: list[PlayerInfo],
    create_player_state: Callable[[int], T],
    initial_phase: GamePhase = GamePhase.SETUP,
    first_player_index: int = 0,
) -> GameState[T]:
    """
    Create a new GameState.

    Args:
        players: Seats in turn order (at least 2)
        create_player_state: Called once per seat index
        initial_phase: Starting phase
        first_player_index: Seat that acts first

    Raises:
        MalformedConstructionError: fewer than 2 players, or the first
            player index is out of range
    """
    if len(players) < 2:
        raise MalformedConstructionError(
            f"A game requires at least 2 players, got {len(players)}"
        )
    if not 0 <= first_player_index < len(players):
        raise MalformedConstructionError(
            f"first_player_index {first_player_index} is out of bounds "
            f"for {len(players)} players"
        )

    return GameState(
        players=list(players),
        player_states=[create_player_state(i) for i in range(len(players))],
        current_player_index=first_player_index,
        phase=initial_phase,
        turn_number=0,
    )
