"""
Turn Sequencer - Player rotation and phase transitions over a GameState.

All functions mutate the state passed in. Turns only advance while
playing; phases only move forward along setup -> playing -> ended.
"""

from __future__ import annotations
from typing import TypeVar

from .errors import PhaseError
from .state import GameState, GamePhase, PlayerInfo

T = TypeVar("T")

VALID_TRANSITIONS: dict[GamePhase, tuple[GamePhase, ...]] = {
    GamePhase.SETUP: (GamePhase.PLAYING, GamePhase.ENDED),
    GamePhase.PLAYING: (GamePhase.ENDED,),
    GamePhase.ENDED: (),
}


def get_current_player(state: GameState[T]) -> PlayerInfo:
    return state.players[state.current_player_index]


def get_current_player_state(state: GameState[T]) -> T:
    return state.player_states[state.current_player_index]


def is_game_over(state: GameState[T]) -> bool:
    return state.phase == GamePhase.ENDED


def is_playing(state: GameState[T]) -> bool:
    return state.phase == GamePhase.PLAYING


def advance_turn(state: GameState[T]) -> None:
    """
    Rotate to the next player (wrapping) and bump the turn counter.

    Raises:
        PhaseError: the game has ended or is still in setup
    """
    if state.phase == GamePhase.ENDED:
        raise PhaseError("Cannot advance turn: game has ended")
    if state.phase == GamePhase.SETUP:
        raise PhaseError(
            "Cannot advance turn during setup phase; transition to playing first"
        )

    state.current_player_index = (state.current_player_index + 1) % len(state.players)
    state.turn_number += 1


def transition_to(state: GameState[T], new_phase: GamePhase) -> None:
    """
    Move the game to a new phase.

    Raises:
        PhaseError: same phase, or the edge is not in VALID_TRANSITIONS
    """
    current = state.phase
    if current == new_phase:
        raise PhaseError(f'Game is already in phase "{current.value}"')

    allowed = VALID_TRANSITIONS[current]
    if new_phase not in allowed:
        allowed_text = ", ".join(p.value for p in allowed) or "none"
        raise PhaseError(
            f'Invalid phase transition: "{current.value}" -> "{new_phase.value}". '
            f'Allowed transitions from "{current.value}": {allowed_text}'
        )

    state.phase = new_phase


def start_game(state: GameState[T]) -> None:
    """setup -> playing."""
    transition_to(state, GamePhase.PLAYING)


def end_game(state: GameState[T]) -> None:
    """setup/playing -> ended."""
    transition_to(state, GamePhase.ENDED)
