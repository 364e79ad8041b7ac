"""
Game Events - Lifecycle notifications for observers.

The emitter is owned by a session object; there is no global
instance. Expected order per step:

    turn-completed -> (animation-complete) -> state-settled -> turn-started

with game-ended replacing the next turn-started once the phase is ended.
Listeners run synchronously in registration order; exceptions they
raise propagate to the emitter's caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .state import GamePhase


class GameEvent(Enum):
    TURN_STARTED = "turn-started"
    TURN_COMPLETED = "turn-completed"
    ANIMATION_COMPLETE = "animation-complete"
    STATE_SETTLED = "state-settled"
    GAME_ENDED = "game-ended"


@dataclass(frozen=True)
class TurnStartedPayload:
    turn_number: int
    player_index: int
    player_name: str
    is_ai: bool


@dataclass(frozen=True)
class TurnCompletedPayload:
    turn_number: int
    player_index: int
    player_name: str
    phase: GamePhase


@dataclass(frozen=True)
class AnimationCompletePayload:
    turn_number: int
    animation_id: str | None = None


@dataclass(frozen=True)
class StateSettledPayload:
    turn_number: int
    phase: GamePhase


@dataclass(frozen=True)
class GameEndedPayload:
    final_turn_number: int
    winner_index: int  # -1 for no winner
    reason: str | None = None


Listener = Callable[[Any], None]


class GameEventEmitter:
    """
    Minimal event emitter for game lifecycle events.

    Usage:
        emitter = GameEventEmitter()
        unsubscribe = emitter.on(GameEvent.TURN_STARTED, print)
        emitter.emit(GameEvent.TURN_STARTED, TurnStartedPayload(0, 0, "Alice", False))
        unsubscribe()
    """

    def __init__(self):
        self._listeners: dict[GameEvent, list[Listener]] = {}

    def on(self, event: GameEvent, listener: Listener) -> Callable[[], None]:
        """Subscribe to an event. Returns an unsubscribe function."""
        self._listeners.setdefault(event, []).append(listener)
        return lambda: self.off(event, listener)

    def once(self, event: GameEvent, listener: Listener) -> Callable[[], None]:
        """Subscribe for a single emission only."""
        def wrapper(payload):
            self.off(event, wrapper)
            listener(payload)

        return self.on(event, wrapper)

    def off(self, event: GameEvent, listener: Listener) -> None:
        """Remove one registration of a listener, if present."""
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def emit(self, event: GameEvent, payload: Any) -> None:
        """Call every listener for the event with the payload."""
        # Copy so listeners may unsubscribe while being called
        for listener in list(self._listeners.get(event, ())):
            listener(payload)

    def remove_all_listeners(self, event: GameEvent | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def listener_count(self, event: GameEvent) -> int:
        return len(self._listeners.get(event, ()))
