"""
Engine Core - Game-agnostic building blocks.

1. Cards, piles and decks with injectable RNG
2. Generic GameState and the turn sequencer
3. Reversible commands and the undo/redo manager
4. Lifecycle events and transcript snapshots
5. The error taxonomy every rule engine raises
"""

from .cards import Card, Rank, Suit, RANKS, SUITS, create_card
from .pile import Pile
from .deck import create_standard_deck, create_deck_from, shuffle, draw, draw_or_raise
from .rng import Rng, SeededRng, create_seeded_rng
from .errors import (
    EngineError,
    IllegalMoveError,
    EmptySourceError,
    MalformedConstructionError,
    InitialRevealError,
    OutOfBoundsError,
    PhaseError,
)
from .state import GameState, GamePhase, PlayerInfo, create_game_state
from .turns import (
    advance_turn,
    transition_to,
    start_game,
    end_game,
    get_current_player,
    get_current_player_state,
    is_game_over,
    is_playing,
)
from .undo import Command, CompoundCommand, UndoRedoManager
from .events import GameEvent, GameEventEmitter
from .transcript import CardSnapshot, snapshot_card

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "RANKS",
    "SUITS",
    "create_card",
    "Pile",
    "create_standard_deck",
    "create_deck_from",
    "shuffle",
    "draw",
    "draw_or_raise",
    "Rng",
    "SeededRng",
    "create_seeded_rng",
    "EngineError",
    "IllegalMoveError",
    "EmptySourceError",
    "MalformedConstructionError",
    "InitialRevealError",
    "OutOfBoundsError",
    "PhaseError",
    "GameState",
    "GamePhase",
    "PlayerInfo",
    "create_game_state",
    "advance_turn",
    "transition_to",
    "start_game",
    "end_game",
    "get_current_player",
    "get_current_player_state",
    "is_game_over",
    "is_playing",
    "Command",
    "CompoundCommand",
    "UndoRedoManager",
    "GameEvent",
    "GameEventEmitter",
    "CardSnapshot",
    "snapshot_card",
]
