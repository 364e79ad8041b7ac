"""
Golf Game - Orchestration of grids, deck, discard pile, rules and turns.

Provides:
- GolfPlayerState / GolfSharedState / GolfSession containers
- setup_golf_game: deal, initial reveal, start play
- Legal move and draw source enumeration
- execute_turn: draw + move + discard + round-end check + rotation
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from ...engine_core.cards import Card
from ...engine_core.deck import create_standard_deck, shuffle, draw_or_raise
from ...engine_core.errors import (
    EmptySourceError,
    IllegalMoveError,
    MalformedConstructionError,
    PhaseError,
)
from ...engine_core.pile import Pile
from ...engine_core.rng import Rng
from ...engine_core.state import GameState, PlayerInfo, create_game_state
from ...engine_core.turns import advance_turn, end_game, is_playing, start_game
from .grid import GolfGrid, GRID_ROWS, GRID_COLS, GRID_SIZE, create_golf_grid
from .rules import (
    DrawSource,
    DiscardAndFlipMove,
    GolfMove,
    RoundEndState,
    SwapMove,
    apply_initial_reveal,
    apply_move,
    check_move_legality,
    check_round_end,
    create_round_end_state,
    is_legal_move,
)

logger = logging.getLogger(__name__)

DEFAULT_REVEAL: tuple[tuple[int, int], ...] = ((0, 0), (0, 1), (0, 2))

MAX_PLAYERS = (52 - 1) // GRID_SIZE


# =============================================================================
# State
# =============================================================================

@dataclass
class GolfPlayerState:
    grid: GolfGrid


@dataclass
class GolfSharedState:
    """Everything that is not per-player. stock_pile top is the last element."""
    stock_pile: list[Card]
    discard_pile: Pile
    round_end: RoundEndState


GolfGameState = GameState[GolfPlayerState]


@dataclass
class GolfSession:
    game_state: GolfGameState
    shared: GolfSharedState


@dataclass(frozen=True)
class GolfAction:
    """A full decision: where to draw from and what to do with the card."""
    draw_source: DrawSource
    move: GolfMove


# =============================================================================
# Setup
# =============================================================================

def setup_golf_game(
    player_count: int = 2,
    player_names: Sequence[str] | None = None,
    is_ai: Sequence[bool] | None = None,
    rng: Rng | None = None,
    initial_reveals: Sequence[Sequence[tuple[int, int]]] | None = None,
) -> GolfSession:
    """
    Deal a new Golf round and move it to the playing phase.

    Each player gets 9 cards from the top of the shuffled deck, then
    one face-up card starts the discard pile. Each player reveals 3
    cells, the top row unless initial_reveals says otherwise.

    Args:
        player_count: Number of seats
        player_names: Defaults to "Player 1", "Player 2", ...
        is_ai: Defaults to every seat but the first being AI
        rng: Shuffle source, platform random by default
        initial_reveals: Per-player reveal positions

    Raises:
        MalformedConstructionError: too few or too many players, or
            player_names / is_ai do not have one entry per player
        InitialRevealError: an initial reveal selection is invalid
    """
    if player_count > MAX_PLAYERS:
        raise MalformedConstructionError(
            f"Golf supports at most {MAX_PLAYERS} players, got {player_count}"
        )
    for label, values in (("player_names", player_names), ("is_ai", is_ai)):
        if values is not None and len(values) != player_count:
            raise MalformedConstructionError(
                f"{label} has {len(values)} entries for {player_count} players"
            )

    deck = shuffle(create_standard_deck(), rng)

    grid_cards = [
        [draw_or_raise(deck) for _ in range(GRID_SIZE)]
        for _ in range(player_count)
    ]

    first_discard = draw_or_raise(deck)
    first_discard.face_up = True

    names = list(player_names) if player_names is not None else [
        f"Player {i + 1}" for i in range(player_count)
    ]
    ai_flags = list(is_ai) if is_ai is not None else [
        i > 0 for i in range(player_count)
    ]

    game_state = create_game_state(
        players=[PlayerInfo(name=names[i], is_ai=ai_flags[i]) for i in range(player_count)],
        create_player_state=lambda i: GolfPlayerState(grid=create_golf_grid(grid_cards[i])),
    )

    for p, player_state in enumerate(game_state.player_states):
        positions = DEFAULT_REVEAL
        if initial_reveals is not None and p < len(initial_reveals):
            positions = initial_reveals[p]
        apply_initial_reveal(player_state.grid, positions)

    start_game(game_state)

    shared = GolfSharedState(
        stock_pile=deck,
        discard_pile=Pile([first_discard]),
        round_end=create_round_end_state(player_count),
    )

    logger.debug("Set up Golf for %d players, %d cards in stock", player_count, len(deck))
    return GolfSession(game_state=game_state, shared=shared)


# =============================================================================
# Enumeration
# =============================================================================

def enumerate_legal_moves(grid: GolfGrid) -> list[GolfMove]:
    """Every legal move, row-major, swap before discard-and-flip per cell."""
    moves: list[GolfMove] = []
    for row in range(GRID_ROWS):
        for col in range(GRID_COLS):
            for move in (SwapMove(row, col), DiscardAndFlipMove(row, col)):
                if is_legal_move(grid, move):
                    moves.append(move)
    return moves


def enumerate_draw_sources(shared: GolfSharedState) -> list[DrawSource]:
    """
    Sources that can be drawn from right now. Stock first.

    An empty stock is left out on purpose rather than offered and
    failing on draw, so every returned source can be drawn from.
    """
    sources = []
    if shared.stock_pile:
        sources.append(DrawSource.STOCK)
    if not shared.discard_pile.is_empty():
        sources.append(DrawSource.DISCARD)
    return sources


def peek_draw_source(shared: GolfSharedState, source: DrawSource) -> Card | None:
    """The card a draw would take, without taking it."""
    if source == DrawSource.STOCK:
        return shared.stock_pile[-1] if shared.stock_pile else None
    return shared.discard_pile.peek()


# =============================================================================
# Turn execution
# =============================================================================

@dataclass(frozen=True)
class TurnResult:
    drawn_card: Card
    move: GolfMove
    discarded_card: Card
    round_ended: bool
    player_index: int


def _draw(shared: GolfSharedState, source: DrawSource) -> Card:
    if source == DrawSource.STOCK:
        return draw_or_raise(shared.stock_pile)
    return shared.discard_pile.pop_or_raise()


def execute_turn(session: GolfSession, action: GolfAction) -> TurnResult:
    """
    Play one full turn for the current player.

    1. Draw from the chosen source.
    2. Apply the move.
    3. Push the discarded card onto the discard pile.
    4. Check for round end.
    5. End the game, or advance to the next player.

    The move and source are checked before anything is drawn, so a
    rejected turn leaves the session untouched.

    Raises:
        PhaseError: the game is not in the playing phase
        IllegalMoveError: the move is illegal for the current grid
        EmptySourceError: the chosen draw source is empty
    """
    game_state = session.game_state
    shared = session.shared

    if not is_playing(game_state):
        raise PhaseError(f"Cannot take a turn in phase \"{game_state.phase.value}\"")

    player_index = game_state.current_player_index
    player_state = game_state.player_states[player_index]

    check = check_move_legality(player_state.grid, action.move)
    if not check.legal:
        raise IllegalMoveError(check.reason)
    if peek_draw_source(shared, action.draw_source) is None:
        raise EmptySourceError(f"Cannot draw from empty {action.draw_source.value} pile")

    drawn_card = _draw(shared, action.draw_source)
    result = apply_move(player_state.grid, drawn_card, action.move)
    shared.discard_pile.push(result.discarded_card)

    round_ended = check_round_end(shared.round_end, player_index, player_state.grid)
    if round_ended:
        end_game(game_state)
    else:
        advance_turn(game_state)

    logger.debug(
        "Turn %d: player %d drew %s from %s and played %s",
        game_state.turn_number,
        player_index,
        drawn_card,
        action.draw_source.value,
        action.move.describe(),
    )
    return TurnResult(
        drawn_card=drawn_card,
        move=action.move,
        discarded_card=result.discarded_card,
        round_ended=round_ended,
        player_index=player_index,
    )
