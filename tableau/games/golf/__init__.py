"""
9-Card Golf - Each player has a 3x3 grid; lowest score wins.

Key mechanics:
- Draw from stock or the discard pile, then swap into the grid or
  discard and flip a face-down cell
- A column of three matching ranks scores 0
- Once a grid is fully face-up, every other player gets one last turn
"""

from .grid import (
    GolfGrid,
    GRID_ROWS,
    GRID_COLS,
    GRID_SIZE,
    grid_index,
    grid_position,
    get_grid_card,
    is_grid_fully_revealed,
    count_face_up,
    create_golf_grid,
)
from .rules import (
    DrawSource,
    SwapMove,
    DiscardAndFlipMove,
    GolfMove,
    LegalityResult,
    MoveResult,
    RoundEndState,
    check_move_legality,
    is_legal_move,
    apply_move,
    check_initial_reveal,
    apply_initial_reveal,
    create_round_end_state,
    check_round_end,
    is_in_final_turns,
    needs_final_turn,
)
from .scoring import card_point_value, score_grid, score_visible_cards
from .game import (
    GolfPlayerState,
    GolfSharedState,
    GolfSession,
    GolfAction,
    TurnResult,
    setup_golf_game,
    enumerate_legal_moves,
    enumerate_draw_sources,
    execute_turn,
)
from .transcript import TranscriptRecorder, GolfTranscript, snapshot_board

__all__ = [
    "GolfGrid",
    "GRID_ROWS",
    "GRID_COLS",
    "GRID_SIZE",
    "grid_index",
    "grid_position",
    "get_grid_card",
    "is_grid_fully_revealed",
    "count_face_up",
    "create_golf_grid",
    "DrawSource",
    "SwapMove",
    "DiscardAndFlipMove",
    "GolfMove",
    "LegalityResult",
    "MoveResult",
    "RoundEndState",
    "check_move_legality",
    "is_legal_move",
    "apply_move",
    "check_initial_reveal",
    "apply_initial_reveal",
    "create_round_end_state",
    "check_round_end",
    "is_in_final_turns",
    "needs_final_turn",
    "card_point_value",
    "score_grid",
    "score_visible_cards",
    "GolfPlayerState",
    "GolfSharedState",
    "GolfSession",
    "GolfAction",
    "TurnResult",
    "setup_golf_game",
    "enumerate_legal_moves",
    "enumerate_draw_sources",
    "execute_turn",
    "TranscriptRecorder",
    "GolfTranscript",
    "snapshot_board",
]
