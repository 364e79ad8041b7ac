"""
Beleaguered Castle - Open patience with four foundations and eight columns.

Key mechanics:
- Aces start on the foundations; 48 cards are dealt face-up into 8 columns
- Foundations build up by suit, columns build down ignoring suit
- Only column tops move; empty columns accept anything

This module contains:
- Board state and move types
- Rules: deal, legality, apply/undo, win/stuck detection
- Solver: safe auto-moves and auto-complete
- Reversible move commands and the transcript recorder
"""

from .state import (
    BeleagueredCastleState,
    BCMove,
    TableauToFoundationMove,
    TableauToTableauMove,
    FOUNDATION_COUNT,
    FOUNDATION_SUITS,
    TABLEAU_COUNT,
    CARDS_PER_COLUMN,
)
from .rules import (
    deal,
    rank_value,
    next_rank,
    foundation_index,
    foundation_top_rank,
    is_legal_foundation_move,
    is_legal_tableau_move,
    is_legal_move,
    apply_move,
    undo_move,
    get_legal_moves,
    has_no_moves,
    is_won,
    find_safe_auto_moves,
    apply_safe_auto_moves,
    is_trivially_winnable,
    get_auto_complete_moves,
)
from .commands import MoveCommand, build_move_command
from .transcript import CastleTranscriptRecorder, GameOutcome, snapshot_board

__all__ = [
    "BeleagueredCastleState",
    "BCMove",
    "TableauToFoundationMove",
    "TableauToTableauMove",
    "FOUNDATION_COUNT",
    "FOUNDATION_SUITS",
    "TABLEAU_COUNT",
    "CARDS_PER_COLUMN",
    "deal",
    "rank_value",
    "next_rank",
    "foundation_index",
    "foundation_top_rank",
    "is_legal_foundation_move",
    "is_legal_tableau_move",
    "is_legal_move",
    "apply_move",
    "undo_move",
    "get_legal_moves",
    "has_no_moves",
    "is_won",
    "find_safe_auto_moves",
    "apply_safe_auto_moves",
    "is_trivially_winnable",
    "get_auto_complete_moves",
    "MoveCommand",
    "build_move_command",
    "CastleTranscriptRecorder",
    "GameOutcome",
    "snapshot_board",
]
