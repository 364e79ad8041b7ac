"""
Beleaguered Castle Rules - Deal, legality, moves, termination and solver.

Classic rules:
- 52 cards, no jokers. Aces start on the four foundations.
- The other 48 cards are dealt face-up into 8 columns of 6.
- Foundations build up by suit, A to K.
- Columns build down regardless of suit; empty columns take any card.
- Only the top card of a column can move.
- Won when all 52 cards are on foundations; lost when no move remains.

Apply functions check legality before touching the board. Undo
functions are paired inverses of applied moves and do not re-check.
"""

from __future__ import annotations
import logging

from ...engine_core.cards import Card, Rank, Suit, RANKS
from ...engine_core.deck import create_standard_deck, shuffle
from ...engine_core.errors import IllegalMoveError, MalformedConstructionError
from ...engine_core.pile import Pile
from ...engine_core.rng import create_seeded_rng
from .state import (
    BeleagueredCastleState,
    BCMove,
    TableauToFoundationMove,
    TableauToTableauMove,
    FOUNDATION_COUNT,
    FOUNDATION_SUITS,
    TABLEAU_COUNT,
    CARDS_PER_COLUMN,
    CARDS_PER_SUIT,
)

logger = logging.getLogger(__name__)

_RANK_VALUE: dict[Rank, int] = {rank: i for i, rank in enumerate(RANKS)}

# Rank of an empty foundation's "top", one below Ace
EMPTY_FOUNDATION_RANK = -1


# =============================================================================
# Rank utilities
# =============================================================================

def rank_value(rank: Rank) -> int:
    """A=0 ... K=12."""
    return _RANK_VALUE[rank]


def next_rank(rank: Rank) -> Rank | None:
    """Next rank in the foundation sequence, or None after King."""
    value = _RANK_VALUE[rank]
    return RANKS[value + 1] if value < len(RANKS) - 1 else None


def foundation_index(suit: Suit) -> int:
    return FOUNDATION_SUITS.index(suit)


def foundation_top_rank(state: BeleagueredCastleState, fi: int) -> int:
    """Rank value of a foundation's top card, EMPTY_FOUNDATION_RANK if empty."""
    top = state.foundations[fi].peek()
    return rank_value(top.rank) if top else EMPTY_FOUNDATION_RANK


# =============================================================================
# Deal
# =============================================================================

def deal(seed: int) -> BeleagueredCastleState:
    """
    Deal a new game.

    1. Shuffle a standard deck with the seeded LCG.
    2. Turn every card face-up.
    3. Put each ace on its suit's foundation.
    4. Deal the other 48 cards in shuffle order, 6 per column,
       filling column 0 first.

    Raises:
        MalformedConstructionError: the non-ace remainder is not 48 cards
    """
    deck = shuffle(create_standard_deck(), create_seeded_rng(seed))
    for card in deck:
        card.face_up = True

    aces = [card for card in deck if card.rank == Rank.ACE]
    remaining = [card for card in deck if card.rank != Rank.ACE]

    foundations = [Pile() for _ in range(FOUNDATION_COUNT)]
    for ace in aces:
        foundations[foundation_index(ace.suit)].push(ace)

    expected = TABLEAU_COUNT * CARDS_PER_COLUMN
    if len(remaining) != expected:
        raise MalformedConstructionError(
            f"Expected {expected} non-ace cards after removing aces, got {len(remaining)}"
        )

    tableau = [
        Pile(remaining[col * CARDS_PER_COLUMN:(col + 1) * CARDS_PER_COLUMN])
        for col in range(TABLEAU_COUNT)
    ]

    logger.debug("Dealt Beleaguered Castle with seed %d", seed)
    return BeleagueredCastleState(
        foundations=foundations,
        tableau=tableau,
        seed=seed,
        move_count=0,
    )


# =============================================================================
# Move validation
# =============================================================================

def is_legal_foundation_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_foundation: int,
) -> bool:
    """
    Column top -> foundation.

    Legal when the column is non-empty, the card's suit is the
    foundation's suit, and the card is an Ace on an empty foundation
    or the next rank after the foundation's top.
    """
    if not 0 <= from_col < TABLEAU_COUNT:
        return False
    if not 0 <= to_foundation < FOUNDATION_COUNT:
        return False

    card = state.tableau[from_col].peek()
    if card is None:
        return False
    if card.suit != FOUNDATION_SUITS[to_foundation]:
        return False

    top = state.foundations[to_foundation].peek()
    if top is None:
        # Unreachable in a classic deal since aces are pre-placed
        return card.rank == Rank.ACE

    expected = next_rank(top.rank)
    return expected is not None and card.rank == expected


def is_legal_tableau_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_col: int,
) -> bool:
    """
    Column top -> another column.

    Legal when the columns differ, the source is non-empty, and the
    destination is empty or its top is exactly one rank higher.
    """
    if not 0 <= from_col < TABLEAU_COUNT:
        return False
    if not 0 <= to_col < TABLEAU_COUNT:
        return False
    if from_col == to_col:
        return False

    card = state.tableau[from_col].peek()
    if card is None:
        return False

    dest_top = state.tableau[to_col].peek()
    if dest_top is None:
        return True
    return rank_value(card.rank) == rank_value(dest_top.rank) - 1


def is_legal_move(state: BeleagueredCastleState, move: BCMove) -> bool:
    if isinstance(move, TableauToFoundationMove):
        return is_legal_foundation_move(state, move.from_col, move.to_foundation)
    if isinstance(move, TableauToTableauMove):
        return is_legal_tableau_move(state, move.from_col, move.to_col)
    raise TypeError(f"Unknown move type: {type(move).__name__}")


def _describe_card(card: Card | None) -> str:
    return f"{card.rank.value} of {card.suit.value}" if card else "empty"


def _column_top(state: BeleagueredCastleState, col: int) -> Card | None:
    return state.tableau[col].peek() if 0 <= col < TABLEAU_COUNT else None


# =============================================================================
# Move application
# =============================================================================

def ensure_legal(state: BeleagueredCastleState, move: BCMove) -> None:
    """
    Raise IllegalMoveError naming the cards involved if `move` is illegal.
    """
    if is_legal_move(state, move):
        return

    source = _describe_card(_column_top(state, move.from_col))
    if isinstance(move, TableauToFoundationMove):
        fi = move.to_foundation
        suit = FOUNDATION_SUITS[fi].value if 0 <= fi < FOUNDATION_COUNT else "?"
        raise IllegalMoveError(
            f"Illegal foundation move: column {move.from_col} ({source}) "
            f"to foundation {fi} ({suit})"
        )
    raise IllegalMoveError(
        f"Illegal tableau move: column {move.from_col} ({source}) "
        f"to column {move.to_col} "
        f"(top: {_describe_card(_column_top(state, move.to_col))})"
    )


def apply_foundation_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_foundation: int,
) -> Card:
    """
    Pop the column top onto the foundation. Returns the moved card.

    Raises:
        IllegalMoveError: the move is not legal; nothing is changed
    """
    ensure_legal(state, TableauToFoundationMove(from_col=from_col, to_foundation=to_foundation))

    card = state.tableau[from_col].pop_or_raise()
    state.foundations[to_foundation].push(card)
    state.move_count += 1
    return card


def apply_tableau_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_col: int,
) -> Card:
    """
    Pop the source column top onto the destination column.

    Raises:
        IllegalMoveError: the move is not legal; nothing is changed
    """
    ensure_legal(state, TableauToTableauMove(from_col=from_col, to_col=to_col))

    card = state.tableau[from_col].pop_or_raise()
    state.tableau[to_col].push(card)
    state.move_count += 1
    return card


def apply_move(state: BeleagueredCastleState, move: BCMove) -> Card:
    """Apply any move. Returns the moved card."""
    if isinstance(move, TableauToFoundationMove):
        return apply_foundation_move(state, move.from_col, move.to_foundation)
    if isinstance(move, TableauToTableauMove):
        return apply_tableau_move(state, move.from_col, move.to_col)
    raise TypeError(f"Unknown move type: {type(move).__name__}")


def undo_foundation_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_foundation: int,
) -> None:
    card = state.foundations[to_foundation].pop_or_raise()
    state.tableau[from_col].push(card)
    state.move_count -= 1


def undo_tableau_move(
    state: BeleagueredCastleState,
    from_col: int,
    to_col: int,
) -> None:
    card = state.tableau[to_col].pop_or_raise()
    state.tableau[from_col].push(card)
    state.move_count -= 1


def undo_move(state: BeleagueredCastleState, move: BCMove) -> None:
    """Reverse a move that was previously applied."""
    if isinstance(move, TableauToFoundationMove):
        undo_foundation_move(state, move.from_col, move.to_foundation)
    elif isinstance(move, TableauToTableauMove):
        undo_tableau_move(state, move.from_col, move.to_col)
    else:
        raise TypeError(f"Unknown move type: {type(move).__name__}")


# =============================================================================
# Win / loss detection
# =============================================================================

def is_won(state: BeleagueredCastleState) -> bool:
    """All four foundations hold 13 cards."""
    return all(f.size() == CARDS_PER_SUIT for f in state.foundations)


def get_legal_moves(state: BeleagueredCastleState) -> list[BCMove]:
    """
    Every legal move.

    For each non-empty source column in ascending order: foundation
    moves by ascending foundation, then tableau moves by ascending
    destination column.
    """
    moves: list[BCMove] = []
    for from_col in range(TABLEAU_COUNT):
        if state.tableau[from_col].is_empty():
            continue

        for fi in range(FOUNDATION_COUNT):
            if is_legal_foundation_move(state, from_col, fi):
                moves.append(TableauToFoundationMove(from_col=from_col, to_foundation=fi))

        for to_col in range(TABLEAU_COUNT):
            if is_legal_tableau_move(state, from_col, to_col):
                moves.append(TableauToTableauMove(from_col=from_col, to_col=to_col))

    return moves


def has_no_moves(state: BeleagueredCastleState) -> bool:
    return not get_legal_moves(state)


# =============================================================================
# Auto-move heuristic
# =============================================================================

def find_safe_auto_moves(state: BeleagueredCastleState) -> list[BCMove]:
    """
    Foundation moves that can never hurt the player.

    A column top of rank R that its foundation accepts is safe when
    every foundation is already at rank R-1 or higher. Any card that
    could still want R as a build target (rank R+1) then has all the
    lower cards it depends on placed already, so R is not needed in
    the tableau. Conservative: may miss safe moves, never returns an
    unsafe one.
    """
    min_foundation_rank = min(
        foundation_top_rank(state, fi) for fi in range(FOUNDATION_COUNT)
    )

    safe: list[BCMove] = []
    for col in range(TABLEAU_COUNT):
        top = state.tableau[col].peek()
        if top is None:
            continue

        fi = foundation_index(top.suit)
        if not is_legal_foundation_move(state, col, fi):
            continue

        if min_foundation_rank >= rank_value(top.rank) - 1:
            safe.append(TableauToFoundationMove(from_col=col, to_foundation=fi))

    return safe


def apply_safe_auto_moves(state: BeleagueredCastleState) -> list[BCMove]:
    """
    Apply safe auto-moves until none remain. Returns them in order.

    Each round of moves can unlock further safe moves.
    """
    applied: list[BCMove] = []
    while True:
        moves = find_safe_auto_moves(state)
        if not moves:
            return applied
        for move in moves:
            apply_move(state, move)
            applied.append(move)


# =============================================================================
# Auto-complete
# =============================================================================

def is_trivially_winnable(state: BeleagueredCastleState) -> bool:
    """
    Whether repeatedly playing column tops to foundations must win.

    True when every non-empty column is strictly descending from
    bottom to top, and every card in the tableau ranks above its
    foundation's current top.
    """
    for col in range(TABLEAU_COUNT):
        cards = state.tableau[col].to_list()
        if not cards:
            continue

        for below, above in zip(cards, cards[1:]):
            if rank_value(above.rank) >= rank_value(below.rank):
                return False

        for card in cards:
            fi = foundation_index(card.suit)
            if rank_value(card.rank) <= foundation_top_rank(state, fi):
                return False

    return True


def get_auto_complete_moves(state: BeleagueredCastleState) -> list[BCMove]:
    """
    Ordered foundation moves that drain every column.

    Works on a local copy (column rank/suit stacks plus per-foundation
    rank counters); the real state is not touched. Returns [] unless
    the state is trivially winnable.
    """
    if not is_trivially_winnable(state):
        return []

    columns = [
        [(rank_value(card.rank), card.suit) for card in state.tableau[col].to_list()]
        for col in range(TABLEAU_COUNT)
    ]
    foundation_ranks = [foundation_top_rank(state, fi) for fi in range(FOUNDATION_COUNT)]

    moves: list[BCMove] = []
    moved = True
    while moved:
        moved = False
        for col, cards in enumerate(columns):
            if not cards:
                continue
            rank, suit = cards[-1]
            fi = foundation_index(suit)
            if rank == foundation_ranks[fi] + 1:
                moves.append(TableauToFoundationMove(from_col=col, to_foundation=fi))
                cards.pop()
                foundation_ranks[fi] = rank
                moved = True

    return moves
