"""
Pytest fixtures for Tableau tests.
"""

import pytest

from ..engine_core.cards import Card, Rank, Suit, RANKS
from ..engine_core.pile import Pile
from ..engine_core.rng import create_seeded_rng
from ..games.beleaguered_castle.rules import deal
from ..games.beleaguered_castle.state import (
    BeleagueredCastleState,
    FOUNDATION_SUITS,
    TABLEAU_COUNT,
)
from ..games.golf.game import GolfSession, setup_golf_game
from ..games.golf.grid import create_golf_grid


@pytest.fixture
def castle_state() -> BeleagueredCastleState:
    """Fresh Beleaguered Castle deal, seed 42."""
    return deal(42)


@pytest.fixture
def make_castle():
    """
    Build a board by hand.

    make_castle(heights, columns): heights[i] is how many cards
    (A upward) foundation i holds; columns are lists of (rank, suit)
    bottom to top. Cards are face-up.
    """
    def _make(heights=(1, 1, 1, 1), columns=()) -> BeleagueredCastleState:
        foundations = [
            Pile(Card(rank, suit, face_up=True) for rank in RANKS[:height])
            for suit, height in zip(FOUNDATION_SUITS, heights)
        ]
        tableau = [Pile() for _ in range(TABLEAU_COUNT)]
        for col, cards in enumerate(columns):
            tableau[col].push(*(Card(rank, suit, face_up=True) for rank, suit in cards))
        return BeleagueredCastleState(foundations=foundations, tableau=tableau)

    return _make


@pytest.fixture
def make_grid():
    """
    Build a Golf grid from 9 ranks (row-major).

    Suits cycle so cards are distinct enough to tell apart.
    face_up is a bool for every cell or a list of 9 bools.
    """
    suits = list(Suit)

    def _make(ranks, face_up=True):
        flags = face_up if isinstance(face_up, list) else [face_up] * 9
        return create_golf_grid(
            Card(rank, suits[i % 4], face_up=flags[i]) for i, rank in enumerate(ranks)
        )

    return _make


@pytest.fixture
def golf_session() -> GolfSession:
    """Two-player Golf round, seeded, human first seat and AI second."""
    return setup_golf_game(rng=create_seeded_rng(7))


@pytest.fixture
def numbered_grid_ranks() -> list[Rank]:
    """A,2,3 / 4,5,6 / 7,8,9 - no column matches."""
    return [
        Rank.ACE, Rank.TWO, Rank.THREE,
        Rank.FOUR, Rank.FIVE, Rank.SIX,
        Rank.SEVEN, Rank.EIGHT, Rank.NINE,
    ]
