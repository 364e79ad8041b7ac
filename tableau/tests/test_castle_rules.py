"""
Tests for Beleaguered Castle rules, solver and commands.

Tests:
- Deal layout and determinism
- Move legality and rejection without mutation
- Apply/undo pairs
- Win and stuck detection
- Safe auto-moves and auto-complete
- Reversible move commands
"""

import pytest

from ..engine_core.cards import Rank, Suit
from ..engine_core.errors import IllegalMoveError
from ..engine_core.undo import CompoundCommand, UndoRedoManager
from ..games.beleaguered_castle.commands import (
    MoveCommand,
    build_move_command,
    build_sequence_command,
    moves_in,
)
from ..games.beleaguered_castle.rules import (
    apply_move,
    apply_safe_auto_moves,
    deal,
    find_safe_auto_moves,
    get_auto_complete_moves,
    get_legal_moves,
    has_no_moves,
    is_legal_foundation_move,
    is_legal_tableau_move,
    is_trivially_winnable,
    is_won,
    undo_move,
)
from ..games.beleaguered_castle.state import (
    FOUNDATION_SUITS,
    TableauToFoundationMove,
    TableauToTableauMove,
)
from ..games.beleaguered_castle.transcript import snapshot_board

C, D, H, S = Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES


class TestDeal:
    """Tests for the initial layout."""

    def test_layout_seed_42(self, castle_state):
        """Four aces on foundations in suit order, 8 columns of 6."""
        assert [f.size() for f in castle_state.foundations] == [1, 1, 1, 1]
        for fi, foundation in enumerate(castle_state.foundations):
            ace = foundation.peek()
            assert ace.rank == Rank.ACE
            assert ace.suit == FOUNDATION_SUITS[fi]

        assert [c.size() for c in castle_state.tableau] == [6] * 8

        cards = [c for f in castle_state.foundations for c in f.to_list()]
        cards += [c for col in castle_state.tableau for c in col.to_list()]
        assert len(cards) == 52
        assert len({(c.rank, c.suit) for c in cards}) == 52
        assert all(c.face_up for c in cards)

    def test_no_aces_in_tableau(self, castle_state):
        for column in castle_state.tableau:
            assert all(c.rank != Rank.ACE for c in column.to_list())

    def test_deterministic(self):
        assert snapshot_board(deal(42)) == snapshot_board(deal(42))

    def test_seeds_differ(self):
        assert snapshot_board(deal(1)) != snapshot_board(deal(2))

    def test_records_seed(self):
        state = deal(7)
        assert state.seed == 7
        assert state.move_count == 0


class TestLegality:
    """Tests for move legality."""

    def test_build_down_ignoring_suit(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)], [(Rank.TEN, S)]])
        assert is_legal_tableau_move(state, 0, 1)
        assert not is_legal_tableau_move(state, 1, 0)

    def test_empty_column_accepts_anything(self, make_castle):
        state = make_castle(columns=[[(Rank.KING, H)], []])
        assert is_legal_tableau_move(state, 0, 1)

    def test_same_column_and_empty_source(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)], []])
        assert not is_legal_tableau_move(state, 0, 0)
        assert not is_legal_tableau_move(state, 1, 0)

    def test_out_of_range_columns(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)]])
        assert not is_legal_tableau_move(state, 0, 8)
        assert not is_legal_tableau_move(state, -1, 0)
        assert not is_legal_foundation_move(state, 0, 4)

    def test_foundation_needs_suit_and_next_rank(self, make_castle):
        state = make_castle(columns=[[(Rank.TWO, H)], [(Rank.THREE, H)], [(Rank.TWO, S)]])
        hearts = FOUNDATION_SUITS.index(H)

        assert is_legal_foundation_move(state, 0, hearts)
        assert not is_legal_foundation_move(state, 1, hearts)
        assert not is_legal_foundation_move(state, 2, hearts)

    def test_ace_on_empty_foundation(self, make_castle):
        state = make_castle(heights=(0, 1, 1, 1), columns=[[(Rank.ACE, C)], [(Rank.TWO, C)]])
        assert is_legal_foundation_move(state, 0, 0)
        assert not is_legal_foundation_move(state, 1, 0)

    def test_legal_move_order(self, make_castle):
        """Per source column: foundation moves, then tableau moves by destination."""
        state = make_castle(columns=[
            [(Rank.TWO, C)],
            [(Rank.THREE, H)],
            [],
        ])
        moves = get_legal_moves(state)

        assert moves == [
            TableauToFoundationMove(from_col=0, to_foundation=0),
            TableauToTableauMove(from_col=0, to_col=1),
            TableauToTableauMove(from_col=0, to_col=2),
            *[TableauToTableauMove(from_col=0, to_col=c) for c in range(3, 8)],
            TableauToTableauMove(from_col=1, to_col=2),
            *[TableauToTableauMove(from_col=1, to_col=c) for c in range(3, 8)],
        ]

    def test_illegal_foundation_move_rejected(self, castle_state):
        """Anything but a 2 onto an Ace-only foundation fails and changes nothing."""
        before = snapshot_board(castle_state)
        tried = 0
        for col, column in enumerate(castle_state.tableau):
            top = column.peek()
            if top.rank == Rank.TWO:
                continue
            move = TableauToFoundationMove(from_col=col, to_foundation=FOUNDATION_SUITS.index(top.suit))
            with pytest.raises(IllegalMoveError) as exc_info:
                apply_move(castle_state, move)
            assert "foundation" in exc_info.value.reason
            tried += 1

        assert tried > 0
        assert snapshot_board(castle_state) == before
        assert castle_state.move_count == 0

    def test_three_onto_ace_rejected(self, make_castle):
        state = make_castle(columns=[[(Rank.THREE, C)]])
        before = snapshot_board(state)

        with pytest.raises(IllegalMoveError):
            apply_move(state, TableauToFoundationMove(from_col=0, to_foundation=0))

        assert snapshot_board(state) == before
        assert state.move_count == 0


class TestApplyUndo:
    """Tests for forward moves and their inverses."""

    def test_tableau_move_and_undo(self, make_castle):
        state = make_castle(columns=[[(Rank.KING, C), (Rank.NINE, H)], [(Rank.TEN, S)]])
        before = snapshot_board(state)
        move = TableauToTableauMove(from_col=0, to_col=1)

        card = apply_move(state, move)
        assert card.rank == Rank.NINE
        assert state.tableau[1].peek() is card
        assert state.move_count == 1

        undo_move(state, move)
        assert snapshot_board(state) == before
        assert state.move_count == 0

    def test_foundation_move_and_undo(self, make_castle):
        state = make_castle(columns=[[(Rank.TWO, D)]])
        before = snapshot_board(state)
        move = TableauToFoundationMove(from_col=0, to_foundation=1)

        apply_move(state, move)
        assert state.foundations[1].size() == 2
        assert state.tableau[0].is_empty()

        undo_move(state, move)
        assert snapshot_board(state) == before

    def test_every_legal_move_undoes_exactly(self, castle_state):
        before = snapshot_board(castle_state)
        for move in get_legal_moves(castle_state):
            apply_move(castle_state, move)
            undo_move(castle_state, move)
            assert snapshot_board(castle_state) == before
            assert castle_state.move_count == 0


class TestTermination:
    """Tests for win and stuck detection."""

    def test_won(self, make_castle):
        state = make_castle(heights=(13, 13, 13, 13))
        assert is_won(state)
        assert has_no_moves(state)

    def test_not_won_on_deal(self, castle_state):
        assert not is_won(castle_state)

    def test_stuck(self, make_castle):
        # Every column full of cards that cannot build on each other
        columns = [[(Rank.KING, C), (Rank.FIVE, D)] for _ in range(8)]
        state = make_castle(columns=columns)
        assert has_no_moves(state)
        assert not is_won(state)


class TestAutoMoves:
    """Tests for the safe auto-move heuristic."""

    def test_two_is_always_safe(self, make_castle):
        state = make_castle(columns=[[(Rank.TWO, H)]])
        assert find_safe_auto_moves(state) == [
            TableauToFoundationMove(from_col=0, to_foundation=2)
        ]

    def test_unsafe_when_other_foundations_lag(self, make_castle):
        """A 3 waits until every foundation holds a 2."""
        state = make_castle(heights=(1, 1, 2, 1), columns=[[(Rank.THREE, H)]])
        assert find_safe_auto_moves(state) == []

        state = make_castle(heights=(2, 2, 2, 2), columns=[[(Rank.THREE, H)]])
        assert len(find_safe_auto_moves(state)) == 1

    def test_apply_to_fixed_point(self, make_castle):
        state = make_castle(columns=[
            [(Rank.THREE, C), (Rank.TWO, D)],
            [(Rank.TWO, C)],
            [(Rank.TWO, H)],
            [(Rank.TWO, S)],
        ])
        applied = apply_safe_auto_moves(state)

        # All four 2s go up, which then makes the 3 of clubs safe
        assert len(applied) == 5
        assert [f.size() for f in state.foundations] == [3, 2, 2, 2]
        assert find_safe_auto_moves(state) == []
        assert state.move_count == 5

    def test_nothing_to_do(self, castle_state):
        before = snapshot_board(castle_state)
        if not find_safe_auto_moves(castle_state):
            assert apply_safe_auto_moves(castle_state) == []
            assert snapshot_board(castle_state) == before


class TestAutoComplete:
    """Tests for trivially winnable detection and auto-complete."""

    def test_kings_only(self, make_castle):
        state = make_castle(
            heights=(12, 12, 12, 12),
            columns=[[(Rank.KING, s)] for s in (C, D, H, S)],
        )
        assert is_trivially_winnable(state)

        moves = get_auto_complete_moves(state)
        assert len(moves) == 4
        for move in moves:
            apply_move(state, move)
        assert is_won(state)

    def test_descending_columns(self, make_castle):
        state = make_castle(
            heights=(10, 10, 11, 12),
            columns=[
                [(Rank.KING, C), (Rank.QUEEN, D), (Rank.JACK, C)],
                [(Rank.KING, D), (Rank.QUEEN, C), (Rank.JACK, D)],
                [(Rank.KING, H), (Rank.QUEEN, H)],
                [(Rank.KING, S)],
            ],
        )
        assert is_trivially_winnable(state)

        before = snapshot_board(state)
        moves = get_auto_complete_moves(state)
        assert snapshot_board(state) == before

        for move in moves:
            apply_move(state, move)
        assert is_won(state)

    def test_not_descending(self, make_castle):
        state = make_castle(
            heights=(11, 12, 13, 13),
            columns=[[(Rank.QUEEN, C), (Rank.KING, C)], [(Rank.KING, D)]],
        )
        assert not is_trivially_winnable(state)
        assert get_auto_complete_moves(state) == []


class TestMoveCommands:
    """Tests for reversible move commands."""

    def test_move_command(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)], [(Rank.TEN, S)]])
        command = MoveCommand(state, TableauToTableauMove(from_col=0, to_col=1))
        manager = UndoRedoManager()

        manager.execute(command)
        assert state.tableau[1].size() == 2
        manager.undo()
        assert state.tableau[0].size() == 1
        manager.redo()
        assert state.move_count == 1

    def test_player_move_groups_auto_moves(self, make_castle):
        """One undo reverts the player move and the auto-moves it unlocked."""
        state = make_castle(columns=[
            [(Rank.FIVE, S), (Rank.TWO, C)],
            [(Rank.NINE, H), (Rank.TWO, D)],
        ])
        before = snapshot_board(state)
        command = build_move_command(state, TableauToFoundationMove(from_col=0, to_foundation=0))

        assert isinstance(command, CompoundCommand)
        flat = moves_in(command)
        assert [m.automatic for m in flat] == [False, True]
        assert flat[1].move == TableauToFoundationMove(from_col=1, to_foundation=1)
        assert flat[1].description.startswith("Auto: ")
        # Planning does not touch the board
        assert snapshot_board(state) == before

        manager = UndoRedoManager()
        manager.execute(command)
        assert [f.size() for f in state.foundations] == [2, 2, 1, 1]
        assert state.move_count == 2

        manager.undo()
        assert snapshot_board(state) == before
        assert state.move_count == 0

    def test_no_auto_moves_gives_single_command(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)], [(Rank.TEN, S)]])
        command = build_move_command(state, TableauToTableauMove(from_col=0, to_col=1))
        assert isinstance(command, MoveCommand)

    def test_auto_move_disabled(self, make_castle):
        state = make_castle(columns=[[(Rank.TWO, C)], [(Rank.TWO, D)]])
        command = build_move_command(
            state, TableauToFoundationMove(from_col=0, to_foundation=0), auto_move=False
        )
        assert isinstance(command, MoveCommand)

    def test_illegal_move_rejected_before_planning(self, make_castle):
        state = make_castle(columns=[[(Rank.NINE, H)], [(Rank.NINE, S)]])
        with pytest.raises(IllegalMoveError):
            build_move_command(state, TableauToTableauMove(from_col=0, to_col=1))

    def test_sequence_command(self, make_castle):
        state = make_castle(
            heights=(12, 12, 12, 12),
            columns=[[(Rank.KING, s)] for s in (C, D, H, S)],
        )
        command = build_sequence_command(state, get_auto_complete_moves(state), "Auto-complete")
        command.execute()
        assert is_won(state)
        command.undo()
        assert [f.size() for f in state.foundations] == [12] * 4
