import numpy as np
import pytest
from hypothesis import given, strategies as st

from game_engine.board import Board, IllegalCellError, Mark


def test_empty_board_has_every_cell_free():
    board = Board.empty()
    assert board.size == 3
    assert len(board.empty_cells()) == 9
    assert board.count(None) == 9
    assert not board.is_full()


def test_with_mark_returns_new_board_and_keeps_original():
    b1 = Board.empty()
    b2 = b1.with_mark(1, 2, Mark.X)
    assert b1.get(1, 2) is None
    assert b2.get(1, 2) == Mark.X
    assert b1 == Board.empty()
    assert b1 != b2


def test_with_mark_rejects_occupied_cell():
    board = Board.empty().with_mark(0, 0, Mark.O)
    with pytest.raises(IllegalCellError, match="already occupied"):
        board.with_mark(0, 0, Mark.X)
    assert board.get(0, 0) == Mark.O


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (5, 5)])
def test_with_mark_rejects_out_of_bounds(row, col):
    with pytest.raises(IllegalCellError, match="Invalid position"):
        Board.empty().with_mark(row, col, Mark.X)


def test_cells_are_read_only():
    board = Board.empty()
    with pytest.raises(ValueError):
        board.cells[0, 0] = 1
    assert board.is_empty(0, 0)


def test_board_does_not_alias_source_array():
    source = np.zeros((3, 3), dtype=np.int8)
    board = Board(source)
    source[1, 1] = 2
    assert board.is_empty(1, 1)


def test_from_rows_and_text_form():
    board = Board.from_rows(["X.O", ".x.", "..O"])
    assert board.get(0, 0) == Mark.X
    assert board.get(1, 1) == Mark.X
    assert board.get(2, 2) == Mark.O
    assert board.to_text() == "X.O\n.X.\n..O"
    assert board.count(Mark.O) == 2
    assert eval(repr(board), {"Board": Board}) == board


@pytest.mark.parametrize("rows", [["X.Z", "...", "..."], ["X..", "..."], []])
def test_from_rows_rejects_bad_layouts(rows):
    with pytest.raises(ValueError):
        Board.from_rows(rows)


def test_empty_cells_are_row_major():
    board = Board.from_rows(["X.O", ".X.", "OO."])
    assert board.empty_cells() == [(0, 1), (1, 0), (1, 2), (2, 2)]


def test_equal_boards_hash_equal():
    a = Board.empty().with_mark(0, 1, Mark.X)
    b = Board.from_rows([".X.", "...", "..."])
    assert a == b
    assert len({a, b}) == 1


def test_mark_opposite():
    assert Mark.X.opposite() == Mark.O
    assert Mark.O.opposite() == Mark.X


@given(
    st.lists(st.integers(min_value=0, max_value=2), min_size=9, max_size=9),
    st.integers(min_value=0, max_value=8),
    st.sampled_from(list(Mark)),
)
def test_with_mark_never_mutates_input(codes, index, mark):
    board = Board(np.array(codes).reshape(3, 3))
    before = board.cells.copy()
    row, col = divmod(index, 3)
    try:
        after = board.with_mark(row, col, mark)
    except IllegalCellError:
        assert codes[index] != 0
    else:
        assert after.get(row, col) == mark
        assert after.count(None) == board.count(None) - 1
    assert np.array_equal(board.cells, before)
