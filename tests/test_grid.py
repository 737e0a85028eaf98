import pytest

from viewtris_errors import GridIndexError
from viewtris_grid import GridStorage
from viewtris_piece import EMPTY, Cell, MinoVariant


def stacked(*variants):
    return GridStorage.new_from_rows_unchecked([[Cell.tetromino(v)] * 3 for v in variants])


def test_columns_taken_from_first_row():
    grid = GridStorage.new_from_rows_unchecked([[1, 2, 3], [4, 5, 6]])
    assert grid.dimensions() == (2, 3)


def test_empty_rows_give_zero_columns():
    assert GridStorage.new_from_rows_unchecked([]).dimensions() == (0, 0)


def test_unchecked_construction_does_not_validate_shape():
    grid = GridStorage.new_from_rows_unchecked([[1, 2], [3]])
    assert grid.dimensions() == (2, 2)


def test_checked_access():
    grid = GridStorage.filled(2, 3, 0)
    grid.set(1, 2, 7)
    assert grid.get(1, 2) == 7
    assert grid.replace(1, 2, 8) == 7
    assert grid.get_unchecked(1, 2) == 8


@pytest.mark.parametrize("row,column", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_checked_access_out_of_bounds(row, column):
    grid = GridStorage.filled(2, 3, 0)
    with pytest.raises(GridIndexError):
        grid.get(row, column)
    with pytest.raises(IndexError):
        grid.set(row, column, 1)
    assert grid.snapshot() == [[0, 0, 0], [0, 0, 0]]


def test_rotations_move_whole_rows():
    grid = GridStorage.new_from_rows_unchecked([[0], [1], [2], [3]])
    grid.rotate_right(0, 2)
    assert grid.snapshot() == [[2], [3], [0], [1]]
    grid.rotate_left(0, 2)
    assert grid.snapshot() == [[0], [1], [2], [3]]
    grid.rotate_left(1, 1)
    assert grid.snapshot() == [[0], [2], [3], [1]]
    assert grid.dimensions() == (4, 1)


def test_clear_line_shifts_following_rows_back():
    grid = stacked(MinoVariant.L, MinoVariant.J, MinoVariant.T, MinoVariant.S)
    grid.clear_line(1)
    assert grid.snapshot() == [
        [Cell.tetromino(MinoVariant.L)] * 3,
        [Cell.tetromino(MinoVariant.T)] * 3,
        [Cell.tetromino(MinoVariant.S)] * 3,
        [EMPTY] * 3,
    ]
    assert grid.dimensions() == (4, 3)


def test_clear_last_line():
    grid = stacked(MinoVariant.O, MinoVariant.I)
    grid.clear_line(1)
    assert grid.snapshot() == [[Cell.tetromino(MinoVariant.O)] * 3, [EMPTY] * 3]


def test_clear_line_out_of_bounds():
    grid = stacked(MinoVariant.O)
    with pytest.raises(GridIndexError):
        grid.clear_line(1)
