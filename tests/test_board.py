import pytest

from viewtris_actions import CellChange, Garbage, Hold, LineClear, Reposition
from viewtris_board import Board
from viewtris_config import CONFIG
from viewtris_errors import GridIndexError, RollbackError
from viewtris_piece import EMPTY, GARBAGE, Cell, Direction, Mino, MinoVariant

O = Cell.tetromino(MinoVariant.O)
T = Cell.tetromino(MinoVariant.T)


@pytest.fixture
def board():
    return Board.empty(rows=4, columns=10)


def test_empty_board():
    board = Board.empty()
    assert board.dimensions() == (CONFIG["BOARD_ROWS"], CONFIG["BOARD_COLUMNS"])
    assert all(cell == EMPTY for _, cell in board.cells.enumerated())
    assert board.active is None and board.hold is None
    assert board.cleared_rows == []
    assert board.garbage_heights == []
    assert board.holds_passed == 0


def test_garbage_round_trip(board):
    board.apply_action(Garbage(column=3, height=2))
    for y in (0, 1):
        assert board.cells.row(y) == [EMPTY if x == 3 else GARBAGE for x in range(10)]
    assert board.cells.row(2) == [EMPTY] * 10
    assert board.cells.row(3) == [EMPTY] * 10
    board.rollback_action(Garbage(column=3, height=2))
    assert board.cells.snapshot() == [[EMPTY] * 10] * 4


def test_garbage_pushes_existing_rows_up(board):
    board.cells.set(0, 0, T)
    board.cells.set(1, 9, O)
    board.apply_action(Garbage(column=0, height=2))
    assert board.cells.get(2, 0) == T
    assert board.cells.get(3, 9) == O
    board.rollback_action(Garbage(column=0, height=2))
    assert board.cells.get(0, 0) == T
    assert board.cells.get(1, 9) == O
    assert board.cells.row(2) == [EMPTY] * 10


def test_line_clear_round_trip(board):
    board.cells.replace_row(2, [O] * 10)
    board.apply_action(LineClear(row=2))
    assert board.cells.row(2) == [EMPTY] * 10
    assert board.cleared_rows == [[O] * 10]
    board.rollback_action(LineClear(row=2))
    assert board.cells.row(2) == [O] * 10
    assert board.cleared_rows == []


def test_line_clear_pulls_rows_above_down(board):
    board.cells.replace_row(1, [O] * 10)
    board.cells.set(2, 4, T)
    board.apply_action(LineClear(row=1))
    assert board.cells.get(1, 4) == T
    assert board.cells.row(2) == [EMPTY] * 10
    assert board.dimensions() == (4, 10)


def test_garbage_and_line_clears_roll_back_exactly():
    board = Board.empty(rows=12, columns=10)
    board.cells.replace_row(0, [GARBAGE] * 9 + [EMPTY])
    board.cells.set(1, 2, T)
    board.cells.set(2, 7, O)
    before = board.cells.snapshot()
    actions = [
        Garbage(column=0, height=1),
        LineClear(row=0),
        Garbage(column=5, height=3),
        LineClear(row=2),
        LineClear(row=1),
        Garbage(column=9, height=2),
    ]
    for action in actions:
        board.apply_action(action)
        assert board.dimensions() == (12, 10)
    assert len(board.cleared_rows) == 3
    for action in reversed(actions):
        board.rollback_action(action)
        assert board.dimensions() == (12, 10)
    assert board.cells.snapshot() == before
    assert board.cleared_rows == []


def test_reposition_replaces_active(board):
    first = Mino(MinoVariant.T, Direction.UP, (4, 20))
    second = Mino(MinoVariant.T, Direction.LEFT, (3, 18))
    board.apply_action(Reposition(first))
    board.apply_action(Reposition(second))
    assert board.active == second
    # the piece before a reposition is not recorded
    board.rollback_action(Reposition(second))
    assert board.active == second


def test_cell_change(board):
    board.apply_action(CellChange((3, 1), T))
    assert board.cells.get(1, 3) == T
    board.rollback_action(CellChange((3, 1), T))
    assert board.cells.get(1, 3) == EMPTY


def test_cell_change_rollback_always_empties(board):
    board.cells.set(0, 0, GARBAGE)
    board.apply_action(CellChange((0, 0), T))
    board.rollback_action(CellChange((0, 0), T))
    assert board.cells.get(0, 0) == EMPTY


def test_hold_sequence(board):
    board.active = Mino(MinoVariant.I, Direction.RIGHT, (2, 5))
    board.apply_action(Hold())
    assert board.hold == MinoVariant.I
    assert board.active is None
    assert board.holds_passed == 1

    board.apply_action(Reposition(Mino.from_variant(MinoVariant.O)))
    board.apply_action(Hold())
    assert board.hold == MinoVariant.O
    assert board.active == Mino(MinoVariant.I, Direction.UP, (0, 0))
    assert board.holds_passed == 2

    board.rollback_action(Hold())
    assert board.holds_passed == 1
    assert board.hold == MinoVariant.I

    board.rollback_action(Hold())
    assert board.holds_passed == 0
    assert board.hold is None

    board.rollback_action(Hold())
    assert board.holds_passed == 0
    assert board.hold is None


def test_hold_with_nothing_active(board):
    board.apply_action(Hold())
    assert board.hold is None and board.active is None
    assert board.holds_passed == 1


def test_hold_rollback_without_active_piece(board):
    board.holds_passed = 2
    with pytest.raises(RollbackError):
        board.rollback_action(Hold())
    assert board.holds_passed == 2


def test_line_clear_rollback_needs_a_cleared_row(board):
    with pytest.raises(RollbackError):
        board.rollback_action(LineClear(row=0))


@pytest.mark.parametrize("action", [
    LineClear(row=4),
    CellChange((10, 0), T),
    CellChange((0, 4), T),
    Garbage(column=10, height=1),
    Garbage(column=0, height=5),
])
def test_out_of_bounds_actions_leave_board_alone(board, action):
    board.cells.set(0, 0, T)
    before = board.cells.snapshot()
    with pytest.raises(GridIndexError):
        board.apply_action(action)
    assert board.cells.snapshot() == before
    assert board.cleared_rows == []


def test_unknown_action(board):
    with pytest.raises(TypeError):
        board.apply_action("hold")


def test_garbage_rollback_without_matching_apply(board):
    board.cells.set(0, 0, T)
    before = board.cells.snapshot()
    with pytest.raises(RollbackError):
        board.rollback_action(Garbage(column=0, height=1))
    assert board.cells.snapshot() == before


def test_garbage_rollback_with_wrong_height(board):
    board.apply_action(Garbage(column=2, height=1))
    after = board.cells.snapshot()
    with pytest.raises(RollbackError):
        board.rollback_action(Garbage(column=2, height=2))
    with pytest.raises(RollbackError):
        board.rollback_action(Garbage(column=2, height=5))
    assert board.cells.snapshot() == after
    assert board.garbage_heights == [1]


def test_garbage_rolled_back_twice(board):
    board.apply_action(Garbage(column=2, height=1))
    board.rollback_action(Garbage(column=2, height=1))
    with pytest.raises(RollbackError):
        board.rollback_action(Garbage(column=2, height=1))
    assert board.cells.snapshot() == [[EMPTY] * 10] * 4


def test_garbage_filling_the_whole_board(board):
    board.apply_action(Garbage(column=7, height=4))
    for y in range(4):
        assert board.cells.row(y) == [EMPTY if x == 7 else GARBAGE for x in range(10)]
    assert board.dimensions() == (4, 10)
    board.rollback_action(Garbage(column=7, height=4))
    assert board.cells.snapshot() == [[EMPTY] * 10] * 4


def test_zero_height_garbage(board):
    board.cells.set(0, 0, T)
    before = board.cells.snapshot()
    board.apply_action(Garbage(column=99, height=0))
    assert board.cells.snapshot() == before
    board.rollback_action(Garbage(column=99, height=0))
    assert board.cells.snapshot() == before
    assert board.garbage_heights == []
