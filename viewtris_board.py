"""Board state machine: apply an action, or roll it back in reverse order"""
import logging
from typing import List, Optional

from viewtris_actions import ActionKind, CellChange, Garbage, Hold, LineClear, Reposition
from viewtris_config import CONFIG
from viewtris_errors import GridIndexError, RollbackError
from viewtris_grid import GridStorage
from viewtris_piece import EMPTY, GARBAGE, Cell, Mino, MinoVariant

logger = logging.getLogger("viewtris")


class Board:
    """Locked cells plus the active piece, the hold slot and the undo state for line clears and garbage.

    Row 0 is the bottom of the stack. Garbage enters at the bottom and pushes
    every row up; a line clear pulls every row above it down by one.
    """

    def __init__(self, cells: GridStorage[Cell]):
        self.cells = cells
        self.active: Optional[Mino] = None
        self.hold: Optional[MinoVariant] = None
        self.cleared_rows: List[List[Cell]] = []
        self.garbage_heights: List[int] = []
        self.holds_passed = 0

    @staticmethod
    def empty(rows: Optional[int] = None, columns: Optional[int] = None) -> "Board":
        rows = CONFIG["BOARD_ROWS"] if rows is None else rows
        columns = CONFIG["BOARD_COLUMNS"] if columns is None else columns
        return Board(GridStorage.filled(rows, columns, EMPTY))

    def dimensions(self):
        return self.cells.dimensions()

    def _check_height(self, height: int):
        rows, columns = self.cells.dimensions()
        if not 0 <= height <= rows:
            raise GridIndexError(height, 0, (rows, columns))

    # ---------- forward ----------
    def apply_action(self, action: ActionKind) -> None:
        logger.debug(f"apply {action}")
        if isinstance(action, Garbage):
            self._check_height(action.height)
            if action.height:
                self.cells.check(0, action.column)
            self.cells.rotate_right(0, action.height)
            for y in range(action.height):
                self.cells.fill_row(y, lambda: GARBAGE)
                self.cells.set_unchecked(y, action.column, EMPTY)
            self.garbage_heights.append(action.height)
        elif isinstance(action, Reposition):
            self.active = action.piece
        elif isinstance(action, LineClear):
            _, columns = self.cells.dimensions()
            discarded = self.cells.replace_row(action.row, [EMPTY] * columns)
            self.cleared_rows.append(discarded)
            self.cells.rotate_left(action.row, 1)
        elif isinstance(action, CellChange):
            x, y = action.position
            self.cells.set(y, x, action.kind)
        elif isinstance(action, Hold):
            active = self.active.variant if self.active is not None else None
            self.active = None
            previous, self.hold = self.hold, active
            if previous is not None:
                self.active = Mino.from_variant(previous)
            self.holds_passed += 1
        else:
            raise TypeError(f"not an action kind: {action!r}")

    # ---------- backward ----------
    def rollback_action(self, action: ActionKind) -> None:
        """Undo `action`, which must be the most recent forward action not yet rolled back.

        Reposition and CellChange do not record what they overwrote: rolling back a
        Reposition re-installs the same piece and rolling back a CellChange leaves
        an empty cell.
        """
        logger.debug(f"rollback {action}")
        if isinstance(action, Garbage):
            if not self.garbage_heights or self.garbage_heights[-1] != action.height:
                received = self.garbage_heights[-1] if self.garbage_heights else None
                raise RollbackError(f"{action} does not match the last garbage received (height {received})")
            self.garbage_heights.pop()
            for y in range(action.height):
                self.cells.fill_row(y, lambda: EMPTY)
            self.cells.rotate_left(0, action.height)
        elif isinstance(action, Reposition):
            self.active = action.piece
        elif isinstance(action, LineClear):
            if not self.cleared_rows:
                raise RollbackError(f"no cleared row left to restore for {action}")
            self.cells.check_row(action.row)
            self.cells.rotate_right(action.row, 1)
            self.cells.replace_row(action.row, self.cleared_rows.pop())
        elif isinstance(action, CellChange):
            x, y = action.position
            self.cells.set(y, x, EMPTY)
        elif isinstance(action, Hold):
            if self.holds_passed > 1:
                if self.active is None:
                    raise RollbackError("hold rollback needs an active piece to return to the hold slot")
                self.holds_passed -= 1
                self.hold = self.active.variant
            elif self.holds_passed == 1:
                self.holds_passed -= 1
                self.hold = None
        else:
            raise TypeError(f"not an action kind: {action!r}")
