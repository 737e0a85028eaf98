"""Dense rectangular grid storage.

Rows are kept as a list of lists so whole rows can be rotated in place
without touching the cells. The ``*_unchecked`` accessors trust the caller
to stay in bounds; the plain accessors verify the location first and raise
``GridIndexError``.
"""
from typing import Callable, Generic, Iterator, List, Sequence, Tuple, TypeVar

from viewtris_errors import GridIndexError
from viewtris_piece import EMPTY

T = TypeVar("T")


class GridStorage(Generic[T]):
    def __init__(self, columns: int, storage: List[List[T]]):
        self.columns = columns
        self.storage = storage

    @classmethod
    def new_from_rows_unchecked(cls, rows: Sequence[Sequence[T]]) -> "GridStorage[T]":
        """Build from rows without checking that they all have the same length."""
        storage = [list(r) for r in rows]
        columns = len(storage[0]) if storage else 0
        return cls(columns, storage)

    @classmethod
    def filled(cls, rows: int, columns: int, value: T) -> "GridStorage[T]":
        return cls(columns, [[value] * columns for _ in range(rows)])

    def dimensions(self) -> Tuple[int, int]:
        return len(self.storage), self.columns

    def contains(self, row: int, column: int) -> bool:
        return 0 <= row < len(self.storage) and 0 <= column < self.columns

    def check(self, row: int, column: int) -> None:
        if not self.contains(row, column):
            raise GridIndexError(row, column, self.dimensions())

    def check_row(self, row: int) -> None:
        if not 0 <= row < len(self.storage):
            raise GridIndexError(row, 0, self.dimensions())

    # ---------- unchecked access ----------
    def get_unchecked(self, row: int, column: int) -> T:
        return self.storage[row][column]

    def set_unchecked(self, row: int, column: int, value: T) -> None:
        self.storage[row][column] = value

    def replace_unchecked(self, row: int, column: int, value: T) -> T:
        old = self.storage[row][column]
        self.storage[row][column] = value
        return old

    # ---------- checked access ----------
    def get(self, row: int, column: int) -> T:
        self.check(row, column)
        return self.get_unchecked(row, column)

    def set(self, row: int, column: int, value: T) -> None:
        self.check(row, column)
        self.set_unchecked(row, column, value)

    def replace(self, row: int, column: int, value: T) -> T:
        self.check(row, column)
        return self.replace_unchecked(row, column, value)

    # ---------- whole rows ----------
    def row(self, row: int) -> List[T]:
        self.check_row(row)
        return self.storage[row]

    def replace_row(self, row: int, values: List[T]) -> List[T]:
        self.check_row(row)
        old = self.storage[row]
        self.storage[row] = values
        return old

    def fill_row(self, row: int, make: Callable[[], T]) -> None:
        r = self.storage[row]
        for x in range(len(r)):
            r[x] = make()

    def rotate_left(self, start: int = 0, n: int = 1) -> None:
        """Rotate rows[start:] left by n; the first n rows of the window move to its end."""
        window = self.storage[start:]
        if not window:
            return
        n %= len(window)
        self.storage[start:] = window[n:] + window[:n]

    def rotate_right(self, start: int = 0, n: int = 1) -> None:
        """Rotate rows[start:] right by n; the last n rows of the window move to its front."""
        window = self.storage[start:]
        if not window:
            return
        n %= len(window)
        self.storage[start:] = window[len(window) - n:] + window[:len(window) - n]

    def clear_line(self, l: int, blank: T = EMPTY) -> None:
        """Drop row l from the grid: every row after it moves back one, the last row is blanked."""
        self.check_row(l)
        self.rotate_left(l, 1)
        self.fill_row(len(self.storage) - 1, lambda: blank)

    def rows(self) -> Iterator[List[T]]:
        return iter(self.storage)

    def enumerated(self) -> Iterator[Tuple[Tuple[int, int], T]]:
        """Yield ((x, y), cell) for every location, row by row."""
        for y, r in enumerate(self.storage):
            for x, v in enumerate(r):
                yield (x, y), v

    def snapshot(self) -> List[List[T]]:
        return [r[:] for r in self.storage]

    def __eq__(self, other):
        if not isinstance(other, GridStorage):
            return NotImplemented
        return self.columns == other.columns and self.storage == other.storage

    def __repr__(self):
        rows, columns = self.dimensions()
        return f"GridStorage(rows={rows}, columns={columns})"
