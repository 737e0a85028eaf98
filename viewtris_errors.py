"""Exceptions raised by the board engine and the replay loaders"""
from typing import List, Optional


class ViewtrisError(Exception):
    pass


class GridIndexError(ViewtrisError, IndexError):
    def __init__(self, row: int, column: int, dimensions):
        rows, columns = dimensions
        super().__init__(f"location ({row}, {column}) outside grid of {rows}x{columns}")
        self.row = row
        self.column = column
        self.dimensions = dimensions


class RollbackError(ViewtrisError, RuntimeError):
    """Rollback was requested out of order or without a matching forward apply."""


class ReplayLoadError(ViewtrisError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


class UnsupportedReplayError(ReplayLoadError):
    pass


class ReplayParseError(ReplayLoadError):
    pass


class ReconstructionError(ViewtrisError):
    """Reconstruction stopped early; `partial` holds every action produced before the failure."""

    def __init__(self, message: str, partial: Optional[List] = None):
        super().__init__(message)
        self.partial = list(partial or [])
