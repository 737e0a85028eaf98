"""Mino variants, board cells and placed pieces"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

class MinoVariant(str, Enum):
    L = "L"
    J = "J"
    T = "T"
    S = "S"
    Z = "Z"
    O = "O"
    I = "I"

class Direction(Enum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

# Minimal bounding boxes, top row first
SHAPES = {
    MinoVariant.I: [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],
    MinoVariant.J: [[1,0,0],[1,1,1],[0,0,0]],
    MinoVariant.L: [[0,0,1],[1,1,1],[0,0,0]],
    MinoVariant.O: [[1,1],[1,1]],
    MinoVariant.S: [[0,1,1],[1,1,0],[0,0,0]],
    MinoVariant.T: [[0,1,0],[1,1,1],[0,0,0]],
    MinoVariant.Z: [[1,1,0],[0,1,1],[0,0,0]],
}

def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]
def rotate_ccw(m): return [list(c) for c in zip(*m)][::-1]

def shape_for(variant: MinoVariant, direction: Direction) -> List[List[int]]:
    s = [r[:] for r in SHAPES[variant]]
    for _ in range(direction.value):
        s = rotate_cw(s)
    return s


@dataclass(frozen=True)
class Cell:
    """Grid payload: empty, garbage, or a locked tetromino block."""
    kind: str
    variant: Optional[MinoVariant] = None

    @staticmethod
    def tetromino(variant: MinoVariant) -> "Cell":
        return Cell("tetromino", MinoVariant(variant))

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"

    def __repr__(self):
        if self.kind == "tetromino":
            return f"Tetromino({self.variant.value})"
        return self.kind.capitalize()

EMPTY = Cell("empty")
GARBAGE = Cell("garbage")


@dataclass(frozen=True)
class Mino:
    variant: MinoVariant
    direction: Direction = Direction.UP
    coordinate: Tuple[int, int] = (0, 0)

    @staticmethod
    def from_variant(variant: MinoVariant) -> "Mino":
        return Mino(MinoVariant(variant), Direction.UP, (0, 0))

    def position(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) cells, y growing upward from the bounding box's bottom-left corner."""
        s = shape_for(self.variant, self.direction)
        h = len(s)
        x0, y0 = self.coordinate
        cells = []
        for r, row in enumerate(s):
            for c, v in enumerate(row):
                if v:
                    cells.append((x0 + c, y0 + h - 1 - r))
        return cells
