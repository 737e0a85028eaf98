"""Discrete board actions and their one-line text form.

A line looks like ``<frame> <kind> key=value ...``::

    12 garbage column=3 height=2
    30 reposition variant=T direction=up x=4 y=20
    31 line_clear row=0
    32 cell x=3 y=0 kind=T
    40 hold
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

from viewtris_errors import ReplayParseError
from viewtris_piece import EMPTY, GARBAGE, Cell, Direction, Mino, MinoVariant

@dataclass(frozen=True)
class Garbage:
    column: int
    height: int

@dataclass(frozen=True)
class Reposition:
    piece: Mino

@dataclass(frozen=True)
class LineClear:
    row: int

@dataclass(frozen=True)
class CellChange:
    position: Tuple[int, int]
    kind: Cell

@dataclass(frozen=True)
class Hold:
    pass

ActionKind = Union[Garbage, Reposition, LineClear, CellChange, Hold]

@dataclass(frozen=True)
class Action:
    frame: int
    kind: ActionKind


# ---------- text form ----------

def _cell_token(cell: Cell) -> str:
    if cell.kind == "tetromino":
        return cell.variant.value
    return cell.kind

def _parse_cell(token: str) -> Cell:
    if token == "empty": return EMPTY
    if token == "garbage": return GARBAGE
    return Cell.tetromino(MinoVariant(token))

def format_action(action: Action) -> str:
    k = action.kind
    if isinstance(k, Garbage):
        body = f"garbage column={k.column} height={k.height}"
    elif isinstance(k, Reposition):
        p = k.piece
        x, y = p.coordinate
        body = f"reposition variant={p.variant.value} direction={p.direction.name.lower()} x={x} y={y}"
    elif isinstance(k, LineClear):
        body = f"line_clear row={k.row}"
    elif isinstance(k, CellChange):
        x, y = k.position
        body = f"cell x={x} y={y} kind={_cell_token(k.kind)}"
    elif isinstance(k, Hold):
        body = "hold"
    else:
        raise TypeError(f"not an action kind: {k!r}")
    return f"{action.frame} {body}"

def _fields(tokens: List[str]) -> Dict[str, str]:
    out = {}
    for t in tokens:
        key, sep, value = t.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {t!r}")
        out[key] = value
    return out

def parse_action(line: str) -> Action:
    """Parse one line; raises ValueError/KeyError on malformed input."""
    tokens = line.split()
    if len(tokens) < 2:
        raise ValueError("expected '<frame> <kind>'")
    frame = int(tokens[0])
    if frame < 0:
        raise ValueError("frame must not be negative")
    name, f = tokens[1], _fields(tokens[2:])
    if name == "garbage":
        kind = Garbage(int(f["column"]), int(f["height"]))
    elif name == "reposition":
        piece = Mino(MinoVariant(f["variant"]), Direction[f["direction"].upper()],
                     (int(f["x"]), int(f["y"])))
        kind = Reposition(piece)
    elif name == "line_clear":
        kind = LineClear(int(f["row"]))
    elif name == "cell":
        kind = CellChange((int(f["x"]), int(f["y"])), _parse_cell(f["kind"]))
    elif name == "hold":
        kind = Hold()
    else:
        raise ValueError(f"unknown action {name!r}")
    return Action(frame, kind)

def dump_actions(actions: Iterable[Action]) -> str:
    return "".join(format_action(a) + "\n" for a in actions)

def load_actions(text: str, source: str = "<string>") -> List[Action]:
    actions = []
    for n, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            actions.append(parse_action(line))
        except (ValueError, KeyError) as e:
            raise ReplayParseError(f"line {n}: {e}", source) from e
    return actions
