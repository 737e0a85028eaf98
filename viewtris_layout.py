# viewtris_layout.py
from dataclasses import dataclass
from viewtris_config import CONFIG

@dataclass
class Dims:
    cell: int
    margin: int
    hold_w: int
    panel_w: int
    columns: int
    rows: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    hold_x: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int

def compute_dims(columns: int = None) -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    columns = int(CONFIG["BOARD_COLUMNS"]) if columns is None else columns
    rows = int(CONFIG["VISIBLE_ROWS"])
    margin = 16
    hold_w = CONFIG["HOLD_PREVIEW_CELLS"] * cell + 24
    panel_w = 220

    board_w = columns * cell
    board_h = rows * cell

    total_w = margin + hold_w + margin + board_w + margin + panel_w + margin
    total_h = margin + board_h + margin

    hold_x = margin
    board_x = hold_x + hold_w + margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cell=cell, margin=margin, hold_w=hold_w, panel_w=panel_w,
        columns=columns, rows=rows,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        hold_x=hold_x, board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y
    )
