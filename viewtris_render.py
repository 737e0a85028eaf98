"""
Rendering helpers for the replay viewer.

- Pre-render one cell Surface per colour and blit it.
- Pre-render the static background (grid, hold box, side panel) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Board row 0 is drawn at the bottom of the well.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from viewtris_layout import Dims
from viewtris_piece import Cell, Mino, MinoVariant

# Colors per tetromino type, plus garbage
COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (102,224,255),
    "J": (106,119,255),
    "L": (255,158,94),
    "O": (255,224,102),
    "S": (94,224,142),
    "T": (200,119,255),
    "Z": (255,102,119),
    "garbage": (128,128,140),
}

def cell_color_key(cell: Cell) -> Optional[str]:
    if cell.kind == "tetromino":
        return cell.variant.value
    if cell.kind == "garbage":
        return "garbage"
    return None

@dataclass
class HudCache:
    frame: int = -1
    progress: Tuple[int,int] = (-1,-1)
    message: Optional[str] = None
    title: Optional[pygame.Surface] = None
    frame_s: Optional[pygame.Surface] = None
    progress_s: Optional[pygame.Surface] = None
    message_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + hold box + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(d.columns+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        self.hold_rect = pygame.Rect(d.hold_x, d.board_y, d.hold_w, d.hold_w)
        pygame.draw.rect(self.bg, (15,18,40), self.hold_rect)
        pygame.draw.rect(self.bg, (55,65,110), self.hold_rect, 1)
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)

    # ---------- Cell sprites ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s

    def cell_rect(self, bx: int, by: int) -> pygame.Rect:
        """Screen rect of board cell (bx, by); by counts up from the bottom row."""
        d = self.dims
        return pygame.Rect(d.board_x + bx*d.cell, d.board_y + (d.rows - 1 - by)*d.cell, d.cell, d.cell)

    def draw_cell(self, screen: pygame.Surface, key: str, bx: int, by: int):
        if 0 <= bx < self.dims.columns and 0 <= by < self.dims.rows:
            screen.blit(self.cell_surf[key], self.cell_rect(bx, by).inflate(-2, -2).topleft)

    # ---------- Board ----------
    def draw_board(self, screen: pygame.Surface, board):
        screen.blit(self.bg, (0,0))
        for (x, y), cell in board.cells.enumerated():
            key = cell_color_key(cell)
            if key:
                self.draw_cell(screen, key, x, y)
        if board.active is not None:
            for x, y in board.active.position():
                self.draw_cell(screen, board.active.variant.value, x, y)
        if board.hold is not None:
            self.draw_hold(screen, board.hold)

    def draw_hold(self, screen: pygame.Surface, variant: MinoVariant):
        c = self.dims.cell
        preview = Mino.from_variant(variant)
        bottom = self.hold_rect.y + 12 + 3*c
        for x, y in preview.position():
            screen.blit(self.cell_surf[variant.value], (self.hold_rect.x + 12 + x*c + 1, bottom - y*c + 1))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, frame: int, passed: int, total: int, message: Optional[str]):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Replay", True, (197,202,233))
        if frame != self.hud.frame:
            self.hud.frame = frame
            self.hud.frame_s = f.render(f"Frame: {frame}", True, (200,210,240))
        if (passed, total) != self.hud.progress:
            self.hud.progress = (passed, total)
            self.hud.progress_s = f.render(f"Actions: {passed}/{total}", True, (200,210,240))
        if message != self.hud.message:
            self.hud.message = message
            self.hud.message_s = f.render(message, True, (255,200,200)) if message else None
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.frame_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.progress_s, (d.panel_x + 12, d.panel_y + 68))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, (200,210,240)),
                f.render("Ctrl+O Open replay", True, (165,175,215)),
                f.render(". Next frame", True, (165,175,215)),
                f.render(", Previous frame", True, (165,175,215)),
            ]
        y = d.panel_y + 110
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20
        if self.hud.message_s:
            screen.blit(self.hud.message_s, (d.panel_x + 12, y + 20))
