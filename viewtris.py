"""
Replay Viewer — Pygame
======================

Steps through a recorded block-stacking game one frame at a time. The
board is rebuilt from the discrete actions of the replay (garbage, piece
repositions, line clears, cell edits, holds); nothing is re-simulated.

-------------------------------------------------------------
CONTROLS
-------------------------------------------------------------

  • Ctrl+O : Open a replay (.ttr, .ttrm, .actions)
  • .      : Advance one frame
  • ,      : Go back one frame

A replay path may also be given on the command line.

The file picker runs on a worker thread and posts the chosen path to a
queue that the main loop drains each frame, so the window keeps drawing
while the dialog is open.
"""
import logging
import queue
import sys
import threading
from typing import Optional, Tuple

import pygame

from viewtris_config import CONFIG
from viewtris_errors import ViewtrisError
from viewtris_files import Reconstructor, open_replay
from viewtris_layout import compute_dims
from viewtris_playback import Playback
from viewtris_render import RenderAssets

logger = logging.getLogger("viewtris")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def ask_replay_path(picked: "queue.Queue[Tuple[Optional[str], Optional[str]]]"):
    """Show a native file dialog and put (path, diagnostic) on `picked`; either may be None.

    Tk is driven from this worker thread, which macOS does not support; there the
    path has to come from the command line.
    """
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError as e:
        logger.error(f"no file dialog available ({e}); pass the replay path on the command line")
        picked.put((None, "no file dialog available"))
        return
    try:
        root = tkinter.Tk()
    except tkinter.TclError as e:
        logger.error(f"could not open the file dialog ({e}); pass the replay path on the command line")
        picked.put((None, f"could not open the file dialog: {e}"))
        return
    root.withdraw()
    try:
        path = filedialog.askopenfilename(
            title="Open replay",
            filetypes=[("Replays", "*.ttr *.ttrm *.actions"), ("All files", "*")],
        )
    except tkinter.TclError as e:
        logger.error(f"file dialog failed ({e})")
        picked.put((None, f"file dialog failed: {e}"))
        return
    finally:
        root.destroy()
    picked.put((path or None, None))


class FilePicker:
    """Runs at most one file dialog at a time off the main loop."""
    def __init__(self):
        self.picked: "queue.Queue[Tuple[Optional[str], Optional[str]]]" = queue.Queue()
        self.thread: Optional[threading.Thread] = None

    def open(self):
        if self.thread is not None and self.thread.is_alive():
            return
        self.thread = threading.Thread(target=ask_replay_path, args=(self.picked,), daemon=True)
        self.thread.start()

    def poll(self) -> Tuple[Optional[str], Optional[str]]:
        """(path, diagnostic) from a finished dialog, or (None, None) if nothing is waiting."""
        try:
            return self.picked.get_nowait()
        except queue.Empty:
            return None, None


def load_session(path: str, current: Playback, reconstruct: Optional[Reconstructor] = None):
    """Return (playback, message). The current playback is kept if loading fails."""
    try:
        actions = open_replay(path, reconstruct)
    except ViewtrisError as e:
        logger.error(f"could not open {path}: {e}")
        return current, str(e)
    return Playback.with_actions(actions), None


def main(argv=None, reconstruct: Optional[Reconstructor] = None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Viewtris — Replay Viewer")
    font = pygame.font.SysFont(None, 22)
    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    playback = Playback.empty()
    message = None
    if argv:
        playback, message = load_session(argv[0], playback, reconstruct)

    picker = FilePicker()

    while True:
        clock.tick(CONFIG["FPS"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_o and e.mod & pygame.KMOD_CTRL:
                    picker.open()
                elif e.key == pygame.K_PERIOD:
                    playback.advance_frame()
                elif e.key == pygame.K_COMMA:
                    playback.rewind_frame()

        path, problem = picker.poll()
        if problem:
            message = problem
        if path:
            playback, message = load_session(path, playback, reconstruct)

        render.draw_board(screen, playback.board)
        render.draw_panel_hud(screen, playback.frame, playback.actions_passed, len(playback.actions), message)
        pygame.display.flip()


if __name__ == '__main__':
    main()
