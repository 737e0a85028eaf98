
CONFIG = {
    "CELL_SIZE": 24,
    "BOARD_COLUMNS": 10,
    "BOARD_ROWS": 40,
    "VISIBLE_ROWS": 20,
    "HOLD_PREVIEW_CELLS": 4,
    "FPS": 60,
    "LOG_LEVEL": "INFO",
    "FIXTURE_DIR": "test_out",
}
