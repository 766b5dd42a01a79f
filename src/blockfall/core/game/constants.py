# src/blockfall/core/game/constants.py
from __future__ import annotations

# Template encoding (one character = one logical cell)
FILLED_CHAR: str = "#"
EMPTY_CHAR: str = " "

# Playfield: column 0 is the left wall, RECT_LOWER_X the right wall, RECT_LOWER_Y the floor.
RECT_LOWER_X: int = 16
RECT_LOWER_Y: int = 30

# Spawn origin (top-left of the template)
SPAWN_X: int = 2
SPAWN_Y: int = 3

# Gravity fires once every N ticks
GRAVITY_PERIOD: int = 60

# Classic tetromino set size
CLASSIC_NUM_PIECES: int = 7

PALETTE: tuple[str, ...] = (
    "dark_grey",
    "red",
    "dark_red",
    "green",
    "dark_green",
    "yellow",
    "dark_yellow",
    "blue",
    "dark_blue",
    "magenta",
    "dark_magenta",
    "cyan",
    "dark_cyan",
)
