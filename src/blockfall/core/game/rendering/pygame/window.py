# src/blockfall/core/game/rendering/pygame/window.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from blockfall.core.game.types import Playfield


@dataclass(frozen=True)
class WindowSpec:
    width: int
    height: int
    title: str = "Blockfall"


@dataclass(frozen=True)
class Layout:
    origin: Tuple[int, int]
    cell: int
    board_w: int
    board_h: int
    window: WindowSpec

    def cell_origin(self, x: int, y: int) -> Tuple[int, int]:
        """Pixel top-left of logical cell (x, y); column 0 is the wall, so x=1 is the first board column."""
        ox, oy = self.origin
        return ox + (int(x) - 1) * self.cell, oy + int(y) * self.cell


def create_window(spec: WindowSpec) -> pygame.Surface:
    pygame.display.set_caption(spec.title)
    return pygame.display.set_mode((int(spec.width), int(spec.height)))


def compute_layout(*, playfield: Playfield, cell: int, hud_h: int = 28, pad: int = 24) -> Layout:
    """
    Single source of truth for window geometry.

    The board spans the playable columns (1..right_wall-1) and rows 0..floor-1;
    the HUD line (FPS) sits above it.
    """
    board_w = int(playfield.right_wall) - 1
    board_h = int(playfield.floor)
    ox = int(pad)
    oy = int(pad) + int(hud_h)
    width = ox + board_w * int(cell) + int(pad)
    height = oy + board_h * int(cell) + int(pad)
    return Layout(
        origin=(ox, oy),
        cell=int(cell),
        board_w=board_w,
        board_h=board_h,
        window=WindowSpec(width=width, height=height),
    )
