# src/blockfall/core/game/rendering/pygame/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame

from blockfall.core.game.constants import FILLED_CHAR
from blockfall.core.game.rendering.pygame.palette import Color, Palette
from blockfall.core.game.rendering.pygame.surf import SurfaceCache
from blockfall.core.game.rendering.pygame.window import Layout
from blockfall.core.game.types import Playfield, SliceView, State

__all__ = ["Color", "Palette", "PygameSink"]


@dataclass(frozen=True)
class Fonts:
    main: pygame.font.Font
    small: pygame.font.Font


class PygameSink:
    """
    Render sink drawing slices as cell-sized blocks.

    Coordinates: logical column c maps to pixel origin.x + (c - 1) * cell (column 0 is the wall).
    """

    def __init__(
        self,
        *,
        screen: pygame.Surface,
        layout: Layout,
        show_grid_lines: bool = False,
        palette: Optional[Palette] = None,
    ) -> None:
        self.screen = screen
        self.layout = layout
        self.show_grid_lines = bool(show_grid_lines)
        self.palette = palette or Palette()

        main = pygame.font.SysFont("consolas", 18) or pygame.font.SysFont(None, 18)
        small = pygame.font.SysFont("consolas", 14) or pygame.font.SysFont(None, 14)
        self.fonts = Fonts(main=main, small=small)

        self.cache = SurfaceCache()
        self.hud_text: str = ""
        self._pf: Optional[Playfield] = None

    def begin_frame(self, playfield: Playfield) -> None:
        self._pf = playfield
        lay = self.layout
        cell = lay.cell
        ox, oy = lay.origin

        self.screen.fill(self.palette.bg)
        board = pygame.Rect(ox, oy, lay.board_w * cell, lay.board_h * cell)
        pygame.draw.rect(self.screen, self.palette.empty, board)

        if self.show_grid_lines:
            for c in range(1, lay.board_w):
                x = ox + c * cell
                pygame.draw.line(self.screen, self.palette.grid, (x, oy), (x, oy + lay.board_h * cell))
            for r in range(1, lay.board_h):
                y = oy + r * cell
                pygame.draw.line(self.screen, self.palette.grid, (ox, y), (ox + lay.board_w * cell, y))

        pygame.draw.rect(self.screen, self.palette.border, board.inflate(4, 4), width=2)

    def draw_slice(self, view: SliceView) -> None:
        if self._pf is None:
            raise RuntimeError("PygameSink.begin_frame() must be called before draw_slice()")
        lay = self.layout
        color = self.palette.color_for_token(view.color)
        block = self.cache.block(size=lay.cell - 1, color=color)

        for i, ch in enumerate(view.run):
            if ch != FILLED_CHAR:
                continue
            x = int(view.column) + i
            y = int(view.row)
            if y < 0 or not self._pf.contains(x, y):
                continue
            self.screen.blit(block, lay.cell_origin(x, y))

    def _blit_text(self, text: str, pos: tuple[int, int], font: pygame.font.Font, color: Color) -> None:
        if text:
            self.screen.blit(self.cache.text(font=font, text=text, color=color), pos)

    def end_frame(self, state: State) -> None:
        ox, oy = self.layout.origin
        hud = f"{self.hud_text}  tick {state.tick}  settled {state.settled_count}"
        self._blit_text(hud, (ox, 8), self.fonts.small, self.palette.muted)
        if state.game_over:
            self._blit_text("GAME OVER", (ox + 8, oy + 8), self.fonts.main, self.palette.warn)
        pygame.display.flip()
