# src/blockfall/core/game/rendering/text.py
from __future__ import annotations

from typing import List, Optional

from blockfall.core.game.constants import EMPTY_CHAR, FILLED_CHAR
from blockfall.core.game.types import Playfield, SliceView, State

WALL_CHAR = "|"
FLOOR_CHAR = "-"


class TextSink:
    """
    Headless render sink: paints the playfield into a list of strings.

    Each logical cell is `cell_width` display characters wide (2 by default, so a
    cell looks like "##"). Empty run cells never overwrite what is already painted,
    and later slices paint over earlier ones, so the active piece wins.
    """

    def __init__(self, *, cell_width: int = 2, fill: str = FILLED_CHAR) -> None:
        if int(cell_width) <= 0:
            raise ValueError(f"cell_width must be positive, got {cell_width}")
        self.cell_width = int(cell_width)
        self.fill = str(fill)
        self._pf: Optional[Playfield] = None
        self._grid: List[List[str]] = []
        self.frames = 0
        self.last_frame: List[str] = []
        self.last_state: Optional[State] = None

    def begin_frame(self, playfield: Playfield) -> None:
        self._pf = playfield
        w = int(playfield.right_wall) - 1
        self._grid = [[EMPTY_CHAR] * w for _ in range(int(playfield.floor))]

    def draw_slice(self, view: SliceView) -> None:
        if self._pf is None:
            raise RuntimeError("TextSink.begin_frame() must be called before draw_slice()")
        for i, ch in enumerate(view.run):
            if ch != FILLED_CHAR:
                continue
            x = int(view.column) + i
            y = int(view.row)
            if not self._pf.contains(x, y) or y < 0:
                continue
            self._grid[y][x - 1] = self.fill

    def end_frame(self, state: State) -> None:
        self.last_state = state
        self.last_frame = self.render_lines()
        self.frames += 1

    def render_lines(self) -> List[str]:
        if self._pf is None:
            return []
        lines = [WALL_CHAR + "".join(c * self.cell_width for c in row) + WALL_CHAR for row in self._grid]
        lines.append(FLOOR_CHAR * (len(self._grid[0]) * self.cell_width + 2) if self._grid else "")
        return lines

    def text(self) -> str:
        return "\n".join(self.last_frame)


__all__ = ["TextSink"]
