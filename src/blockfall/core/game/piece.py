# src/blockfall/core/game/piece.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from blockfall.core.game.constants import EMPTY_CHAR, FILLED_CHAR
from blockfall.core.game.errors import MalformedTemplateError
from blockfall.core.game.templates import mask_to_rows, parse_template
from blockfall.core.game.types import Cell, Playfield, SliceView


@dataclass(frozen=True)
class Slice:
    """
    One horizontal run of a piece.

    x is the column of the first occupied cell; filling is trimmed on both ends.
    """

    x: int
    y: int
    filling: Tuple[bool, ...]

    def __post_init__(self) -> None:
        if not self.filling or not any(self.filling):
            raise MalformedTemplateError(f"slice at y={self.y} has no occupied cell")

    @property
    def run_length(self) -> int:
        return len(self.filling)

    @property
    def right(self) -> int:
        """Column just past the last cell of the run."""
        return int(self.x) + self.run_length

    @property
    def pattern(self) -> str:
        return "".join(FILLED_CHAR if v else EMPTY_CHAR for v in self.filling)

    def cells(self) -> Iterator[Cell]:
        for i, v in enumerate(self.filling):
            if v:
                yield int(self.x) + i, int(self.y)

    def shifted(self, dx: int, dy: int) -> "Slice":
        return replace(self, x=int(self.x) + int(dx), y=int(self.y) + int(dy))


def slices_from_mask(mask: np.ndarray, *, x0: int, y0: int) -> List[Slice]:
    """
    One slice per mask row at (x0 + first occupied offset, y0 + row index).
    """
    out: List[Slice] = []
    for k, row in enumerate(np.asarray(mask, dtype=bool)):
        idx = np.flatnonzero(row)
        if idx.size == 0:
            raise MalformedTemplateError(f"row {k} has no occupied cell")
        first, last = int(idx[0]), int(idx[-1])
        out.append(Slice(x=int(x0) + first, y=int(y0) + k, filling=tuple(bool(v) for v in row[first : last + 1])))
    return out


class Piece:
    """
    A tetromino as a list of slices plus the raw row templates they came from.

    Contracts:
      - rows[:, 0] lines up with the piece's closest_x (leftmost occupied column)
      - slices are ordered top to bottom, one per row, with distinct y
      - translation never checks bounds; callers ask the collision engine first
    """

    def __init__(self, *, kind: str, color: str, rows: np.ndarray, slices: Sequence[Slice]) -> None:
        if not slices:
            raise MalformedTemplateError(f"piece {kind!r} must have at least one slice")
        self.kind = str(kind)
        self.color = str(color)
        self.rows = rows
        self.slices: List[Slice] = list(slices)

    @classmethod
    def new_from_template(
            cls,
            *,
            kind: str,
            template: str | Sequence[str] | np.ndarray,
            origin: Cell,
            color: str,
    ) -> "Piece":
        if isinstance(template, np.ndarray):
            mask = parse_template(mask_to_rows(template))
        else:
            mask = parse_template(template)
        ox, oy = origin
        return cls(kind=kind, color=color, rows=mask, slices=slices_from_mask(mask, x0=ox, y0=oy))

    def __repr__(self) -> str:
        return f"Piece(kind={self.kind!r}, color={self.color!r}, slices={self.slices!r})"

    def copy(self) -> "Piece":
        return Piece(kind=self.kind, color=self.color, rows=self.rows, slices=list(self.slices))

    # ---- geometry -----------------------------------------------------------------

    @property
    def closest_x(self) -> int:
        return min(int(s.x) for s in self.slices)

    @property
    def furthest_x(self) -> int:
        return max(s.right for s in self.slices)

    @property
    def top_y(self) -> int:
        return int(self.slices[0].y)

    def bbox(self) -> Tuple[int, int, int, int]:
        """(closest_x, top_y, furthest_x, bottom_y) with furthest_x/bottom_y exclusive."""
        bottom = max(int(s.y) for s in self.slices) + 1
        return self.closest_x, self.top_y, self.furthest_x, bottom

    @property
    def width(self) -> int:
        return self.furthest_x - self.closest_x

    @property
    def height(self) -> int:
        _, top, _, bottom = self.bbox()
        return bottom - top

    def cells(self) -> Iterator[Cell]:
        for s in self.slices:
            yield from s.cells()

    def slice_views(self) -> List[SliceView]:
        return [SliceView(column=int(s.x), row=int(s.y), run=s.pattern, color=self.color) for s in self.slices]

    # ---- translation --------------------------------------------------------------

    def translate(self, dx: int, dy: int) -> None:
        self.slices = [s.shifted(dx, dy) for s in self.slices]

    def go_down(self) -> None:
        self.translate(0, +1)

    def go_left(self) -> None:
        self.translate(-1, 0)

    def go_right(self) -> None:
        self.translate(+1, 0)

    # ---- rotation -----------------------------------------------------------------

    def rotated(self, playfield: Playfield | None = None) -> "Piece":
        """
        Clockwise rotation derived from the raw rows (no per-shape rotation table).

        The bounding box keeps its top-left corner: the old width becomes the new slice
        count, and new row k is old column k read bottom-to-top. If the result reaches the
        right wall it is shifted left by the overshoot. Left wall and floor are NOT
        corrected; run the rotate collision check on the result.
        """
        pf = playfield or Playfield()
        closest_x = self.closest_x
        n = self.furthest_x - closest_x
        if n <= 0:
            raise MalformedTemplateError(f"rotation of {self.kind!r} produced {n} slices")

        window = np.asarray(self.rows, dtype=bool)
        if window.shape[1] < n:
            window = np.pad(window, ((0, 0), (0, n - window.shape[1])), constant_values=False)
        window = window[:, :n]

        new_rows = np.ascontiguousarray(np.rot90(window, -1))
        new_rows.flags.writeable = False

        cand = Piece(
            kind=self.kind,
            color=self.color,
            rows=new_rows,
            slices=slices_from_mask(new_rows, x0=closest_x, y0=self.top_y),
        )

        overshoot = max(s.right - int(pf.right_wall) for s in cand.slices)
        if overshoot > 0:
            cand.translate(-overshoot, 0)
        return cand

    def rotate(self, playfield: Playfield | None = None) -> None:
        """In-place rotation. Unguarded: the game uses rotated() + a collision check instead."""
        cand = self.rotated(playfield)
        self.rows = cand.rows
        self.slices = cand.slices


__all__ = ["Piece", "Slice", "slices_from_mask"]
