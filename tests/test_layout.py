from __future__ import annotations

from blockfall.core.game.rendering.pygame.window import compute_layout
from blockfall.core.game.types import Playfield


def test_layout_covers_the_playable_area() -> None:
    lay = compute_layout(playfield=Playfield(right_wall=16, floor=30), cell=10, hud_h=28, pad=24)
    assert (lay.board_w, lay.board_h) == (15, 30)
    assert lay.origin == (24, 52)
    assert lay.window.width == 24 + 150 + 24
    assert lay.window.height == 52 + 300 + 24
    assert lay.cell_origin(1, 0) == (24, 52)
    assert lay.cell_origin(15, 29) == (24 + 140, 52 + 290)
