from __future__ import annotations

import pytest

from blockfall.core.game.rendering.text import TextSink
from blockfall.core.game.types import Playfield, SliceView


def test_later_slices_paint_over_and_gaps_do_not_erase() -> None:
    sink = TextSink(cell_width=1)
    sink.begin_frame(Playfield(right_wall=6, floor=2))

    sink.draw_slice(SliceView(column=1, row=0, run="###", color="red"))
    sink.draw_slice(SliceView(column=2, row=0, run="# #", color="blue"))

    assert sink.render_lines() == ["|#### |", "|     |", "-------"]


def test_cells_outside_the_playfield_are_clipped() -> None:
    sink = TextSink(cell_width=1)
    sink.begin_frame(Playfield(right_wall=4, floor=1))

    sink.draw_slice(SliceView(column=0, row=0, run="#####", color="red"))
    sink.draw_slice(SliceView(column=1, row=-1, run="#", color="red"))
    sink.draw_slice(SliceView(column=1, row=5, run="#", color="red"))

    assert sink.render_lines() == ["|###|", "-----"]


def test_draw_before_begin_frame_is_an_error() -> None:
    with pytest.raises(RuntimeError, match="begin_frame"):
        TextSink().draw_slice(SliceView(column=1, row=0, run="#", color="red"))


def test_cell_width_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TextSink(cell_width=0)
