from __future__ import annotations

import pytest

from blockfall.core.game.errors import MalformedTemplateError
from blockfall.core.game.piece import Slice

from conftest import cells_of, piece_at


def test_translation_down_then_up_restores_slices() -> None:
    piece = piece_at("###/ # ", 5, 5)
    before = list(piece.slices)

    piece.go_down()
    assert [s.y for s in piece.slices] == [6, 7]
    piece.translate(0, -1)

    assert piece.slices == before


def test_translation_left_then_right_restores_slices() -> None:
    piece = piece_at("## / ##", 5, 5)
    before = list(piece.slices)

    piece.go_left()
    assert piece.closest_x == 4
    piece.go_right()

    assert piece.slices == before


def test_translate_is_unchecked() -> None:
    piece = piece_at("####", 1, 0)
    piece.translate(-5, -5)
    assert cells_of(piece) == [(-4, -5), (-3, -5), (-2, -5), (-1, -5)]


def test_bbox_of_t_piece() -> None:
    piece = piece_at("###/ # ", 4, 7)
    assert piece.bbox() == (4, 7, 7, 9)
    assert (piece.width, piece.height) == (3, 2)


def test_slice_cells_skip_gaps() -> None:
    s = Slice(x=3, y=4, filling=(True, False, True))
    assert list(s.cells()) == [(3, 4), (5, 4)]
    assert s.pattern == "# #"
    assert s.right == 6


def test_slice_without_cells_is_malformed() -> None:
    with pytest.raises(MalformedTemplateError):
        Slice(x=0, y=0, filling=(False, False))


def test_copy_is_independent() -> None:
    piece = piece_at("##/##", 5, 5)
    other = piece.copy()
    other.go_down()
    assert piece.top_y == 5
    assert other.top_y == 6


def test_slice_views_carry_color_and_run() -> None:
    piece = piece_at("###/  #", 2, 3, color="dark_cyan")
    views = piece.slice_views()
    assert [(v.column, v.row, v.run, v.color) for v in views] == [
        (2, 3, "###", "dark_cyan"),
        (4, 4, "#", "dark_cyan"),
    ]
