from __future__ import annotations

from pathlib import Path

import pytest

from blockfall.core.game.errors import MalformedTemplateError
from blockfall.core.game.piece import Piece
from blockfall.core.game.templates import CLASSIC7_TEMPLATES, PieceSet, mask_to_rows, parse_template


@pytest.mark.parametrize("kind", sorted(CLASSIC7_TEMPLATES))
def test_new_piece_has_one_slice_per_template_row(kind: str) -> None:
    template = CLASSIC7_TEMPLATES[kind]
    rows = template.split("/")

    piece = Piece.new_from_template(kind=kind, template=template, origin=(3, 3), color="red")

    assert len(piece.slices) == len(rows)
    for row, s in zip(rows, piece.slices):
        assert s.run_length == row.count("#")
        assert s.x == 3 + row.index("#")
    assert sum(1 for _ in piece.cells()) == 4


def test_slices_have_distinct_rows() -> None:
    piece = Piece.new_from_template(kind="S", template=" ##/## ", origin=(5, 10), color="red")
    assert [(s.x, s.y, s.pattern) for s in piece.slices] == [(6, 10, "##"), (5, 11, "##")]


def test_classic7_order_and_cell_counts() -> None:
    ps = PieceSet.classic7()
    assert ps.kinds() == ("I", "O", "Z", "S", "L", "J", "T")
    assert all(ps.get(k).cell_count() == 4 for k in ps.kinds())
    assert ps.color_of("T") is None


def test_parse_template_crops_empty_side_columns() -> None:
    mask = parse_template("  ## /  ## ")
    assert mask.shape == (2, 2)
    assert mask_to_rows(mask) == ("##", "##")
    assert not mask.flags.writeable


def test_parse_template_accepts_newlines_and_row_lists() -> None:
    assert mask_to_rows(parse_template("###\n # ")) == ("###", " # ")
    assert mask_to_rows(parse_template(["#", "##"])) == ("# ", "##")


def test_parse_template_rejects_row_without_cell() -> None:
    with pytest.raises(MalformedTemplateError, match="no occupied cell"):
        parse_template("##/  ")


def test_parse_template_rejects_illegal_characters() -> None:
    with pytest.raises(MalformedTemplateError, match="illegal characters"):
        parse_template("#x#")


def test_unknown_kind_lists_known_kinds() -> None:
    with pytest.raises(KeyError, match="known kinds"):
        PieceSet.classic7().get("Q")


def test_piece_set_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "pieces.yaml"
    path.write_text(
        "expected_cells: 3\n"
        "pieces:\n"
        "  V:\n"
        "    template: ['##', '# ']\n"
        "    color: cyan\n"
        "  I3:\n"
        "    template: '###'\n",
        encoding="utf-8",
    )

    ps = PieceSet.from_yaml(path)

    assert ps.kinds() == ("V", "I3")
    assert ps.color_of("V") == "cyan"
    assert ps.get("I3").rows() == ("###",)


def test_piece_set_from_yaml_enforces_cell_count(tmp_path: Path) -> None:
    path = tmp_path / "pieces.yaml"
    path.write_text("pieces:\n  I3:\n    template: '###'\n", encoding="utf-8")

    with pytest.raises(ValueError, match="expected 4 filled cells"):
        PieceSet.from_yaml(path, expected_cells=4)
