# src/blockfall/core/game/templates.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from blockfall.core.game.constants import EMPTY_CHAR, FILLED_CHAR
from blockfall.core.game.errors import MalformedTemplateError

# One character = one logical cell. Rows are separated by "/".
CLASSIC7_TEMPLATES: Dict[str, str] = {
    "I": "####",
    "O": "##/##",
    "Z": "## / ##",
    "S": " ##/## ",
    "L": "###/#  ",
    "J": "###/  #",
    "T": "###/ # ",
}


def _split_rows(template: str | Sequence[str]) -> List[str]:
    if isinstance(template, str):
        return template.replace("\n", "/").split("/")
    if isinstance(template, (list, tuple)):
        return [str(r) for r in template]
    raise MalformedTemplateError(f"template must be a string or a list of rows, got {type(template)!r}")


def parse_template(template: str | Sequence[str]) -> np.ndarray:
    """
    Parse a template into a read-only (rows, cols) bool mask.

    - rows are right-padded to equal width
    - all-empty leading/trailing columns are cropped, so column 0 holds the leftmost filled cell
    - every row must contain at least one filled cell
    """
    rows = _split_rows(template)
    if not rows:
        raise MalformedTemplateError("template must have at least one row")

    width = max(len(r) for r in rows)
    if width == 0:
        raise MalformedTemplateError("template rows are all empty")

    out: List[List[bool]] = []
    for i, r in enumerate(rows):
        bad = set(r) - {FILLED_CHAR, EMPTY_CHAR}
        if bad:
            raise MalformedTemplateError(f"row {i} of template {template!r} has illegal characters {sorted(bad)!r}")
        if FILLED_CHAR not in r:
            raise MalformedTemplateError(f"row {i} of template {template!r} has no occupied cell")
        out.append([ch == FILLED_CHAR for ch in r.ljust(width, EMPTY_CHAR)])

    arr = np.asarray(out, dtype=bool)
    cols = np.flatnonzero(arr.any(axis=0))
    arr = np.ascontiguousarray(arr[:, int(cols[0]) : int(cols[-1]) + 1])
    arr.flags.writeable = False
    return arr


def mask_to_rows(mask: np.ndarray) -> Tuple[str, ...]:
    return tuple("".join(FILLED_CHAR if v else EMPTY_CHAR for v in row) for row in np.asarray(mask, dtype=bool))


@dataclass(frozen=True)
class TemplateDef:
    kind: str
    mask: np.ndarray  # (rows, cols) bool
    color: Optional[str] = None

    def cell_count(self) -> int:
        return int(self.mask.sum())

    def rows(self) -> Tuple[str, ...]:
        return mask_to_rows(self.mask)


@dataclass(frozen=True)
class PieceSet:
    """
    Shape templates keyed by kind, in a stable order.

    The engine is shape-agnostic: rotations are derived from the template at runtime,
    so a set only lists the spawn orientation of each kind.
    """

    templates: Dict[str, TemplateDef]
    kind_order: Tuple[str, ...]

    @classmethod
    def classic7(cls) -> "PieceSet":
        return cls.from_mapping({k: {"template": v} for k, v in CLASSIC7_TEMPLATES.items()}, expected_cells=4)

    @classmethod
    def from_mapping(cls, pieces_node: object, *, expected_cells: Optional[int] = None) -> "PieceSet":
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("pieces must be a non-empty mapping")

        templates: Dict[str, TemplateDef] = {}
        kind_order: List[str] = []

        for kind, spec in pieces_node.items():
            if not isinstance(kind, str) or not kind:
                raise ValueError(f"piece key must be a non-empty string, got {kind!r}")
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {kind!r} must be a mapping, got {type(spec)!r}")
            if "template" not in spec:
                raise ValueError(f"{kind!r}: 'template' is required")

            mask = parse_template(spec["template"])
            if expected_cells is not None and int(mask.sum()) != int(expected_cells):
                raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {int(mask.sum())}")

            color = spec.get("color", None)
            if color is not None and not isinstance(color, str):
                raise ValueError(f"{kind!r}: color must be a palette name, got {color!r}")

            templates[kind] = TemplateDef(kind=kind, mask=mask, color=color)
            kind_order.append(kind)

        return cls(templates=templates, kind_order=tuple(kind_order))

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceSet":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"piece YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, (int, str)):
                expected_cells = int(v)
            elif v is not None:
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")

        return cls.from_mapping(data.get("pieces"), expected_cells=expected_cells)

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: str) -> bool:
        return kind in self.templates

    def get(self, kind: str) -> TemplateDef:
        try:
            return self.templates[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def color_of(self, kind: str) -> Optional[str]:
        return self.get(kind).color


__all__ = ["CLASSIC7_TEMPLATES", "PieceSet", "TemplateDef", "mask_to_rows", "parse_template"]
