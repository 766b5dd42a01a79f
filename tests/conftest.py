from __future__ import annotations

from typing import Any

import pytest

from blockfall.core.game.board import SettledStack
from blockfall.core.game.config import GameConfig
from blockfall.core.game.game import BlockfallGame
from blockfall.core.game.piece import Piece
from blockfall.core.game.piece_rules import PieceRule


class FixedPieceRule(PieceRule):
    """Always spawns the same kind."""

    def __init__(self, kind: str = "T") -> None:
        super().__init__()
        self.kind = kind

    def _on_reset(self) -> None:
        if self.kind not in self._kinds:
            raise ValueError(f"{self.kind!r} not in {list(self._kinds)!r}")

    def next_piece(self) -> str:
        return self.kind


def make_game(kind: str = "T", **cfg: Any) -> BlockfallGame:
    cfg.setdefault("seed", 0)
    cfg.setdefault("gravity_period", 1000)
    return BlockfallGame(config=GameConfig(**cfg), piece_rule=FixedPieceRule(kind=kind))


def piece_at(template: str, x: int, y: int, *, kind: str = "X", color: str = "red") -> Piece:
    return Piece.new_from_template(kind=kind, template=template, origin=(x, y), color=color)


def cells_of(piece: Piece) -> list[tuple[int, int]]:
    return sorted(piece.cells())


@pytest.fixture
def stack() -> SettledStack:
    return SettledStack()
