# src/blockfall/core/game/board.py
from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from blockfall.core.game.piece import Piece
from blockfall.core.game.types import Cell


class SettledStack:
    """
    Append-only sequence of retired pieces plus an (x, y) occupancy index.

    Retired pieces are never mutated; the stack keeps its own copy of each one.
    """

    def __init__(self) -> None:
        self._pieces: List[Piece] = []
        self._owner: Dict[Cell, int] = {}

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    @property
    def pieces(self) -> Tuple[Piece, ...]:
        return tuple(self._pieces)

    def append(self, piece: Piece) -> None:
        frozen = piece.copy()
        idx = len(self._pieces)
        self._pieces.append(frozen)
        for cell in frozen.cells():
            self._owner[cell] = idx

    def occupied(self, x: int, y: int) -> bool:
        return (int(x), int(y)) in self._owner

    def owner(self, x: int, y: int) -> Piece | None:
        idx = self._owner.get((int(x), int(y)))
        return None if idx is None else self._pieces[idx]

    def top_row(self) -> int | None:
        """Smallest occupied row (the highest point of the stack), or None if empty."""
        if not self._owner:
            return None
        return min(y for (_x, y) in self._owner)

    def cell_count(self) -> int:
        return len(self._owner)


__all__ = ["SettledStack"]
