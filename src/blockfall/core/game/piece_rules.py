# src/blockfall/core/game/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional, Sequence, Tuple

import numpy as np


class PieceRule(ABC):
    """
    Decides which kind spawns next.

    reset(rng=..., kinds=...) binds the game-owned RNG once per game; next_piece()
    is called on every spawn. Rules never create RNG streams of their own, so a
    seeded game replays the same piece sequence.
    """

    name: str = "?"

    def __init__(self) -> None:
        self._rng: Optional[np.random.Generator] = None
        self._kinds: Tuple[str, ...] = ()

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[str]) -> None:
        kinds = tuple(str(k) for k in kinds)
        if not kinds:
            raise ValueError(f"{type(self).__name__} requires at least one piece kind")
        self._rng = rng
        self._kinds = kinds
        self._on_reset()

    def _on_reset(self) -> None:
        return None

    def _bound_rng(self) -> np.random.Generator:
        if self._rng is None:
            raise RuntimeError(f"{type(self).__name__}.reset() must be called before next_piece()")
        return self._rng

    @abstractmethod
    def next_piece(self) -> str:
        raise NotImplementedError


class UniformPieceRule(PieceRule):
    """Every spawn is an independent uniform draw over the kinds."""

    name = "uniform"

    def next_piece(self) -> str:
        rng = self._bound_rng()
        return self._kinds[int(rng.integers(0, len(self._kinds)))]


class BagPieceRule(PieceRule):
    """
    Shuffled bag holding `bag_copies` of every kind; refilled when empty.
    With the classic seven kinds and bag_copies=1 this is the 7-bag.
    """

    name = "bag7"

    def __init__(self, bag_copies: int = 1) -> None:
        super().__init__()
        self.bag_copies = int(bag_copies)
        self._bag: Deque[str] = deque()

    def _on_reset(self) -> None:
        if self.bag_copies <= 0:
            raise ValueError(f"BagPieceRule.bag_copies must be >= 1 (got {self.bag_copies})")
        self._bag.clear()

    def next_piece(self) -> str:
        rng = self._bound_rng()
        if not self._bag:
            order = rng.permutation(len(self._kinds) * self.bag_copies) % len(self._kinds)
            self._bag.extend(self._kinds[int(i)] for i in order)
        return self._bag.popleft()


def make_piece_rule(name: str) -> PieceRule:
    key = str(name).strip().lower()
    if key == UniformPieceRule.name:
        return UniformPieceRule()
    if key == BagPieceRule.name:
        return BagPieceRule(bag_copies=1)
    raise ValueError(f"unknown piece_rule {name!r} (expected 'uniform' or 'bag7')")


__all__ = ["BagPieceRule", "PieceRule", "UniformPieceRule", "make_piece_rule"]
