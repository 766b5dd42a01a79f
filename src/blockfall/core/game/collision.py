# src/blockfall/core/game/collision.py
from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from blockfall.core.game.board import SettledStack
from blockfall.core.game.piece import Piece, Slice
from blockfall.core.game.types import Direction, Playfield

# Per-direction cell offset probed against the settled stack.
# ROTATE is evaluated on the already-rotated candidate, so it probes in place.
_PROBE: Dict[Direction, Tuple[int, int]] = {
    Direction.DOWN: (0, +1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (+1, 0),
    Direction.ROTATE: (0, 0),
}


def _down_blocked(s: Slice, pf: Playfield) -> bool:
    return int(s.y) + 1 >= int(pf.floor)


def _left_blocked(s: Slice, pf: Playfield) -> bool:
    return int(s.x) - 1 <= 0


def _right_blocked(s: Slice, pf: Playfield) -> bool:
    return s.right >= int(pf.right_wall)


def _rotate_blocked(s: Slice, pf: Playfield) -> bool:
    return s.right - 1 >= int(pf.right_wall) or int(s.x) <= 0 or int(s.y) >= int(pf.floor)


_BOUNDARY: Dict[Direction, Callable[[Slice, Playfield], bool]] = {
    Direction.DOWN: _down_blocked,
    Direction.LEFT: _left_blocked,
    Direction.RIGHT: _right_blocked,
    Direction.ROTATE: _rotate_blocked,
}


def has_collision(
        settled: SettledStack,
        active: Piece,
        direction: Any,
        playfield: Playfield | None = None,
) -> bool:
    """
    True if moving `active` in `direction` is blocked by a wall, the floor or a settled cell.

    Pure: neither argument is mutated. Unknown direction tags raise DirectionContractError.
    """
    d = Direction.parse(direction)
    pf = playfield or Playfield()

    boundary = _BOUNDARY[d]
    dx, dy = _PROBE[d]

    for s in active.slices:
        if boundary(s, pf):
            return True
        for x, y in s.cells():
            if settled.occupied(x + dx, y + dy):
                return True
    return False


def fits(settled: SettledStack, piece: Piece, playfield: Playfield | None = None) -> bool:
    """In-place check: no settled overlap and inside the walls/floor."""
    return not has_collision(settled, piece, Direction.ROTATE, playfield)


__all__ = ["fits", "has_collision"]
