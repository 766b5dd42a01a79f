# src/blockfall/core/game/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from blockfall.core.game.constants import RECT_LOWER_X, RECT_LOWER_Y
from blockfall.core.game.errors import CommandContractError, DirectionContractError

Cell = Tuple[int, int]


class Direction(Enum):
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """
        Strict direction lookup.

        Accepts enum members, names ("down", "left", ...) and the short move tags
        ("y+", "x-", "x+"). Anything else is a caller bug.
        """
        if isinstance(value, Direction):
            return value
        s = str(value).strip().lower()
        mapping = {
            "down": cls.DOWN,
            "y+": cls.DOWN,
            "left": cls.LEFT,
            "x-": cls.LEFT,
            "right": cls.RIGHT,
            "x+": cls.RIGHT,
            "rotate": cls.ROTATE,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise DirectionContractError(f"unknown direction tag {value!r}") from e


class Command(Enum):
    QUIT = "quit"
    SOFT_DROP = "soft_drop"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE = "rotate"

    @classmethod
    def parse(cls, value: Any) -> "Command":
        if isinstance(value, Command):
            return value
        s = str(value).strip().lower().replace("-", "_")
        mapping = {
            "quit": cls.QUIT,
            "c": cls.QUIT,
            "soft_drop": cls.SOFT_DROP,
            "down": cls.SOFT_DROP,
            "s": cls.SOFT_DROP,
            "move_left": cls.MOVE_LEFT,
            "left": cls.MOVE_LEFT,
            "q": cls.MOVE_LEFT,
            "move_right": cls.MOVE_RIGHT,
            "right": cls.MOVE_RIGHT,
            "d": cls.MOVE_RIGHT,
            "rotate": cls.ROTATE,
            "z": cls.ROTATE,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise CommandContractError(f"unknown command {value!r}") from e


@dataclass(frozen=True)
class Playfield:
    """
    Implicit rectangle: left wall at column 0, right wall at `right_wall`, floor at `floor`.

    Playable columns are 1..right_wall-1 and playable rows are < floor. The top is open.
    """

    right_wall: int = RECT_LOWER_X
    floor: int = RECT_LOWER_Y

    @property
    def width(self) -> int:
        return int(self.right_wall) - 1

    def contains(self, x: int, y: int) -> bool:
        return 0 < int(x) < int(self.right_wall) and int(y) < int(self.floor)


@dataclass(frozen=True)
class SliceView:
    """What the render sink receives per slice."""

    column: int
    row: int
    run: str
    color: str


@dataclass(frozen=True)
class State:
    """
    Render-/loop-facing snapshot.

    `slices` is ordered settled pieces first (settlement order), active piece last.
    """

    tick: int
    game_over: bool
    quit: bool
    settled_count: int
    active_kind: str
    slices: Tuple[SliceView, ...]

    @property
    def ended(self) -> bool:
        return bool(self.game_over or self.quit)


__all__ = ["Cell", "Command", "Direction", "Playfield", "SliceView", "State"]
