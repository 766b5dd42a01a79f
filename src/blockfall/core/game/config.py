# src/blockfall/core/game/config.py
from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from blockfall.core.config.base import ConfigBase
from blockfall.core.game.constants import (
    GRAVITY_PERIOD,
    PALETTE,
    RECT_LOWER_X,
    RECT_LOWER_Y,
    SPAWN_X,
    SPAWN_Y,
)
from blockfall.core.game.types import Playfield

PieceRuleName = Literal["uniform", "bag7"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except Exception as e:
        raise ValueError(f"{where} must be an int-like value, got {value!r}") from e


class GameConfig(ConfigBase):
    """
    Engine-facing config: playfield geometry, spawn origin, gravity and piece selection.
    """

    seed: Optional[int] = Field(default=None, ge=0)
    right_wall: int = Field(default=RECT_LOWER_X, ge=3)
    floor: int = Field(default=RECT_LOWER_Y, ge=2)
    spawn_x: int = Field(default=SPAWN_X, ge=1)
    spawn_y: int = SPAWN_Y
    gravity_period: int = Field(default=GRAVITY_PERIOD, ge=1)
    piece_rule: PieceRuleName = "uniform"
    pieces_path: Optional[str] = None
    palette: Tuple[str, ...] = PALETTE

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @field_validator("palette", mode="after")
    @classmethod
    def _palette_non_empty(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("game.palette must list at least one color")
        return tuple(str(c).strip().lower() for c in v)

    @model_validator(mode="after")
    def _spawn_inside_playfield(self) -> "GameConfig":
        if self.spawn_x >= self.right_wall:
            raise ValueError(f"game.spawn_x must be < right_wall (got {self.spawn_x}>={self.right_wall})")
        if self.spawn_y >= self.floor - 1:
            raise ValueError(f"game.spawn_y must leave room above the floor (got {self.spawn_y}, floor={self.floor})")
        return self

    def playfield(self) -> Playfield:
        return Playfield(right_wall=int(self.right_wall), floor=int(self.floor))


__all__ = ["GameConfig", "PieceRuleName"]
