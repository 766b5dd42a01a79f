# src/blockfall/core/config/root.py
from __future__ import annotations

from pydantic import Field, field_validator

from blockfall.core.config.base import ConfigBase
from blockfall.core.game.config import GameConfig


class UiConfig(ConfigBase):
    cell: int = Field(default=24, ge=4)
    fps: int = Field(default=60, ge=1)
    show_grid: bool = False


class AppConfig(ConfigBase):
    log_level: str = "info"
    game: GameConfig = GameConfig()
    ui: UiConfig = UiConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_lower(cls, v: object) -> str:
        s = str(v).strip().lower()
        if s not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"log_level must be debug|info|warning|error|critical, got {v!r}")
        return s


__all__ = ["AppConfig", "UiConfig"]
