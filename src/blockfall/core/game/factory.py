# src/blockfall/core/game/factory.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from blockfall.core.config.root import AppConfig
from blockfall.core.game.config import GameConfig
from blockfall.core.game.game import BlockfallGame
from blockfall.core.game.templates import PieceSet


def _game_config(cfg: Any) -> GameConfig:
    if isinstance(cfg, GameConfig):
        return cfg
    if isinstance(cfg, AppConfig):
        return cfg.game
    if isinstance(cfg, Mapping):
        if "game" in cfg:
            return AppConfig.model_validate(dict(cfg)).game
        return GameConfig.model_validate(dict(cfg))
    raise TypeError(f"cfg must be AppConfig|GameConfig|mapping, got {type(cfg)!r}")


def make_game_from_cfg(cfg: Any, *, piece_set: Optional[PieceSet] = None) -> BlockfallGame:
    """
    Build a BlockfallGame from an AppConfig, a GameConfig, or a raw mapping
    (either the full app layout with a `game:` key or the game section itself).
    """
    return BlockfallGame(config=_game_config(cfg), piece_set=piece_set)


__all__ = ["make_game_from_cfg"]
