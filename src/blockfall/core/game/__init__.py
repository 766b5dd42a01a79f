# src/blockfall/core/game/__init__.py
from __future__ import annotations

from blockfall.core.game.board import SettledStack
from blockfall.core.game.collision import fits, has_collision
from blockfall.core.game.config import GameConfig, PieceRuleName
from blockfall.core.game.errors import (
    BlockfallError,
    CommandContractError,
    ContractViolation,
    DirectionContractError,
    MalformedTemplateError,
)
from blockfall.core.game.game import BlockfallGame, GameState
from blockfall.core.game.piece import Piece, Slice
from blockfall.core.game.templates import PieceSet, parse_template
from blockfall.core.game.types import Command, Direction, Playfield, SliceView, State

__all__ = [
    "BlockfallError",
    "BlockfallGame",
    "Command",
    "CommandContractError",
    "ContractViolation",
    "Direction",
    "DirectionContractError",
    "GameConfig",
    "GameState",
    "MalformedTemplateError",
    "Piece",
    "PieceRuleName",
    "PieceSet",
    "Playfield",
    "SettledStack",
    "Slice",
    "SliceView",
    "State",
    "fits",
    "has_collision",
    "parse_template",
]
