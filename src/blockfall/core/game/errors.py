# src/blockfall/core/game/errors.py
from __future__ import annotations


class BlockfallError(Exception):
    """Base class for engine errors."""


class MalformedTemplateError(BlockfallError, ValueError):
    """
    A shape template (or a rotation of it) cannot produce a usable piece.

    Raised for rows without any occupied cell, illegal characters, or a rotation
    whose computed slice count is not positive.
    """


class ContractViolation(BlockfallError, RuntimeError):
    """
    Caller bug: the engine was invoked outside its contract.

    Blocked moves are NOT contract violations; they are reported as plain booleans.
    """


class DirectionContractError(ContractViolation):
    pass


class CommandContractError(ContractViolation):
    pass


__all__ = [
    "BlockfallError",
    "CommandContractError",
    "ContractViolation",
    "DirectionContractError",
    "MalformedTemplateError",
]
