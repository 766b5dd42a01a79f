# src/blockfall/core/config/base.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ConfigBase(BaseModel):
    """
    Shared base for every config section.

    Sections are immutable once loaded; unknown keys are an error so YAML typos
    surface at load time instead of silently falling back to defaults.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
    )
