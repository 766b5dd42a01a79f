# src/blockfall/core/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from omegaconf import DictConfig, OmegaConf

from blockfall.core.config.root import AppConfig


def _as_mapping(node: DictConfig, *, where: str) -> dict[str, Any]:
    data = OmegaConf.to_container(node, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"{where} must be a mapping at top-level, got {type(data).__name__}")
    return data


def load_yaml(path: Path) -> DictConfig:
    """Read a YAML file as an OmegaConf node (interpolations stay lazy until resolved)."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"config file not found: {p}")
    node = OmegaConf.load(p)
    if not isinstance(node, DictConfig):
        raise TypeError(f"config({p}) must be a mapping at top-level")
    return node


def apply_overrides(node: DictConfig, overrides: Optional[Mapping[str, Any]]) -> DictConfig:
    """
    Layer dotted-key overrides ({"game.seed": 7}) on top of `node`.
    None values mean "not given" and are skipped.
    """
    given = {str(k): v for k, v in (overrides or {}).items() if v is not None}
    if not given:
        return node
    layer = OmegaConf.create({})
    for key, value in given.items():
        OmegaConf.update(layer, key, value, force_add=True)
    merged = OmegaConf.merge(node, layer)
    if not isinstance(merged, DictConfig):
        raise TypeError("merged config must stay a mapping")
    return merged


def load_app_config(path: Path | None = None, *, overrides: Mapping[str, Any] | None = None) -> AppConfig:
    """Load an AppConfig from YAML (code defaults when path is None), then apply overrides."""
    node = load_yaml(path) if path is not None else OmegaConf.create({})
    node = apply_overrides(node, overrides)
    return AppConfig.model_validate(_as_mapping(node, where=str(path or "<defaults>")))


__all__ = ["apply_overrides", "load_app_config", "load_yaml"]
