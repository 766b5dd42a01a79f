from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from blockfall.apps.play.entrypoint import build_config, parse_args
from blockfall.core.config.io import load_app_config
from blockfall.core.config.root import AppConfig
from blockfall.core.game.config import GameConfig
from blockfall.core.game.factory import make_game_from_cfg
from blockfall.core.game.game import BlockfallGame

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_defaults_match_the_classic_playfield() -> None:
    cfg = AppConfig()
    assert cfg.game.right_wall == 16
    assert cfg.game.floor == 30
    assert (cfg.game.spawn_x, cfg.game.spawn_y) == (2, 3)
    assert cfg.game.gravity_period == 60
    assert cfg.game.piece_rule == "uniform"
    assert len(cfg.game.palette) == 13


def test_shipped_config_loads() -> None:
    cfg = load_app_config(REPO_ROOT / "configs" / "play.yaml")
    assert cfg == AppConfig()


def test_yaml_overrides(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("log_level: DEBUG\ngame:\n  seed: 7\n  piece_rule: BAG7\nui:\n  cell: 12\n", encoding="utf-8")

    cfg = load_app_config(path, overrides={"game.gravity_period": 10, "ui.fps": None})

    assert cfg.log_level == "debug"
    assert cfg.game.seed == 7
    assert cfg.game.piece_rule == "bag7"
    assert cfg.game.gravity_period == 10
    assert cfg.ui.cell == 12
    assert cfg.ui.fps == 60


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"game": {"gravity": 3}})


def test_spawn_must_be_inside_playfield() -> None:
    with pytest.raises(ValidationError, match="spawn_x"):
        GameConfig(right_wall=5, spawn_x=5)
    with pytest.raises(ValidationError, match="spawn_y"):
        GameConfig(floor=4, spawn_y=3)


def test_bad_piece_rule_and_palette() -> None:
    with pytest.raises(ValidationError):
        GameConfig(piece_rule="gameboy")
    with pytest.raises(ValidationError, match="palette"):
        GameConfig(palette=())


def test_factory_accepts_every_config_shape() -> None:
    assert isinstance(make_game_from_cfg({"game": {"seed": 3}}), BlockfallGame)
    assert isinstance(make_game_from_cfg({"seed": 3, "floor": 20}), BlockfallGame)
    game = make_game_from_cfg(AppConfig.model_validate({"game": {"right_wall": 12}}))
    assert game.playfield.right_wall == 12
    with pytest.raises(TypeError):
        make_game_from_cfg(42)


def test_custom_pieces_path(tmp_path: Path) -> None:
    path = tmp_path / "pieces.yaml"
    path.write_text("pieces:\n  DOT:\n    template: '#'\n    color: green\n", encoding="utf-8")

    game = BlockfallGame(config=GameConfig(seed=0, pieces_path=str(path)))

    assert game.state.active.kind == "DOT"
    assert game.state.active.color == "green"


def test_cli_flags_become_overrides() -> None:
    args = parse_args(["--seed", "9", "--piece-rule", "bag7", "--cell", "30", "--show-grid", "--headless"])
    cfg = build_config(args)
    assert cfg.game.seed == 9
    assert cfg.game.piece_rule == "bag7"
    assert cfg.ui.cell == 30
    assert cfg.ui.show_grid is True


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "nope.yaml")


def test_yaml_interpolation(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("game:\n  floor: 20\n  gravity_period: ${game.floor}\n", encoding="utf-8")
    assert load_app_config(path).game.gravity_period == 20


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError, match="log_level"):
        load_app_config(overrides={"log_level": "loud"})


def test_null_geometry_in_yaml_is_a_validation_error(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("game:\n  floor: null\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="floor"):
        load_app_config(path)


@pytest.mark.parametrize(
    "game",
    [
        {"floor": None},
        {"right_wall": "abc"},
        {"spawn_x": [1]},
        {"seed": "lucky"},
        {"seed": [3]},
    ],
)
def test_badly_typed_geometry_is_a_validation_error(game: dict) -> None:
    with pytest.raises(ValidationError):
        GameConfig.model_validate(game)
