# src/blockfall/apps/play/entrypoint.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List, Sequence

import numpy as np

from blockfall.core.config.io import load_app_config
from blockfall.core.config.root import AppConfig
from blockfall.core.game.factory import make_game_from_cfg
from blockfall.core.game.loop import run_frames
from blockfall.core.game.rendering.text import TextSink
from blockfall.core.game.types import Command, State
from blockfall.core.utils.logging import setup_logger

_RANDOM_COMMANDS = (Command.SOFT_DROP, Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play Blockfall (pygame) or run a headless random game.")
    ap.add_argument("--config", type=str, default=None, help="YAML config (see configs/play.yaml)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--piece-rule", type=str, default=None, choices=["uniform", "bag7"])
    ap.add_argument("--log-level", type=str, default=None)

    # --- UI ---
    ap.add_argument("--cell", type=int, default=None, help="cell size in pixels")
    ap.add_argument("--fps", type=int, default=None, help="frame cap (one tick per frame)")
    ap.add_argument("--show-grid", action="store_true")

    # --- headless ---
    ap.add_argument("--headless", action="store_true", help="no window: random commands, text output")
    ap.add_argument("--ticks", type=int, default=3000, help="headless: stop after this many ticks")
    ap.add_argument("--command-prob", type=float, default=0.2, help="headless: chance of a command per tick")

    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    overrides: dict[str, Any] = {
        "game.seed": args.seed,
        "game.piece_rule": args.piece_rule,
        "ui.cell": args.cell,
        "ui.fps": args.fps,
        "log_level": args.log_level,
    }
    if bool(args.show_grid):
        overrides["ui.show_grid"] = True
    path = Path(args.config) if args.config else None
    return load_app_config(path, overrides=overrides)


class RandomInput:
    """Headless input source: at most one random command per tick."""

    def __init__(self, *, rng: np.random.Generator, prob: float) -> None:
        self._rng = rng
        self._prob = float(prob)

    def poll(self) -> List[Command]:
        if float(self._rng.random()) >= self._prob:
            return []
        i = int(self._rng.integers(0, len(_RANDOM_COMMANDS)))
        return [_RANDOM_COMMANDS[i]]


def _emit_summary(*, logger: logging.Logger, state: State, frame: str) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    table = Table(title="blockfall: RESULT", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("ticks", str(state.tick))
    table.add_row("settled pieces", str(state.settled_count))
    table.add_row("game over", str(state.game_over))

    console = None
    for handler in getattr(logger, "handlers", []):
        console = getattr(handler, "console", None)
        if console is not None:
            break
    if console is None:
        console = Console()
    console.print(frame, markup=False, highlight=False)
    console.print(table)


def run_play(args: argparse.Namespace) -> int:
    cfg = build_config(args)
    logger = setup_logger(name="blockfall", use_rich=True, level=cfg.log_level)

    game = make_game_from_cfg(cfg)
    logger.info(
        "[play] playfield=%dx%d piece_rule=%s seed=%s",
        game.playfield.width,
        game.playfield.floor,
        cfg.game.piece_rule,
        cfg.game.seed,
    )

    if bool(args.headless):
        rng = np.random.default_rng(cfg.game.seed)
        sink = TextSink()
        state = run_frames(game, RandomInput(rng=rng, prob=float(args.command_prob)), sink, max_ticks=int(args.ticks))
        _emit_summary(logger=logger, state=state, frame=sink.text())
        return 0

    from blockfall.core.game.rendering.pygame.app import run_pygame_play

    return run_pygame_play(game=game, ui=cfg.ui)


def main(argv: Sequence[str] | None = None) -> int:
    return run_play(parse_args(argv))


__all__ = ["RandomInput", "build_config", "main", "parse_args", "run_play"]


if __name__ == "__main__":
    raise SystemExit(main())
