from __future__ import annotations

import logging

import numpy as np

from blockfall.apps.play.entrypoint import RandomInput, main
from blockfall.core.game.types import Command
from blockfall.core.utils.logging import setup_logger


def test_random_input_never_sends_more_than_one_command() -> None:
    source = RandomInput(rng=np.random.default_rng(0), prob=1.0)
    for _ in range(50):
        batch = source.poll()
        assert len(batch) == 1
        assert batch[0] in (Command.SOFT_DROP, Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE)

    assert RandomInput(rng=np.random.default_rng(0), prob=0.0).poll() == []


def test_headless_run_exits_cleanly(capsys) -> None:
    assert main(["--headless", "--ticks", "50", "--seed", "1", "--log-level", "warning"]) == 0
    out = capsys.readouterr().out
    assert "RESULT" in out


def test_setup_logger_is_idempotent() -> None:
    logger = setup_logger(name="blockfall.test", use_rich=False, level="debug")
    logger = setup_logger(name="blockfall.test", use_rich=False, level="debug")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
