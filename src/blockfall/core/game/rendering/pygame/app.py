# src/blockfall/core/game/rendering/pygame/app.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import pygame

from blockfall.core.config.root import UiConfig
from blockfall.core.game.game import BlockfallGame
from blockfall.core.game.loop import paint, run_frames
from blockfall.core.game.rendering.pygame.renderer import PygameSink
from blockfall.core.game.rendering.pygame.window import WindowSpec, compute_layout, create_window
from blockfall.core.game.types import Command
from blockfall.core.runtime.rate_meter import RateMeter

logger = logging.getLogger(__name__)

KEYMAP: Dict[int, Command] = {
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_q: Command.MOVE_LEFT,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_z: Command.ROTATE,
    pygame.K_UP: Command.ROTATE,
    pygame.K_c: Command.QUIT,
    pygame.K_ESCAPE: Command.QUIT,
}


class PygameInput:
    """
    Input source + frame pacing: one poll per frame, capped at `fps`.

    KEYDOWN events are edge-triggered; key repeat is left disabled.
    """

    def __init__(self, *, fps: int, sink: Optional[PygameSink] = None) -> None:
        self.fps = int(fps)
        self.clock = pygame.time.Clock()
        self.meter = RateMeter()
        self.sink = sink

    def poll(self) -> Sequence[Command]:
        self.clock.tick(self.fps)
        self.meter.tick()
        if self.sink is not None:
            self.sink.hud_text = f"{self.meter.label()}  {self.meter.frame_ms():.1f} ms"

        out: List[Command] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                out.append(Command.QUIT)
            elif event.type == pygame.KEYDOWN:
                cmd = KEYMAP.get(event.key)
                if cmd is not None and cmd not in out:
                    out.append(cmd)
        return out


def _wait_for_dismiss(clock: pygame.time.Clock, fps: int) -> None:
    while True:
        clock.tick(fps)
        for event in pygame.event.get():
            if event.type in (pygame.QUIT, pygame.KEYDOWN):
                return


def run_pygame_play(*, game: BlockfallGame, ui: UiConfig) -> int:
    pygame.init()
    try:
        layout = compute_layout(playfield=game.playfield, cell=int(ui.cell))
        screen = create_window(WindowSpec(width=layout.window.width, height=layout.window.height))

        sink = PygameSink(screen=screen, layout=layout, show_grid_lines=bool(ui.show_grid))
        source = PygameInput(fps=int(ui.fps), sink=sink)

        paint(game, sink, game.snapshot())
        state = run_frames(game, source, sink)
        logger.info(
            "finished: ticks=%d settled=%d game_over=%s",
            state.tick,
            state.settled_count,
            state.game_over,
        )
        if state.game_over:
            _wait_for_dismiss(source.clock, int(ui.fps))
    finally:
        pygame.quit()
    return 0


__all__ = ["KEYMAP", "PygameInput", "run_pygame_play"]
