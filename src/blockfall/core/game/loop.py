# src/blockfall/core/game/loop.py
from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from blockfall.core.game.game import BlockfallGame
from blockfall.core.game.types import Command, Playfield, SliceView, State


@runtime_checkable
class InputSource(Protocol):
    def poll(self) -> Sequence[Command]:
        """Edge-triggered commands for this tick (debouncing is the source's job)."""
        raise NotImplementedError


@runtime_checkable
class RenderSink(Protocol):
    def begin_frame(self, playfield: Playfield) -> None:
        raise NotImplementedError

    def draw_slice(self, view: SliceView) -> None:
        raise NotImplementedError

    def end_frame(self, state: State) -> None:
        raise NotImplementedError


class ScriptedInput:
    """Replays a fixed list of per-tick command batches, then stays idle."""

    def __init__(self, script: Sequence[Sequence[Command | str]] = ()) -> None:
        self._script = [list(batch) for batch in script]
        self._i = 0

    def poll(self) -> Sequence[Command]:
        if self._i >= len(self._script):
            return []
        batch = self._script[self._i]
        self._i += 1
        return [Command.parse(c) for c in batch]


class NullSink:
    def begin_frame(self, playfield: Playfield) -> None:
        _ = playfield

    def draw_slice(self, view: SliceView) -> None:
        _ = view

    def end_frame(self, state: State) -> None:
        _ = state


def paint(game: BlockfallGame, sink: RenderSink, state: State) -> None:
    sink.begin_frame(game.playfield)
    for view in state.slices:
        sink.draw_slice(view)
    sink.end_frame(state)


def run_frames(
        game: BlockfallGame,
        source: InputSource,
        sink: RenderSink,
        *,
        max_ticks: Optional[int] = None,
) -> State:
    """
    Frame-driven loop: poll -> step -> paint, one tick per frame.

    Stops on game over, quit, or after max_ticks frames (None = until the game ends).
    Frame pacing is the caller's job (the source/sink may block).
    """
    state = game.snapshot()
    frames = 0
    while not state.ended:
        if max_ticks is not None and frames >= int(max_ticks):
            break
        state, _, _ = game.step(source.poll())
        paint(game, sink, state)
        frames += 1
    return state


__all__ = ["InputSource", "NullSink", "RenderSink", "ScriptedInput", "paint", "run_frames"]
