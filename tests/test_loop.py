from __future__ import annotations

from blockfall.core.game.loop import NullSink, RenderSink, InputSource, ScriptedInput, run_frames
from blockfall.core.game.rendering.text import TextSink
from blockfall.core.game.types import Command

from conftest import make_game


def test_collaborators_satisfy_protocols() -> None:
    assert isinstance(TextSink(), RenderSink)
    assert isinstance(NullSink(), RenderSink)
    assert isinstance(ScriptedInput(), InputSource)


def test_run_frames_paints_one_frame_per_tick() -> None:
    game = make_game("I")
    sink = TextSink()

    state = run_frames(game, ScriptedInput(), sink, max_ticks=3)

    assert state.tick == 3
    assert sink.frames == 3
    assert sink.last_frame[3] == "|" + "  " + "#" * 8 + "  " * 10 + "|"
    assert sink.last_frame[-1] == "-" * 32
    assert len(sink.last_frame) == 31


def test_run_frames_follows_the_script() -> None:
    game = make_game("I")
    sink = TextSink()
    script = [[Command.SOFT_DROP], ["right"], [], ["rotate"]]

    state = run_frames(game, ScriptedInput(script), sink, max_ticks=4)

    assert state.tick == 4
    assert [(s.x, s.y, s.pattern) for s in game.state.active.slices] == [
        (3, 4, "#"),
        (3, 5, "#"),
        (3, 6, "#"),
        (3, 7, "#"),
    ]


def test_run_frames_stops_on_quit() -> None:
    game = make_game("T")
    sink = NullSink()

    state = run_frames(game, ScriptedInput([[], ["quit"], ["left"]]), sink)

    assert state.quit
    assert state.tick == 1


def test_run_frames_stops_on_game_over() -> None:
    game = make_game("O", floor=8)
    sink = TextSink()

    state = run_frames(game, ScriptedInput([["s"]] * 20), sink)

    assert state.game_over
    assert state.tick == 6
    assert sink.last_state is state
