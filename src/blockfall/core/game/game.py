# src/blockfall/core/game/game.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from blockfall.core.game.board import SettledStack
from blockfall.core.game.collision import fits, has_collision
from blockfall.core.game.config import GameConfig
from blockfall.core.game.piece import Piece
from blockfall.core.game.piece_rules import PieceRule, make_piece_rule
from blockfall.core.game.templates import PieceSet
from blockfall.core.game.types import Command, Direction, SliceView, State

logger = logging.getLogger(__name__)

_MOVES = {
    Direction.DOWN: (0, +1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (+1, 0),
}


@dataclass
class GameState:
    """Everything the loop owns. Passed by reference into the core; nothing global."""

    active: Piece
    settled: SettledStack = field(default_factory=SettledStack)
    tick: int = 0
    game_over: bool = False
    quit: bool = False

    @property
    def ended(self) -> bool:
        return bool(self.game_over or self.quit)


class BlockfallGame:
    """
    Tick-driven falling-block engine.

    Contracts:

      - one step() per rendered frame; gravity fires when tick % gravity_period == 0
      - every mutation of the active piece is validated by the collision engine first
      - rotation is transactional: a rejected rotation leaves the piece unchanged
      - a blocked down move with the piece still on its spawn row ends the game
        (the piece is NOT added to the settled stack)
      - blocked moves are reported as booleans / info flags, never as exceptions
    """

    def __init__(
            self,
            *,
            config: Optional[GameConfig] = None,
            piece_set: Optional[PieceSet] = None,
            piece_rule: Optional[PieceRule] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.playfield = self.config.playfield()

        if piece_set is not None:
            self.pieces = piece_set
        elif self.config.pieces_path:
            self.pieces = PieceSet.from_yaml(Path(self.config.pieces_path))
        else:
            self.pieces = PieceSet.classic7()

        if not self.pieces.kinds():
            raise ValueError("PieceSet has no kinds (empty pieceset is invalid).")
        self._check_spawn_room()

        self._piece_rule: PieceRule = piece_rule or make_piece_rule(self.config.piece_rule)
        self._rng: np.random.Generator = np.random.default_rng(self.config.seed)

        self.state: GameState
        self.reset()

    def reset(self, seed: Optional[int] = None) -> State:
        if seed is not None:
            self._rng = np.random.default_rng(int(seed))
        self._piece_rule.reset(rng=self._rng, kinds=self.pieces.kinds())

        self.state = GameState(active=self._new_piece())
        if not fits(self.state.settled, self.state.active, self.playfield):
            self.state.game_over = True
        return self.snapshot()

    # ---- commands -----------------------------------------------------------------

    def step(self, commands: Any = ()) -> Tuple[State, bool, Dict[str, object]]:
        """
        Advance one tick and return:

          (state, ended, info)

        commands: a Command, a command name, or an iterable of either. Soft drop combines
        with gravity into a single down attempt; rotate wins over left, left over right.
        """
        st = self.state
        if st.ended:
            return self.snapshot(), True, {}

        cmds = self._normalize_commands(commands)
        info: Dict[str, object] = {}

        if Command.QUIT in cmds:
            st.quit = True
            info["quit"] = True
            logger.info("quit at tick=%d", st.tick)
            return self.snapshot(), True, info

        st.tick += 1
        gravity = st.tick % int(self.config.gravity_period) == 0
        info["gravity"] = bool(gravity)

        if gravity or Command.SOFT_DROP in cmds:
            self._advance_down(info)
            if st.game_over:
                return self.snapshot(), True, info

        if Command.ROTATE in cmds:
            ok = self.try_rotate()
            info["rotated"] = bool(ok)
            if not ok:
                info["rotation_rejected"] = True
        elif Command.MOVE_LEFT in cmds:
            info["moved"] = bool(self.try_move(Direction.LEFT))
        elif Command.MOVE_RIGHT in cmds:
            info["moved"] = bool(self.try_move(Direction.RIGHT))

        return self.snapshot(), st.ended, info

    def try_move(self, direction: Any) -> bool:
        d = Direction.parse(direction)
        if d is Direction.ROTATE:
            return self.try_rotate()
        st = self.state
        if has_collision(st.settled, st.active, d, self.playfield):
            return False
        dx, dy = _MOVES[d]
        st.active.translate(dx, dy)
        return True

    def try_rotate(self) -> bool:
        st = self.state
        cand = st.active.rotated(self.playfield)
        if has_collision(st.settled, cand, Direction.ROTATE, self.playfield):
            logger.debug("rotation rejected kind=%s at tick=%d", cand.kind, st.tick)
            return False
        st.active = cand
        return True

    # ---- queries ------------------------------------------------------------------

    def occupied(self, x: int, y: int) -> bool:
        return self.state.settled.occupied(x, y)

    def render_slices(self) -> List[SliceView]:
        """Settled pieces in settlement order, then the active piece (painted last)."""
        out: List[SliceView] = []
        for p in self.state.settled:
            out.extend(p.slice_views())
        out.extend(self.state.active.slice_views())
        return out

    def snapshot(self) -> State:
        st = self.state
        return State(
            tick=int(st.tick),
            game_over=bool(st.game_over),
            quit=bool(st.quit),
            settled_count=len(st.settled),
            active_kind=str(st.active.kind),
            slices=tuple(self.render_slices()),
        )

    # ---- internals ----------------------------------------------------------------

    def _check_spawn_room(self) -> None:
        """Every template must fit between the spawn point, the right wall and the floor."""
        sx, sy = int(self.config.spawn_x), int(self.config.spawn_y)
        for kind in self.pieces.kinds():
            h, w = self.pieces.get(kind).mask.shape
            if sx + int(w) > int(self.playfield.right_wall):
                raise ValueError(
                    f"piece {kind!r} is {w} cells wide and does not fit at spawn_x={sx} "
                    f"(right_wall={self.playfield.right_wall})"
                )
            if sy + int(h) > int(self.playfield.floor):
                raise ValueError(
                    f"piece {kind!r} is {h} cells tall and does not fit at spawn_y={sy} "
                    f"(floor={self.playfield.floor})"
                )

    @staticmethod
    def _normalize_commands(commands: Any) -> List[Command]:
        if commands is None:
            return []
        if isinstance(commands, (Command, str)):
            return [Command.parse(commands)]
        if isinstance(commands, Iterable):
            return [Command.parse(c) for c in commands]
        return [Command.parse(commands)]

    def _new_piece(self) -> Piece:
        kind = self._piece_rule.next_piece()
        tdef = self.pieces.get(kind)
        color = tdef.color
        if color is None:
            palette = self.config.palette
            color = palette[int(self._rng.integers(0, len(palette)))]
        return Piece.new_from_template(
            kind=kind,
            template=tdef.mask,
            origin=(int(self.config.spawn_x), int(self.config.spawn_y)),
            color=str(color),
        )

    def _spawn(self) -> None:
        st = self.state
        st.active = self._new_piece()
        logger.debug("spawn kind=%s color=%s tick=%d", st.active.kind, st.active.color, st.tick)
        if not fits(st.settled, st.active, self.playfield):
            st.game_over = True
            logger.info("game over: spawn blocked (settled=%d, tick=%d)", len(st.settled), st.tick)

    def _advance_down(self, info: Dict[str, object]) -> None:
        st = self.state
        if not has_collision(st.settled, st.active, Direction.DOWN, self.playfield):
            st.active.go_down()
            return

        if st.active.top_y == int(self.config.spawn_y):
            st.game_over = True
            info["game_over"] = True
            logger.info("game over: stack reached spawn row (settled=%d, tick=%d)", len(st.settled), st.tick)
            return

        st.settled.append(st.active)
        info["locked"] = True
        logger.debug("locked kind=%s top_y=%d settled=%d", st.active.kind, st.active.top_y, len(st.settled))
        self._spawn()
        if st.game_over:
            info["game_over"] = True


__all__ = ["BlockfallGame", "GameState"]
