# src/blockfall/core/runtime/rate_meter.py
from __future__ import annotations

import time
from typing import Optional


class RateMeter:
    """
    Frame-rate meter for the HUD: exponential moving average over frame intervals.

    `smoothing` is the EMA weight of the newest interval (0 < smoothing <= 1).
    """

    def __init__(self, *, smoothing: float = 0.1) -> None:
        s = float(smoothing)
        if not (0.0 < s <= 1.0):
            raise ValueError(f"smoothing must be in (0, 1], got {smoothing}")
        self.smoothing = s
        self._last: Optional[float] = None
        self._dt: Optional[float] = None
        self.frames = 0

    def tick(self, now_s: Optional[float] = None) -> None:
        now = time.perf_counter() if now_s is None else float(now_s)
        if self._last is not None:
            dt = max(0.0, now - self._last)
            self._dt = dt if self._dt is None else self._dt + self.smoothing * (dt - self._dt)
        self._last = now
        self.frames += 1

    def rate_hz(self) -> float:
        if not self._dt:
            return 0.0
        return 1.0 / self._dt

    def frame_ms(self) -> float:
        return 0.0 if self._dt is None else 1000.0 * self._dt

    def reset(self) -> None:
        self._last = None
        self._dt = None
        self.frames = 0

    def label(self) -> str:
        return f"{int(round(self.rate_hz()))} FPS"


__all__ = ["RateMeter"]
