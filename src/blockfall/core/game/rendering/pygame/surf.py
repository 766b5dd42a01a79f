# src/blockfall/core/game/rendering/pygame/surf.py
from __future__ import annotations

from typing import Dict, Tuple

import pygame

Color = Tuple[int, int, int]


def _shade(color: Color, k: float) -> Color:
    r, g, b = color
    return (
        max(0, min(255, int(r * k))),
        max(0, min(255, int(g * k))),
        max(0, min(255, int(b * k))),
    )


class SurfaceCache:
    """
    Block tiles and HUD text, built once per key and reused every frame.

    A block tile is a filled square with a lighter top-left edge and a darker
    bottom-right edge.
    """

    def __init__(self) -> None:
        self._blocks: Dict[Tuple[int, Color], pygame.Surface] = {}
        self._text: Dict[Tuple[int, str, Color], pygame.Surface] = {}

    def block(self, *, size: int, color: Color) -> pygame.Surface:
        key = (int(size), color)
        surf = self._blocks.get(key)
        if surf is not None:
            return surf

        s = int(size)
        surf = pygame.Surface((s, s))
        surf.fill(color)
        if s >= 6:
            edge = max(1, s // 8)
            hi = _shade(color, 1.35)
            lo = _shade(color, 0.6)
            pygame.draw.rect(surf, hi, (0, 0, s, edge))
            pygame.draw.rect(surf, hi, (0, 0, edge, s))
            pygame.draw.rect(surf, lo, (0, s - edge, s, edge))
            pygame.draw.rect(surf, lo, (s - edge, 0, edge, s))
        self._blocks[key] = surf
        return surf

    def text(self, *, font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
        key = (id(font), str(text), color)
        surf = self._text.get(key)
        if surf is None:
            if len(self._text) >= 256:
                self._text.clear()
            surf = font.render(str(text), True, color)
            self._text[key] = surf
        return surf

    def clear(self) -> None:
        self._blocks.clear()
        self._text.clear()


__all__ = ["Color", "SurfaceCache"]
