# src/blockfall/core/game/rendering/pygame/palette.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

Color = Tuple[int, int, int]


def _default_tokens() -> Dict[str, Color]:
    return {
        "dark_grey": (96, 96, 104),
        "red": (240, 70, 70),
        "dark_red": (150, 30, 30),
        "green": (70, 220, 90),
        "dark_green": (30, 130, 50),
        "yellow": (240, 230, 60),
        "dark_yellow": (170, 150, 20),
        "blue": (70, 110, 240),
        "dark_blue": (30, 50, 150),
        "magenta": (220, 70, 220),
        "dark_magenta": (130, 30, 130),
        "cyan": (60, 220, 230),
        "dark_cyan": (20, 130, 140),
    }


@dataclass(frozen=True)
class Palette:
    """
    UI palette for pygame rendering.

    Piece colors are engine tokens (e.g. "dark_cyan"); mapping them to RGB is UI-only.
    """

    bg: Color = (18, 18, 22)
    empty: Color = (32, 32, 40)
    grid: Color = (45, 45, 58)
    border: Color = (235, 235, 245)

    text: Color = (235, 235, 245)
    muted: Color = (170, 170, 190)
    warn: Color = (240, 90, 90)

    fallback_piece: Color = (180, 180, 180)

    tokens: Dict[str, Color] = field(default_factory=_default_tokens)

    def color_for_token(self, token: str) -> Color:
        return self.tokens.get(str(token).strip().lower(), self.fallback_piece)
