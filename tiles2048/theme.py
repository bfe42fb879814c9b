"""Colours, themes, merge effects and autoplay modes."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import NamedTuple


class Color(NamedTuple):
    """An RGBA colour with 0-255 channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def with_alpha(self, alpha: float) -> "Color":
        """The same colour with another alpha, clamped to 0-255."""
        return self._replace(a=max(0, min(255, int(alpha))))


class Theme(IntEnum):
    CLASSIC = 0
    DARK = 1
    FOREST = 2
    WARM = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Effect(IntEnum):
    FLASH = 0
    PARTICLE = 1
    RIPPLE = 2
    SCALE = 3
    RINGS = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class AIMode(IntEnum):
    OFF = 0
    SLOW = 1
    MIDDLE = 2
    FAST = 3
    NOLIMIT = 4

    @property
    def label(self) -> str:
        return "No Limit" if self is AIMode.NOLIMIT else self.name.capitalize()


# Index 0 is the empty tile; index k is the tile 2**k, up to 2**24.
_TILE_COLORS: dict[Theme, tuple[tuple[int, int, int], ...]] = {
    Theme.CLASSIC: (
        (205, 193, 180), (238, 228, 218), (237, 224, 200), (242, 177, 121),
        (245, 149, 99), (246, 124, 95), (246, 94, 59), (237, 207, 114),
        (237, 204, 97), (237, 200, 80), (237, 197, 63), (237, 194, 46),
        (237, 190, 30), (230, 170, 20), (220, 140, 10), (210, 110, 0),
        (200, 80, 0), (180, 50, 0), (240, 210, 80), (245, 220, 90),
        (250, 230, 100), (255, 240, 110), (255, 245, 120), (255, 250, 130),
        (255, 255, 140),
    ),
    Theme.DARK: (
        (40, 44, 52), (60, 50, 80), (80, 60, 100), (100, 70, 120),
        (120, 80, 140), (140, 90, 160), (160, 100, 180), (180, 110, 200),
        (200, 120, 220), (210, 130, 230), (220, 140, 240), (230, 150, 250),
        (200, 80, 200), (210, 70, 210), (220, 60, 220), (230, 50, 230),
        (240, 60, 240), (245, 70, 245), (250, 80, 250), (252, 90, 252),
        (254, 100, 254), (255, 110, 255), (255, 120, 255), (255, 130, 255),
        (255, 140, 255),
    ),
    Theme.FOREST: (
        (200, 220, 180), (180, 210, 140), (160, 200, 120), (140, 190, 100),
        (120, 180, 80), (100, 170, 70), (90, 160, 60), (110, 170, 70),
        (130, 180, 80), (150, 190, 90), (170, 200, 100), (190, 210, 110),
        (200, 215, 115), (210, 220, 120), (220, 225, 125), (230, 230, 130),
        (240, 235, 135), (250, 240, 140), (245, 240, 145), (240, 245, 150),
        (235, 250, 155), (230, 250, 160), (225, 255, 165), (220, 255, 170),
        (215, 255, 175),
    ),
    Theme.WARM: (
        (255, 230, 210), (255, 210, 170), (255, 190, 130), (255, 170, 100),
        (255, 150, 80), (255, 140, 70), (255, 130, 60), (255, 140, 70),
        (255, 150, 80), (255, 160, 90), (255, 170, 100), (255, 180, 110),
        (255, 185, 115), (255, 190, 120), (255, 195, 125), (255, 200, 130),
        (255, 205, 135), (255, 210, 140), (255, 215, 145), (255, 220, 150),
        (255, 225, 155), (255, 230, 160), (255, 235, 165), (255, 240, 170),
        (255, 245, 175),
    ),
}

_FALLBACK_COLORS = {
    Theme.CLASSIC: Color(60, 58, 50),
    Theme.DARK: Color(30, 30, 40),
    Theme.FOREST: Color(50, 80, 30),
    Theme.WARM: Color(180, 80, 40),
}

_BOARD_BACKGROUNDS = {
    Theme.CLASSIC: Color(0, 0, 255, 32),
    Theme.DARK: Color(20, 20, 30, 200),
    Theme.FOREST: Color(60, 80, 40, 100),
    Theme.WARM: Color(100, 60, 30, 80),
}


def tile_color(theme: Theme | int, value: int) -> Color:
    """Background colour of a tile holding value under a theme."""
    theme = Theme(theme)
    table = _TILE_COLORS[theme]
    if value == 0:
        return Color(*table[0])
    if value > 0 and value & (value - 1) == 0:
        power = value.bit_length() - 1
        if 1 <= power < len(table):
            return Color(*table[power])
    return _FALLBACK_COLORS[theme]


def empty_tile_color(theme: Theme | int) -> Color:
    """Colour of an empty cell under a theme."""
    return tile_color(theme, 0)


def board_background_color(theme: Theme | int) -> Color:
    """Translucent colour drawn behind the board."""
    return _BOARD_BACKGROUNDS[Theme(theme)]


def random_colors(
    size: int, rng: random.Random | None = None
) -> tuple[list[list[Color]], Color]:
    """Random colours for every tile, and a random board background."""
    source = rng or random
    tiles = [
        [Color(*(source.randrange(256) for _ in range(4))) for _ in range(size)]
        for _ in range(size)
    ]
    background = Color(
        source.randrange(256), source.randrange(256), source.randrange(256), 200
    )
    return tiles, background