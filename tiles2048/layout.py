"""Screen geometry, button positions and the animated line-merge rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .storage import SUPPORTED_SIZES
from .theme import AIMode, Effect, Theme

SCREEN_WIDTH = 1300
SCREEN_HEIGHT = 1000
BOARD_AREA = 820
MAX_DIGITS_PER_LINE = 6

# board size -> (tile pitch, drawn tile size, font factor)
_TILE_METRICS = {
    4: (195, 170, 0.3),
    5: (158, 138, 0.4),
    6: (132, 115, 0.5),
    8: (100, 85, 0.55),
}
_DEFAULT_METRICS = _TILE_METRICS[4]

_MENU_BUTTON_WIDTH = 200
_MENU_BUTTON_HEIGHT = 65
_MENU_START_Y = 320
_MENU_SPACING = 35
_CORNER_BUTTON_WIDTH = 100
_CORNER_BUTTON_HEIGHT = 50
_CORNER_MARGIN = 20


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: float, y: float) -> bool:
        """True when the point lies inside; right and bottom edges are outside."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass(frozen=True)
class Layout:
    """Positions of the board and side buttons for one board size."""

    board_size: int
    tile_size: int
    draw_size: int
    font_size: int
    board_background: Rect
    board_x: int
    board_y: int
    board_width: int
    button_x: int
    button_y: int
    button_width: int
    button_height: int
    button_spacing: int
    effect_x: int
    effect_y: int
    effect_width: int
    effect_height: int
    effect_spacing: int
    ai_x: int
    ai_y: int
    ai_width: int
    ai_height: int
    ai_spacing: int
    random_color_x: int
    random_color_y: int
    random_color_width: int
    random_color_height: int

    def theme_buttons(self) -> list[Rect]:
        step = self.button_height + self.button_spacing
        return [
            Rect(self.button_x, self.button_y + i * step, self.button_width, self.button_height)
            for i in range(len(Theme))
        ]

    def effect_buttons(self) -> list[Rect]:
        step = self.effect_height + self.effect_spacing
        return [
            Rect(self.effect_x, self.effect_y + i * step, self.effect_width, self.effect_height)
            for i in range(len(Effect))
        ]

    def ai_buttons(self) -> list[Rect]:
        # The autoplay column is aligned with the theme column, not ai_y.
        step = self.ai_height + self.ai_spacing
        return [
            Rect(self.ai_x, self.button_y + i * step, self.ai_width, self.ai_height)
            for i in range(len(AIMode))
        ]

    def random_color_button(self) -> Rect:
        return Rect(
            self.random_color_x,
            self.random_color_y,
            self.random_color_width,
            self.random_color_height,
        )

    def tile_origin(self, row: int, col: int) -> tuple[int, int]:
        """Top-left corner of the tile at a cell."""
        return self.board_x + col * self.tile_size, self.board_y + row * self.tile_size


def max_font_size(board_size: int, tile_size: int) -> int:
    """Largest font used for numbers on a board of this size."""
    factor = _TILE_METRICS.get(board_size, _DEFAULT_METRICS)[2]
    return int(tile_size * factor)


def compute_layout(board_size: int) -> Layout:
    """Lay out the board and controls for a board size."""
    tile, draw, _ = _TILE_METRICS.get(board_size, _DEFAULT_METRICS)
    bg_x = (SCREEN_WIDTH - 350 - BOARD_AREA) // 2
    bg_y = (SCREEN_HEIGHT + 50 - BOARD_AREA) // 2
    board_width = tile * board_size
    offset = (BOARD_AREA - board_width + tile - draw) // 2
    board_x = bg_x + offset
    board_y = bg_y + offset

    button_w, button_h, button_gap = 100, 60, 25
    button_x = board_x + board_width + 70
    button_y = board_y - 10
    effect_y = button_y + len(Theme) * (button_h + button_gap) + 40

    ai_x = button_x + button_w + 35
    ai_y = 0
    ai_w, ai_h, ai_gap = 160, 60, 25

    return Layout(
        board_size=board_size,
        tile_size=tile,
        draw_size=draw,
        font_size=max_font_size(board_size, tile),
        board_background=Rect(bg_x, bg_y, BOARD_AREA, BOARD_AREA),
        board_x=board_x,
        board_y=board_y,
        board_width=board_width,
        button_x=button_x,
        button_y=button_y,
        button_width=button_w,
        button_height=button_h,
        button_spacing=button_gap,
        effect_x=button_x,
        effect_y=effect_y,
        effect_width=button_w,
        effect_height=button_h,
        effect_spacing=button_gap,
        ai_x=ai_x,
        ai_y=ai_y,
        ai_width=ai_w,
        ai_height=ai_h,
        ai_spacing=ai_gap,
        random_color_x=ai_x,
        random_color_y=ai_y + len(AIMode) * (ai_h + ai_gap) + 140,
        random_color_width=ai_w,
        random_color_height=70,
    )


@dataclass(frozen=True)
class LineResult:
    """One row or column after a move.

    values holds each tile's value before merging (what slides into place),
    merged_values the value after merging, sources the index the tile came
    from (-1 for empty), merged whether the tile is a merge result.
    """

    values: tuple[int, ...]
    merged_values: tuple[int, ...]
    sources: tuple[int, ...]
    merged: tuple[bool, ...]
    score: int


def process_line(line: Iterable[int], reverse: bool = False) -> LineResult:
    """Slide and merge a line toward its start, or toward its end if reverse."""
    cells = list(line)
    n = len(cells)
    order = range(n - 1, -1, -1) if reverse else range(n)
    tiles = [(cells[j], j) for j in order if cells[j]]

    values: list[int] = []
    merged_values: list[int] = []
    sources: list[int] = []
    merged: list[bool] = []
    score = 0
    i = 0
    while i < len(tiles):
        value, source = tiles[i]
        if i + 1 < len(tiles) and tiles[i + 1][0] == value:
            values.append(value)
            merged_values.append(value * 2)
            sources.append(tiles[i + 1][1])
            merged.append(True)
            score += value * 2
            i += 2
        else:
            values.append(value)
            merged_values.append(value)
            sources.append(source)
            merged.append(False)
            i += 1

    pad = n - len(values)
    values += [0] * pad
    merged_values += [0] * pad
    sources += [-1] * pad
    merged += [False] * pad
    if reverse:
        values.reverse()
        merged_values.reverse()
        sources.reverse()
        merged.reverse()
    return LineResult(tuple(values), tuple(merged_values), tuple(sources), tuple(merged), score)


def split_number(value: int) -> tuple[str, ...]:
    """Digits of a tile value split over one or two lines (none for 0)."""
    if value == 0:
        return ()
    text = str(value)
    if len(text) <= MAX_DIGITS_PER_LINE:
        return (text,)
    first = (len(text) + 1) // 2
    return text[:first], text[first:]


def menu_size_buttons() -> list[Rect]:
    """The board-size buttons of the main menu, in SUPPORTED_SIZES order."""
    x = (SCREEN_WIDTH - _MENU_BUTTON_WIDTH) // 2
    step = _MENU_BUTTON_HEIGHT + _MENU_SPACING
    return [
        Rect(x, _MENU_START_Y + i * step, _MENU_BUTTON_WIDTH, _MENU_BUTTON_HEIGHT)
        for i in range(len(SUPPORTED_SIZES))
    ]


def exit_button() -> Rect:
    return Rect(SCREEN_WIDTH - 120, SCREEN_HEIGHT - 80, 100, 50)


def reset_button() -> Rect:
    x = SCREEN_WIDTH - 2 * _CORNER_BUTTON_WIDTH - _CORNER_MARGIN - 15
    y = SCREEN_HEIGHT - _CORNER_BUTTON_HEIGHT - _CORNER_MARGIN
    return Rect(x, y, _CORNER_BUTTON_WIDTH, _CORNER_BUTTON_HEIGHT)


def menu_button() -> Rect:
    x = SCREEN_WIDTH - _CORNER_BUTTON_WIDTH - _CORNER_MARGIN
    y = SCREEN_HEIGHT - _CORNER_BUTTON_HEIGHT - _CORNER_MARGIN
    return Rect(x, y, _CORNER_BUTTON_WIDTH, _CORNER_BUTTON_HEIGHT)


def confirm_box() -> Rect:
    width, height = 400, 200
    return Rect((SCREEN_WIDTH - width) // 2, (SCREEN_HEIGHT - height) // 2, width, height)


def confirm_buttons() -> tuple[Rect, Rect]:
    """The Yes and No buttons of the load-confirmation dialog."""
    box = confirm_box()
    width, height, gap = 100, 50, 50
    yes_x = box.x + (box.width - width * 2 - gap) // 2
    y = box.y + box.height - height - 30
    return Rect(yes_x, y, width, height), Rect(yes_x + width + gap, y, width, height)