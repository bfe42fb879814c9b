"""Drawing of menus, the board, move animations and merge effects with pygame."""

from __future__ import annotations

import math
import random

import pygame

from .background import ParticleField, gradient_colors
from .game import Game
from .layout import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Rect,
    confirm_box,
    confirm_buttons,
    exit_button,
    max_font_size,
    menu_button,
    menu_size_buttons,
    reset_button,
    split_number,
)
from .storage import SUPPORTED_SIZES
from .theme import (
    AIMode,
    Color,
    Effect,
    Theme,
    board_background_color,
    empty_tile_color,
    tile_color,
)

DARK_GRAY = Color(80, 80, 80)
LIGHT_GRAY = Color(200, 200, 200)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
GOLD = Color(255, 215, 0)
VERSION_TEXT = "version: 1.1.0"
OVERLAY_DELAY = 0.4
MIN_FONT_SIZE = 8

_RIPPLE_COLORS = {
    Theme.DARK: (Color(255, 255, 255), Color(255, 200, 100)),
    Theme.CLASSIC: (Color(120, 110, 100), Color(200, 120, 50)),
    Theme.FOREST: (Color(70, 100, 60), Color(140, 180, 70)),
    Theme.WARM: (Color(130, 80, 50), Color(220, 120, 40)),
}


def _radius(roundness: float, width: float, height: float) -> int:
    return int(roundness * min(width, height) / 2)


class Renderer:
    """Draws a Game onto a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        game: Game,
        rng: random.Random | None = None,
    ) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.surface = surface
        self.game = game
        self._rng = rng or random.Random()
        self._fonts: dict[int, pygame.font.Font] = {}

    # -- primitives -------------------------------------------------------

    def _font(self, size: int) -> pygame.font.Font:
        size = max(1, int(size))
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _text_width(self, text: str, size: int) -> int:
        return self._font(size).size(text)[0]

    def _text(self, text: str, x: float, y: float, size: int, color: Color) -> None:
        if size <= 0 or not text:
            return
        rendered = self._font(size).render(text, True, tuple(color[:3]))
        if color.a < 255:
            rendered.set_alpha(color.a)
        self.surface.blit(rendered, (int(x), int(y)))

    def _text_centered(self, text: str, rect: Rect, size: int, color: Color) -> None:
        width = self._text_width(text, size)
        self._text(
            text,
            rect.x + (rect.width - width) // 2,
            rect.y + (rect.height - size) // 2,
            size,
            color,
        )

    def _rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
        roundness: float = 0.0,
        line: int = 0,
    ) -> None:
        w, h = int(width), int(height)
        if w <= 0 or h <= 0:
            return
        radius = _radius(roundness, w, h)
        if color.a >= 255:
            pygame.draw.rect(
                self.surface, tuple(color[:3]), (int(x), int(y), w, h), line, border_radius=radius
            )
            return
        layer = pygame.Surface((w, h), pygame.SRCALPHA)
        pygame.draw.rect(layer, tuple(color), layer.get_rect(), line, border_radius=radius)
        self.surface.blit(layer, (int(x), int(y)))

    def _button(self, rect: Rect, fill: Color) -> None:
        self._rect(rect.x, rect.y, rect.width, rect.height, fill)
        self._rect(rect.x, rect.y, rect.width, rect.height, DARK_GRAY, line=2)

    def _circle(self, cx: float, cy: float, radius: float, color: Color, line: int = 0) -> None:
        r = int(radius)
        if r <= 0:
            return
        if color.a >= 255:
            pygame.draw.circle(self.surface, tuple(color[:3]), (int(cx), int(cy)), r, line)
            return
        side = 2 * r + 2
        layer = pygame.Surface((side, side), pygame.SRCALPHA)
        pygame.draw.circle(layer, tuple(color), (r + 1, r + 1), r, line)
        self.surface.blit(layer, (int(cx) - r - 1, int(cy) - r - 1))

    def _cell_color(self, row: int, col: int, value: int) -> Color:
        game = self.game
        if game.random_color and row < len(game.tile_colors) and col < len(game.tile_colors[row]):
            return game.tile_colors[row][col]
        return tile_color(game.theme, value)

    # -- background -------------------------------------------------------

    def draw_background(self, field: ParticleField, seconds: float) -> None:
        """Vertical theme gradient with the living particles on top."""
        top, bottom = gradient_colors(self.game.theme, seconds)
        width, height = self.surface.get_size()
        span = max(height - 1, 1)
        for y in range(height):
            f = y / span
            color = tuple(int(a + (b - a) * f) for a, b in zip(top[:3], bottom[:3]))
            pygame.draw.line(self.surface, color, (0, y), (width - 1, y))
        for particle in field.alive():
            alpha = int(255 * (particle.life / particle.max_life))
            self._circle(particle.x, particle.y, 3.0, particle.color.with_alpha(alpha))

    # -- menu -------------------------------------------------------------

    def draw_menu(self) -> None:
        """Title, one button per board size, exit button and version line."""
        title_width = self._text_width("2048", 100)
        self._text("2048", SCREEN_WIDTH // 2 - title_width // 2, 150, 120, DARK_GRAY)
        for size, rect in zip(SUPPORTED_SIZES, menu_size_buttons()):
            fill = DARK_GRAY if self.game.board_size == size else LIGHT_GRAY
            self._button(rect, fill)
            label = f"{size} x {size}"
            width = self._text_width(label, 30)
            self._text(label, rect.x + (rect.width - width) // 2, rect.y + (rect.height - 30) // 2, 30, BLACK)
        exit_rect = exit_button()
        self._button(exit_rect, LIGHT_GRAY)
        self._text("Exit", exit_rect.x + 20, exit_rect.y + 12, 30, BLACK)
        info_size, margin = 16, 12
        info_color = BLACK if self.game.theme is Theme.DARK else DARK_GRAY
        self._text(VERSION_TEXT, margin, SCREEN_HEIGHT - info_size - margin, info_size, info_color)

    # -- game screen ------------------------------------------------------

    def draw_game_ui(self) -> None:
        """Board frame, empty cells, scores and every side button."""
        game = self.game
        layout = game.layout
        bg = board_background_color(game.theme)
        frame = layout.board_background
        frame_color = game.board_bg_color if game.random_color else bg
        self._rect(frame.x, frame.y, frame.width, frame.height, frame_color, 0.05)

        empty = empty_tile_color(game.theme)
        for i in range(game.board_size):
            for j in range(game.board_size):
                x, y = layout.tile_origin(i, j)
                color = self._cell_color(i, j, 0) if game.random_color else empty
                self._rect(x, y, layout.draw_size, layout.draw_size, color, 0.1)

        font, padding = 39, 15
        current = f"Current Score: {game.score}"
        current_width = self._text_width(current, font)
        self._rect(80 - padding, 40 - padding // 2, current_width + padding * 2, font + padding, bg, 0.2)
        self._text(current, 80, 40, font, DARK_GRAY)
        best = f"Best Score: {game.best_score()}"
        best_width = self._text_width(best, font)
        best_x = 150 + self._text_width("Current Score: ", 40) + 40
        self._rect(best_x - padding, 40 - padding // 2, best_width + padding * 2, font + padding, bg, 0.2)
        self._text(best, best_x, 40, font, DARK_GRAY)

        for theme, rect in zip(Theme, layout.theme_buttons()):
            self._button(rect, DARK_GRAY if game.theme is theme else LIGHT_GRAY)
            self._text_centered(theme.label, rect, 20, BLACK)
        for effect, rect in zip(Effect, layout.effect_buttons()):
            self._button(rect, DARK_GRAY if game.effect is effect else LIGHT_GRAY)
            self._text_centered(effect.label, rect, 20, BLACK)
        for mode, rect in zip(AIMode, layout.ai_buttons()):
            self._button(rect, DARK_GRAY if game.ai_mode is mode else LIGHT_GRAY)
            label = f"Auto: {mode.label}"
            width = self._text_width(label, 18)
            self._text(label, rect.x + (rect.width - width) // 2 - 10, rect.y + (rect.height - 18) // 2, 20, BLACK)

        toggle = layout.random_color_button()
        self._button(toggle, DARK_GRAY if game.random_color else LIGHT_GRAY)
        size, gap = 20, 4
        start_y = toggle.y + (toggle.height - (size * 2 + gap)) // 2
        for k, line in enumerate(("Random Color:", "ON" if game.random_color else "OFF")):
            width = self._text_width(line, size)
            self._text(line, toggle.x + (toggle.width - width) // 2, start_y + k * (size + gap), size, BLACK)

        for rect, label in ((reset_button(), "Reset"), (menu_button(), "Menu")):
            self._button(rect, LIGHT_GRAY)
            self._text_centered(label, rect, 20, BLACK)

    def draw_board(self) -> None:
        """Every tile of the current board with its number."""
        game = self.game
        layout = game.layout
        for i, row in enumerate(game.cells):
            for j, value in enumerate(row):
                x, y = layout.tile_origin(i, j)
                self._rect(x, y, layout.draw_size, layout.draw_size, self._cell_color(i, j, value), 0.1)
                if value:
                    self.draw_number(value, x, y, layout.draw_size, layout.draw_size, DARK_GRAY)

    def draw_number(
        self, value: int, x: float, y: float, width: int, height: int, color: Color
    ) -> int:
        """Draw a tile value centred in a box, shrinking the font to fit.

        Returns the font size used, or 0 when nothing was drawn.
        """
        lines = split_number(value)
        if not lines:
            return 0
        layout = self.game.layout
        size = min(max_font_size(self.game.board_size, layout.tile_size), layout.font_size)
        for line in lines:
            while size > MIN_FONT_SIZE and self._text_width(line, size) > width - 10:
                size -= 1
        line_height = height if len(lines) == 1 else height // 2
        start_y = y + (height - len(lines) * line_height) // 2
        for k, line in enumerate(lines):
            text_width = self._text_width(line, size)
            self._text(
                line,
                x + (width - text_width) // 2,
                start_y + k * line_height + (line_height - size) // 2,
                size,
                color,
            )
        return size

    # -- animation --------------------------------------------------------

    def draw_animation(self) -> bool:
        """Draw the running move in three layers; False when none is running."""
        game = self.game
        anim = game.animation
        if anim is None:
            return False
        layout = game.layout
        t = anim.progress
        fade = int((1.0 - t) * 255)
        for i, row in enumerate(anim.old_cells):
            for j, value in enumerate(row):
                if not value:
                    continue
                x, y = layout.tile_origin(i, j)
                self._rect(x, y, layout.draw_size, layout.draw_size,
                           self._cell_color(i, j, value).with_alpha(fade), 0.1)
                if game.random_color:
                    game.randomize_colors()
                self.draw_number(value, x, y, layout.draw_size, layout.draw_size, DARK_GRAY.with_alpha(fade))
        for i, row in enumerate(anim.new_cells):
            for j, value in enumerate(row):
                source = anim.sources[i][j]
                if not value or source is None:
                    continue
                src_x, src_y = layout.tile_origin(*source)
                dst_x, dst_y = layout.tile_origin(i, j)
                cur_x = src_x + int((dst_x - src_x) * t)
                cur_y = src_y + int((dst_y - src_y) * t)
                self._rect(cur_x, cur_y, layout.draw_size, layout.draw_size, self._cell_color(i, j, value), 0.1)
                if game.random_color:
                    game.randomize_colors()
                self.draw_number(value, cur_x, cur_y, layout.draw_size, layout.draw_size, DARK_GRAY)
        for i, row in enumerate(anim.merged):
            for j, was_merged in enumerate(row):
                if was_merged:
                    self.draw_merge_effect(i, j, anim.merged_cells[i][j], t)
        return True

    def draw_merge_effect(self, row: int, col: int, value: int, progress: float) -> None:
        """Draw the selected merge effect for a tile at a point of the animation."""
        game = self.game
        layout = game.layout
        x, y = layout.tile_origin(row, col)
        tile, draw, font = layout.tile_size, layout.draw_size, layout.font_size
        cx, cy = x + tile // 2, y + tile // 2
        effect = game.effect

        if effect is Effect.FLASH:
            alpha = int(255 * (1.0 - abs(progress - 0.5) * 2))
            self._rect(x, y, draw, draw, Color(200, 220, 255).with_alpha(alpha), 0.1)
            size = int(font * (1.0 - abs(progress - 0.5) * 1.2))
            if size > 0:
                text = str(value)
                if len(text) > 5 and size > 20:
                    size = 20
                if len(text) > 6 and size > 16:
                    size = 16
                width = self._text_width(text, size)
                self._text(text, x + (draw - width) // 2, y + (draw - font) // 2, size, GOLD)
        elif effect is Effect.PARTICLE:
            count = 12
            distance = progress * 120
            radius = max(2, int(tile * 0.07 * (1.0 - progress)))
            alpha = int(255 * (1.0 - progress * 0.8))
            base = Color(255, 220, 100) if game.theme is Theme.DARK else Color(200, 100, 50)
            for p in range(count):
                angle = p / count * 2 * 3.14159 + self._rng.randrange(100) / 100.0 * 0.5
                px = cx + int(math.cos(angle) * distance)
                py = cy + int(math.sin(angle) * distance)
                self._circle(px, py, radius, base.with_alpha(alpha))
        elif effect is Effect.RIPPLE:
            radius = progress * tile * 0.6
            alpha = int(200 * (1.0 - progress))
            fill_alpha = int(80 * (1.0 - progress))
            outer, middle = _RIPPLE_COLORS.get(game.theme, (Color(100, 100, 100), Color(180, 120, 60)))
            self._circle(cx, cy, radius, outer.with_alpha(fill_alpha))
            self._circle(cx, cy, radius, outer.with_alpha(alpha), 1)
            self._circle(cx, cy, radius * 0.7, middle.with_alpha(alpha), 1)
            self._circle(cx, cy, radius * 0.4, Color(255, 180, 50).with_alpha(alpha), 1)
        elif effect is Effect.SCALE:
            scale = 0.5 + progress * 2.0 if progress < 0.5 else 1.5 - (progress - 0.5)
            scale = max(scale, 0.3)
            size = int(font * scale)
            if size > 0:
                text = str(value)
                width = self._text_width(text, size)
                if progress < 0.5:
                    alpha = int(255 * (progress / 0.5))
                else:
                    alpha = int(255 * (1.0 - (progress - 0.5) * 1.2)) & 0xFF
                alpha = max(alpha, 50)
                self._text(text, x + (draw - width) // 2, y + (draw - size) // 2, size, GOLD.with_alpha(alpha))
        elif effect is Effect.RINGS:
            radius = tile * 0.48 * (1.0 - progress)
            alpha = int(100 * (1.0 - progress))
            self._circle(cx, cy, radius, Color(255, 150, 100).with_alpha(alpha))
            self._circle(cx, cy, radius * 0.6, Color(255, 210, 120).with_alpha(alpha))

    # -- dialogs ----------------------------------------------------------

    def draw_overlay(self, dt: float) -> bool:
        """Win or game-over overlay after a short delay; True when drawn."""
        game = self.game
        if not game.game_over:
            return False
        game.game_over_timer += dt
        if game.game_over_timer < OVERLAY_DELAY:
            return False
        width, height = self.surface.get_size()
        self._rect(0, 0, width, height, Color(0, 0, 0, 180))
        box_color = Color(20, 20, 30, 200)
        padding = 30
        title_size = 80
        if game.game_won:
            title, small, spacing = "You Win!", 30, 15
            hints = ["Press C to Continue", "Press R to Restart"]
            title_width = self._text_width(title, title_size)
            hint_widths = [self._text_width(h, small) for h in hints]
            box_w = max(hint_widths) + padding * 2
            box_h = title_size + spacing + small + spacing + small + padding * 2
        else:
            title, small, spacing = "Game Over", 30, 20
            hints = ["Press R to Restart"]
            title_width = self._text_width(title, title_size)
            hint_widths = [self._text_width(hints[0], small)]
            box_w = max(title_width, hint_widths[0]) + padding * 2
            box_h = title_size + spacing + small + padding * 2
        box_x = (width - box_w) // 2
        box_y = (height - box_h) // 2
        self._rect(box_x, box_y, box_w, box_h, box_color, 0.2)
        title_y = box_y + padding
        self._text(title, box_x + (box_w - title_width) // 2, title_y, title_size, WHITE)
        line_y = title_y + title_size + spacing
        for hint, hint_width in zip(hints, hint_widths):
            self._text(hint, box_x + (box_w - hint_width) // 2, line_y, small, LIGHT_GRAY)
            line_y += small + spacing
        return True

    def draw_load_confirm(self) -> None:
        """The board dimmed behind a question whether to resume the saved game."""
        self.draw_game_ui()
        self.draw_board()
        self._rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT, Color(0, 0, 0, 180))
        box = confirm_box()
        self._rect(box.x, box.y, box.width, box.height, Color(50, 50, 70), 0.2)
        message = "Continue previous game?"
        width = self._text_width(message, 30)
        self._text(message, box.x + (box.width - width) // 2, box.y + 40, 30, WHITE)
        for rect, label in zip(confirm_buttons(), ("Yes", "No")):
            self._button(rect, LIGHT_GRAY)
            self._text(label, rect.x + 35, rect.y + 15, 25, BLACK)