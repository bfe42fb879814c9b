"""The main window loop: input handling, per-frame updates and drawing."""

from __future__ import annotations

import argparse
import random
from pathlib import Path

import pygame

from .background import ParticleField
from .board import Direction
from .game import Game, Screen
from .layout import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    confirm_buttons,
    exit_button,
    menu_button,
    menu_size_buttons,
    reset_button,
)
from .storage import Storage
from .theme import AIMode, Effect, Theme

WINDOW_TITLE = "2048"
ICON_FILE = "test.ico"
DEFAULT_FPS = 60
# Frame rate per autoplay mode, in AIMode order (0 means unlimited).
_MODE_FPS = (60, 10, 30, 300, 0)

_MOVE_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_KP5: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_KP2: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_KP1: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_KP3: Direction.RIGHT,
}


class App:
    """Ties a Game to window events, frame updates and the renderer."""

    def __init__(
        self,
        game: Game | None = None,
        storage: Storage | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.game = game if game is not None else Game(storage, rng)
        self.rng = self.game.rng
        self.field = ParticleField(self.rng)
        self.elapsed = 0.0
        self.running = True

    # -- input ------------------------------------------------------------

    def handle_click(self, x: float, y: float) -> bool:
        """React to a left click at a point; True when it hit a control."""
        screen = self.game.screen
        if screen is Screen.MENU:
            return self._click_menu(x, y)
        if screen is Screen.PLAYING:
            return self._click_game(x, y)
        return self._click_confirm(x, y)

    def _click_menu(self, x: float, y: float) -> bool:
        game = self.game
        for index, rect in enumerate(menu_size_buttons()):
            if rect.contains(x, y):
                game.select_size(index)
                return True
        if exit_button().contains(x, y):
            self.running = False
            return True
        return False

    def _click_game(self, x: float, y: float) -> bool:
        game = self.game
        layout = game.layout
        for theme, rect in zip(Theme, layout.theme_buttons()):
            if rect.contains(x, y):
                game.set_theme(theme)
                return True
        for effect, rect in zip(Effect, layout.effect_buttons()):
            if rect.contains(x, y):
                game.set_effect(effect)
                return True
        if reset_button().contains(x, y):
            game.reset()
            game.save_progress()
            return True
        if menu_button().contains(x, y):
            game.return_to_menu()
            return True
        hit = False
        for mode, rect in zip(AIMode, layout.ai_buttons()):
            if rect.contains(x, y):
                game.set_ai_mode(mode)
                hit = True
                break
        if layout.random_color_button().contains(x, y):
            game.toggle_random_color()
            hit = True
        return hit

    def _click_confirm(self, x: float, y: float) -> bool:
        game = self.game
        if game.confirm_delay_frames > 0:
            return False
        yes, no = confirm_buttons()
        if yes.contains(x, y):
            game.confirm_load(True)
            return True
        if no.contains(x, y):
            game.confirm_load(False)
            return True
        return False

    def handle_key(self, key: int) -> bool:
        """React to a key press; True when it did something.

        Escape saves a game in play and closes the window.
        """
        game = self.game
        if key == pygame.K_ESCAPE:
            if game.screen is Screen.PLAYING:
                game.save_progress()
                game.screen = Screen.MENU
                game.animation = None
            self.running = False
            return True
        if game.screen is not Screen.PLAYING:
            return False
        if game.game_over:
            handled = False
            if game.game_won and key == pygame.K_c:
                game.continue_after_win()
                handled = True
            elif key == pygame.K_r:
                game.reset()
                handled = True
            game.set_ai_mode(AIMode.OFF)
            return handled
        if game.ai_mode is not AIMode.OFF:
            return False
        direction = _MOVE_KEYS.get(key)
        if direction is None:
            return False
        return game.perform_move(direction, True)

    # -- frame ------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Advance one frame: background, animation, win state, autoplay, saving."""
        game = self.game
        self.elapsed += dt
        self.field.update(dt, game.theme)
        game.update_animation(dt)
        game.update_win_state()
        if game.screen is Screen.LOAD_CONFIRM and game.confirm_delay_frames > 0:
            game.confirm_delay_frames -= 1
        if game.screen is Screen.PLAYING:
            if game.game_over:
                game.set_ai_mode(AIMode.OFF)
            elif game.ai_mode is not AIMode.OFF:
                game.ai_step()
                if game.random_color:
                    game.randomize_colors()
        game.storage.save_preferences(game.prefs)
        game.save_progress()

    def target_fps(self) -> int:
        """Frame rate for the current autoplay mode; 0 means unlimited."""
        return _MODE_FPS[list(AIMode).index(self.game.ai_mode)]

    # -- window -----------------------------------------------------------

    def _draw(self, renderer, dt: float) -> None:
        game = self.game
        renderer.draw_background(self.field, self.elapsed)
        if game.screen is Screen.MENU:
            renderer.draw_menu()
        elif game.screen is Screen.PLAYING:
            renderer.draw_game_ui()
            if game.animation is not None:
                renderer.draw_animation()
            else:
                renderer.draw_board()
            if game.game_over:
                renderer.draw_overlay(dt)
        else:
            renderer.draw_load_confirm()

    @staticmethod
    def _set_icon() -> None:
        icon_path = Path(ICON_FILE)
        if not icon_path.is_file():
            return
        try:
            pygame.display.set_icon(pygame.image.load(str(icon_path)))
        except pygame.error:
            pass

    def _dispatch(self, event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_click(*event.pos)

    def run(self) -> None:
        """Open the window and run until it is closed."""
        from .render import Renderer

        pygame.init()
        try:
            surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            pygame.display.set_caption(WINDOW_TITLE)
            self._set_icon()
            renderer = Renderer(surface, self.game, self.rng)
            clock = pygame.time.Clock()
            self.field.reset()
            if self.game.random_color:
                self.game.randomize_colors()
            dt = 0.0
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    self._dispatch(event)
                if not self.running:
                    break
                self.step(dt)
                self._draw(renderer, dt)
                pygame.display.flip()
                dt = clock.tick(self.target_fps()) / 1000.0
        finally:
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="tiles2048", description="Play 2048.")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="directory for scores and saved games")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    App(storage=Storage(args.data_dir), rng=rng).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())