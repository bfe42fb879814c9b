"""Game session state: menus, moves, animations, autoplay and saving."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from .ai import best_move
from .board import Board, Direction
from .layout import Layout, compute_layout, process_line
from .storage import SUPPORTED_SIZES, GameProgress, Preferences, Storage
from .theme import AIMode, Color, Effect, Theme, random_colors

MOVE_DURATION = 0.15
CONFIRM_DELAY_FRAMES = 2


class Screen(Enum):
    """Which screen the game is showing."""

    MENU = "menu"
    PLAYING = "playing"
    LOAD_CONFIRM = "load_confirm"


@dataclass
class MoveAnimation:
    """A move being animated.

    new_cells holds the tiles as they slide (before merging), merged_cells
    the board once the move is done, sources the cell each tile came from
    (None where empty), merged which cells are merge results.
    """

    old_cells: list[list[int]]
    new_cells: list[list[int]]
    merged_cells: list[list[int]]
    sources: list[list[tuple[int, int] | None]]
    merged: list[list[bool]]
    direction: Direction
    score: int
    duration: float = MOVE_DURATION
    progress: float = 0.0

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0


def _transpose(grid: list[list]) -> list[list]:
    return [list(col) for col in zip(*grid)]


class Game:
    """The whole state of a session, independent of drawing and input."""

    def __init__(self, storage: Storage | None = None, rng: random.Random | None = None) -> None:
        self.storage = storage if storage is not None else Storage()
        self.rng = rng or random.Random()
        self.prefs: Preferences = self.storage.load_preferences()
        self.board_size = SUPPORTED_SIZES[self.prefs.board_size_index]
        self.theme = Theme(self.prefs.theme)
        self.effect = Effect(self.prefs.effect)
        self.screen = Screen.MENU
        self.layout: Layout = compute_layout(self.board_size)
        self.ai_mode = AIMode.OFF
        self.random_color = False
        self.tile_colors: list[list[Color]] = []
        self.board_bg_color = Color(0, 0, 0, 0)
        self.animation: MoveAnimation | None = None
        self.pending_size_index: int | None = None
        self.confirm_delay_frames = 0
        self.cells: list[list[int]] = []
        self.score = 0
        self.game_over = False
        self.game_won = False
        self.show_win_dialog = True
        self.game_over_timer = 0.0
        self.reset()

    # -- scores -----------------------------------------------------------

    def best_score(self) -> int:
        """Best score recorded for the current board size."""
        return self.prefs.best_scores[self.prefs.board_size_index]

    def _raise_best(self, score: int) -> None:
        index = self.prefs.board_size_index
        if score > self.prefs.best_scores[index]:
            self.prefs.best_scores[index] = score
            self.storage.save_preferences(self.prefs)

    # -- colours ----------------------------------------------------------

    def randomize_colors(self) -> None:
        self.tile_colors, self.board_bg_color = random_colors(self.board_size, self.rng)

    # -- game lifecycle ---------------------------------------------------

    def reset(self) -> None:
        """Start a fresh game on the current board size."""
        self.cells = Board.new(self.board_size, self.rng).cells
        self.score = 0
        self.game_over = False
        self.game_won = False
        self.show_win_dialog = True
        self.game_over_timer = 0.0
        self.ai_mode = AIMode.OFF
        self.animation = None
        if self.random_color:
            self.randomize_colors()

    def _apply_size(self, index: int) -> None:
        self.prefs.board_size_index = index
        self.board_size = SUPPORTED_SIZES[index]
        self.theme = Theme(self.prefs.theme)
        self.effect = Effect(self.prefs.effect)
        self.layout = compute_layout(self.board_size)

    def select_size(self, index: int) -> Screen:
        """Pick a board size from the menu, offering to resume a saved game."""
        if not 0 <= index < len(SUPPORTED_SIZES):
            raise ValueError(f"size index out of range: {index}")
        progress = self.storage.load_progress(index)
        if progress is not None and progress.board_size == SUPPORTED_SIZES[index]:
            self.pending_size_index = index
            self._apply_size(index)
            self.cells = [list(row) for row in progress.cells]
            self.score = progress.score
            self.game_over = progress.game_over
            self.game_won = progress.game_won
            self.show_win_dialog = progress.show_win_dialog
            self.screen = Screen.LOAD_CONFIRM
            self.confirm_delay_frames = CONFIRM_DELAY_FRAMES
        else:
            self._apply_size(index)
            self.reset()
            self.screen = Screen.PLAYING
            self.storage.save_preferences(self.prefs)
        if self.random_color:
            self.randomize_colors()
        return self.screen

    def confirm_load(self, accept: bool) -> None:
        """Answer the resume question: keep the saved game or start over."""
        if self.screen is not Screen.LOAD_CONFIRM or self.pending_size_index is None:
            raise RuntimeError("no saved game is waiting for confirmation")
        if not accept:
            self._apply_size(self.pending_size_index)
            self.reset()
        self.screen = Screen.PLAYING
        self.animation = None
        self.pending_size_index = None

    def return_to_menu(self) -> None:
        """Save the game and go back to the main menu."""
        self.save_progress()
        self.screen = Screen.MENU
        self.animation = None
        self.ai_mode = AIMode.OFF

    def save_progress(self) -> None:
        """Store the current game, but only while a game is being played."""
        if self.screen is not Screen.PLAYING:
            return
        self.storage.save_progress(
            GameProgress(
                self.board_size,
                [list(row) for row in self.cells],
                self.score,
                self.game_over,
                self.game_won,
                self.show_win_dialog,
            )
        )

    # -- moves ------------------------------------------------------------

    def _plan_move(self, direction: Direction) -> MoveAnimation:
        vertical = direction in (Direction.UP, Direction.DOWN)
        reverse = direction in (Direction.RIGHT, Direction.DOWN)
        lines = _transpose(self.cells) if vertical else self.cells
        results = [process_line(line, reverse) for line in lines]

        n = self.board_size
        sources: list[list[tuple[int, int] | None]] = [[None] * n for _ in range(n)]
        for k, result in enumerate(results):
            for p, (value, source) in enumerate(zip(result.values, result.sources)):
                if not value:
                    continue
                if vertical:
                    sources[p][k] = (source, k)
                else:
                    sources[k][p] = (k, source)

        def grid(rows: list[list]) -> list[list]:
            return _transpose(rows) if vertical else rows

        return MoveAnimation(
            old_cells=[list(row) for row in self.cells],
            new_cells=grid([list(r.values) for r in results]),
            merged_cells=grid([list(r.merged_values) for r in results]),
            sources=sources,
            merged=grid([list(r.merged) for r in results]),
            direction=direction,
            score=sum(r.score for r in results),
        )

    def _finish_move(self, cells: list[list[int]], gained: int) -> None:
        board = Board(cells)
        board.add_random(self.rng)
        self.cells = board.cells
        self.score += gained
        self._raise_best(self.score)

    def perform_move(self, direction: Direction | int, animate: bool = True) -> bool:
        """Slide the tiles; True when the board changed.

        Animated moves take effect when the animation ends; others at once.
        Nothing happens while an animation is running.
        """
        if self.animation is not None:
            return False
        plan = self._plan_move(Direction(direction))
        if plan.merged_cells == self.cells:
            return False
        if animate:
            self.animation = plan
        else:
            self._finish_move(plan.merged_cells, plan.score)
        return True

    def ai_step(self) -> Direction | None:
        """Let the search play one move at once; returns the move chosen."""
        if self.animation is not None:
            return None
        board = Board(self.cells)
        action = best_move(board, self.rng)
        if action is not None:
            board.move(action)
        board.add_random(self.rng)
        self.cells = board.cells
        self.score += board.score
        self._raise_best(self.score)
        return action

    def update_animation(self, dt: float) -> None:
        """Advance the running animation; complete the move when it ends."""
        anim = self.animation
        if anim is None:
            return
        anim.progress += dt / anim.duration
        if anim.progress >= 1.0:
            anim.progress = 1.0
            self.animation = None
            self._finish_move(anim.merged_cells, anim.score)

    def update_win_state(self) -> None:
        """Recompute whether the game is won or over."""
        board = Board(self.cells)
        if self.show_win_dialog:
            self.game_won = board.is_won()
            self.game_over = True if self.game_won else board.is_over()
        else:
            self.game_over = board.is_over()

    def continue_after_win(self) -> None:
        """Dismiss the win dialog and keep playing."""
        self.game_over = False
        self.game_won = False
        self.show_win_dialog = False
        self.game_over_timer = 0.0
        self.ai_mode = AIMode.OFF

    # -- settings ---------------------------------------------------------

    def set_theme(self, theme: Theme | int) -> None:
        theme = Theme(theme)
        if theme is not self.theme:
            self.theme = theme
            self.prefs.theme = theme
            self.storage.save_preferences(self.prefs)

    def set_effect(self, effect: Effect | int) -> None:
        effect = Effect(effect)
        if effect is not self.effect:
            self.effect = effect
            self.prefs.effect = effect
            self.storage.save_preferences(self.prefs)

    def set_ai_mode(self, mode: AIMode | int) -> None:
        self.ai_mode = AIMode(mode)

    def toggle_random_color(self) -> bool:
        """Switch random tile colours on or off; returns the new setting."""
        self.random_color = not self.random_color
        if self.random_color:
            self.randomize_colors()
        return self.random_color