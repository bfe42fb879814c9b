"""Saved preferences and per-size game progress in small binary files."""

from __future__ import annotations

import os
import struct
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .board import MAX_BOARD_SIZE
from .theme import Effect, Theme

SUPPORTED_SIZES = (4, 5, 6, 8)
PREFERENCES_FILE = "2048_best.dat"
PROGRESS_FILE = "game_save.dat"
PROGRESS_VERSION = 2

_PREFS = struct.Struct("<7i")
_SLOT_INTS = 1 + MAX_BOARD_SIZE * MAX_BOARD_SIZE + 4
_MULTI = struct.Struct(f"<{_SLOT_INTS * len(SUPPORTED_SIZES) + 1}i")


def default_data_dir() -> Path:
    """Directory that holds the save files for this user."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA")
        return Path(base) / "My2048" if base else Path(".")
    base = os.environ.get("HOME")
    return Path(base) / ".config" / "my2048" if base else Path(".")


@dataclass
class Preferences:
    """Best scores per board size and the last chosen size, theme and effect."""

    best_scores: list[int] = field(default_factory=lambda: [0] * len(SUPPORTED_SIZES))
    board_size_index: int = 0
    theme: Theme = Theme.CLASSIC
    effect: Effect = Effect.FLASH


@dataclass
class GameProgress:
    """A game in progress for one board size."""

    board_size: int
    cells: list[list[int]]
    score: int = 0
    game_over: bool = False
    game_won: bool = False
    show_win_dialog: bool = True


def _pack_preferences(prefs: Preferences) -> bytes:
    return _PREFS.pack(
        *(int(s) for s in prefs.best_scores),
        int(prefs.board_size_index),
        int(prefs.theme),
        int(prefs.effect),
    )


def _unpack_preferences(data: bytes) -> Preferences:
    if len(data) < _PREFS.size:
        raise ValueError("preferences file is truncated")
    values = _PREFS.unpack_from(data)
    index = values[4]
    if not 0 <= index < len(SUPPORTED_SIZES):
        raise ValueError(f"invalid board size index {index}")
    return Preferences(list(values[:4]), index, Theme(values[5]), Effect(values[6]))


def _empty_slot(board_size: int = 0) -> list[int]:
    return [board_size] + [0] * (_SLOT_INTS - 1)


def _pack_progress(progress: GameProgress) -> list[int]:
    grid = [[0] * MAX_BOARD_SIZE for _ in range(MAX_BOARD_SIZE)]
    for r, row in enumerate(progress.cells):
        for c, value in enumerate(row):
            grid[r][c] = int(value)
    return [
        progress.board_size,
        *(value for row in grid for value in row),
        int(progress.score),
        int(progress.game_over),
        int(progress.game_won),
        int(progress.show_win_dialog),
    ]


class Storage:
    """Reads and writes the preference and progress files in one directory."""

    def __init__(self, data_dir: str | os.PathLike | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.preferences_path = self.data_dir / PREFERENCES_FILE
        self.progress_path = self.data_dir / PROGRESS_FILE

    def load_preferences(self) -> Preferences:
        """Load preferences; a missing or damaged file is replaced by defaults."""
        try:
            data = self.preferences_path.read_bytes()
        except FileNotFoundError:
            prefs = Preferences()
            self.save_preferences(prefs)
            return prefs
        try:
            return _unpack_preferences(data)
        except ValueError:
            prefs = Preferences()
            self.save_preferences(prefs)
            return prefs

    def save_preferences(self, prefs: Preferences) -> None:
        self.preferences_path.write_bytes(_pack_preferences(prefs))

    def _read_slots(self) -> list[list[int]] | None:
        try:
            data = self.progress_path.read_bytes()
        except FileNotFoundError:
            return None
        if len(data) < _MULTI.size:
            return None
        values = _MULTI.unpack_from(data)
        if values[-1] != PROGRESS_VERSION:
            return None
        return [
            list(values[i * _SLOT_INTS:(i + 1) * _SLOT_INTS])
            for i in range(len(SUPPORTED_SIZES))
        ]

    def _slots_for_update(self) -> list[list[int]]:
        slots = self._read_slots()
        return slots if slots is not None else [_empty_slot() for _ in SUPPORTED_SIZES]

    def _write_slots(self, slots: list[list[int]]) -> None:
        flat = [value for slot in slots for value in slot]
        self.progress_path.write_bytes(_MULTI.pack(*flat, PROGRESS_VERSION))

    def load_progress(self, size_index: int) -> GameProgress | None:
        """The saved game for a size index, or None when there is none."""
        if not 0 <= size_index < len(SUPPORTED_SIZES):
            return None
        slots = self._read_slots()
        if slots is None:
            return None
        slot = slots[size_index]
        board_size = slot[0]
        if board_size != SUPPORTED_SIZES[size_index]:
            return None
        grid = slot[1:1 + MAX_BOARD_SIZE * MAX_BOARD_SIZE]
        score, over, won, dialog = slot[-4:]
        if not any(grid) and score <= 0:
            return None
        cells = [
            list(grid[r * MAX_BOARD_SIZE:r * MAX_BOARD_SIZE + board_size])
            for r in range(board_size)
        ]
        return GameProgress(board_size, cells, score, bool(over), bool(won), bool(dialog))

    def save_progress(self, progress: GameProgress) -> None:
        """Store a game in the slot of its board size; other sizes are ignored."""
        if progress.board_size not in SUPPORTED_SIZES:
            return
        slots = self._slots_for_update()
        slots[SUPPORTED_SIZES.index(progress.board_size)] = _pack_progress(progress)
        self._write_slots(slots)

    def delete_progress(self, board_size: int) -> None:
        """Clear the saved game for a board size."""
        slots = self._slots_for_update()
        if board_size in SUPPORTED_SIZES:
            slots[SUPPORTED_SIZES.index(board_size)] = _empty_slot(board_size)
        self._write_slots(slots)