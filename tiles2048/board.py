"""Board state and move rules for the sliding-tile 2048 game."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Protocol, TextIO

MAX_BOARD_SIZE = 8
WINNING_TILE = 2048
_FASTEST_SIZES = frozenset({4, 5, 6, 8})


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...

    def choice(self, seq): ...


class Direction(IntEnum):
    """Move directions, numbered as the search and the UI expect."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


def slide_row(row: Iterable[int]) -> tuple[list[int], int]:
    """Slide a row to the left, merging equal neighbours once.

    Returns the new row and the score gained by the merges.
    """
    values = list(row)
    tiles = [v for v in values if v]
    merged: list[int] = []
    gained = 0
    pending: int | None = None
    for tile in tiles:
        if pending is not None and pending == tile:
            merged.append(pending * 2)
            gained += pending * 2
            pending = None
        else:
            if pending is not None:
                merged.append(pending)
            pending = tile
    if pending is not None:
        merged.append(pending)
    merged.extend([0] * (len(values) - len(merged)))
    return merged, gained


def rotate_clockwise(cells: list[list[int]]) -> list[list[int]]:
    """Return the grid turned 90 degrees clockwise."""
    return [list(row) for row in zip(*reversed(cells))]


def rotate_counterclockwise(cells: list[list[int]]) -> list[list[int]]:
    """Return the grid turned 90 degrees counter-clockwise."""
    return [list(row) for row in reversed(list(zip(*cells)))]


def _mirror(cells: list[list[int]]) -> list[list[int]]:
    return [list(reversed(row)) for row in cells]


# Each direction maps to (to_left, from_left): grid transforms that turn the
# move into a left slide and back again.
_TRANSFORMS = {
    Direction.LEFT: (lambda c: [list(r) for r in c], lambda c: c),
    Direction.RIGHT: (_mirror, _mirror),
    Direction.UP: (rotate_counterclockwise, rotate_clockwise),
    Direction.DOWN: (rotate_clockwise, rotate_counterclockwise),
}


def _check_size(size: int) -> None:
    if not 1 <= size <= MAX_BOARD_SIZE:
        raise ValueError(f"board size must be between 1 and {MAX_BOARD_SIZE}, got {size}")


@dataclass
class Board:
    """A square grid of tiles (0 is empty) and the score earned so far."""

    cells: list[list[int]]
    score: int = 0
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.size = len(self.cells)
        _check_size(self.size)
        if any(len(row) != self.size for row in self.cells):
            raise ValueError("board must be square")
        self.cells = [list(row) for row in self.cells]

    @classmethod
    def new(cls, size: int, rng: _RandomSource | None = None) -> "Board":
        """Start a game: an empty board with one 2 and one random tile."""
        _check_size(size)
        board = cls([[0] * size for _ in range(size)])
        board.add_value(2, rng)
        board.add_random(rng)
        return board

    @classmethod
    def from_flat(cls, size: int, values: Iterable[int], score: int = 0) -> "Board":
        """Build a board from row-major values."""
        _check_size(size)
        flat = list(values)
        if len(flat) != size * size:
            raise ValueError(f"expected {size * size} values, got {len(flat)}")
        return cls([flat[r * size:(r + 1) * size] for r in range(size)], score)

    def copy(self) -> "Board":
        return Board([list(row) for row in self.cells], self.score)

    def free_cells(self) -> list[tuple[int, int]]:
        """Coordinates of the empty cells in row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, value in enumerate(row)
            if value == 0
        ]

    def add_value(self, value: int, rng: _RandomSource | None = None) -> bool:
        """Put a value on a random empty cell; False when the board is full."""
        free = self.free_cells()
        if not free:
            return False
        r, c = (rng or random).choice(free)
        self.cells[r][c] = value
        return True

    def add_random(self, rng: _RandomSource | None = None) -> bool:
        """Add a 2 (nine times in ten) or a 4 on a random empty cell."""
        source = rng or random
        value = 2 if source.randrange(10) < 9 else 4
        return self.add_value(value, source)

    def place(self, row: int, col: int, value: int) -> bool:
        """Put a value at a cell if it is empty; True when placed."""
        if self.cells[row][col] == 0:
            self.cells[row][col] = value
            return True
        return False

    def clear(self, row: int, col: int) -> None:
        self.cells[row][col] = 0

    def move(self, direction: int, apply: bool = True) -> bool:
        """Slide the tiles; True when the board would change.

        With apply false the board and score stay untouched. Unknown
        directions never change anything.
        """
        try:
            to_left, from_left = _TRANSFORMS[Direction(direction)]
        except ValueError:
            return False
        gained = 0
        slid = []
        for row in to_left(self.cells):
            new_row, score = slide_row(row)
            slid.append(new_row)
            gained += score
        result = from_left(slid)
        changed = result != self.cells
        if apply:
            self.cells = [list(row) for row in result]
            self.score += gained
        return changed

    def can_move(self, direction: int) -> bool:
        return self.move(direction, apply=False)

    def is_won(self) -> bool:
        return any(value == WINNING_TILE for row in self.cells for value in row)

    def is_over(self) -> bool:
        """True when the board is full and no neighbours are equal."""
        if any(value == 0 for row in self.cells for value in row):
            return False
        for row in self.cells:
            if any(a == b for a, b in zip(row, row[1:])):
                return False
        for col in zip(*self.cells):
            if any(a == b for a, b in zip(col, col[1:])):
                return False
        return True

    def max_tile(self) -> int:
        return max(value for row in self.cells for value in row)


def format_board(board: Board, show_zeros: bool = False) -> str:
    """Render the board as tab-separated text boxes."""
    n = board.size
    rule = " " + "------- " * n + "\n"
    padding = "|" + "  \t|" * n + "\n"
    parts = [rule]
    for row in board.cells:
        cells = "".join(
            f"{value}\t|" if value or show_zeros else "  \t|" for value in row
        )
        parts.extend([padding, "|" + cells + "\n", padding, rule])
    return "".join(parts)


def choose_print(board: Board, choose: int = 3, file: TextIO | None = None) -> None:
    """Print the board in the selected style.

    Choice 1 falls through to the later styles, as 2 does: 1 prints three
    renderings, 2 prints two, anything else prints one. The zero-showing
    style only supports sizes 4, 5, 6 and 8 and prints nothing otherwise.
    """
    out = file if file is not None else sys.stdout
    renderings = []
    if choose == 1:
        renderings.append(format_board(board))
    if choose in (1, 2):
        renderings.append(format_board(board))
    if board.size in _FASTEST_SIZES:
        renderings.append(format_board(board, show_zeros=True))
    out.write("".join(renderings))