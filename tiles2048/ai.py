"""Alpha-beta search that picks moves for the 2048 board."""

from __future__ import annotations

import math
import random
import sys
from dataclasses import dataclass
from typing import Iterable, TextIO

from .board import Board, Direction, choose_print

_NEIGHBOURS = ((1, 0), (0, 1), (-1, 0), (0, -1))
_SEARCH_DEPTHS = {4: 4, 5: 2, 6: 1, 8: 1}
_ROOT_ALPHA = -1_000_000.0
_ROOT_BETA = 1_000_000.0


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a search: the chosen move (None if none) and its score."""

    move: Direction | None
    score: float


def empty_count(board: Board) -> float:
    """Number of empty cells."""
    return float(sum(1 for row in board.cells for value in row if value == 0))


def max_tile(board: Board) -> float:
    """Largest tile on the board."""
    return float(board.max_tile())


def smoothness(board: Board) -> float:
    """Negative sum of log differences between each tile and its neighbours."""
    cells = board.cells
    n = board.size
    total = 0.0
    for r, row in enumerate(cells):
        for c, value in enumerate(row):
            if not value:
                continue
            here = math.log2(value + 1)
            for dr, dc in _NEIGHBOURS:
                rr, cc = r + dr, c + dc
                if 0 <= rr < n and 0 <= cc < n:
                    total -= abs(math.log2(cells[rr][cc] + 1) - here)
    return total


def _tile_log(value: int) -> float:
    return math.log2(value) if value else 0.0


def _line_trend(line: list[int]) -> tuple[float, float]:
    """Penalties for decreasing and increasing steps along a line."""
    decreasing = increasing = 0.0
    n = len(line)
    current, nxt = 0, 1
    while nxt < n:
        while nxt < n and line[nxt] == 0:
            nxt += 1
        if nxt >= n:
            nxt -= 1
        here, there = _tile_log(line[current]), _tile_log(line[nxt])
        if here > there:
            decreasing += there - here
        else:
            increasing += here - there
        current = nxt
        nxt += 1
    return decreasing, increasing


def _trend_score(lines: Iterable[Iterable[int]]) -> float:
    decreasing = increasing = 0.0
    for line in lines:
        d, i = _line_trend(list(line))
        decreasing += d
        increasing += i
    return max(decreasing, increasing)


def monotonicity(board: Board) -> float:
    """How steadily rows and columns rise or fall (0 is perfectly monotone)."""
    return _trend_score(board.cells) + _trend_score(zip(*board.cells))


def islands(board: Board) -> float:
    """Number of connected groups of equal non-zero tiles."""
    cells = board.cells
    n = board.size
    seen: set[tuple[int, int]] = set()
    count = 0
    for r, row in enumerate(cells):
        for c, value in enumerate(row):
            if not value or (r, c) in seen:
                continue
            count += 1
            stack = [(r, c)]
            while stack:
                x, y = stack.pop()
                if not (0 <= x < n and 0 <= y < n):
                    continue
                if (x, y) in seen or cells[x][y] != value:
                    continue
                seen.add((x, y))
                stack.extend((x + dx, y + dy) for dx, dy in _NEIGHBOURS)
    return float(count)


def evaluate(board: Board) -> float:
    """Weighted heuristic score of a position."""
    empty = empty_count(board)
    empty_weight = 2.7 + (math.log(17) - math.log(empty + 1)) * 0.1
    return (
        empty_weight * math.log(empty + 1)
        + 1.0 * max_tile(board)
        + 0.1 * smoothness(board)
        + 1.0 * monotonicity(board)
    )


def _placement_score(board: Board, row: int, col: int, value: int) -> float:
    trial = board.copy()
    trial.place(row, col, value)
    return -smoothness(trial) + islands(trial)


def search_best(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    player_turn: bool,
) -> SearchResult:
    """Minimax with alpha-beta pruning; the board itself is never changed."""
    if player_turn:
        best_score = alpha
        best: Direction | None = None
        for direction in Direction:
            child = board.copy()
            if not child.move(direction):
                continue
            if depth == 0:
                score = evaluate(child)
            else:
                score = search_best(child, depth - 1, best_score, beta, False).score
            if score > best_score:
                best_score = score
                best = direction
            if best_score > beta:
                return SearchResult(best, beta)
        return SearchResult(best, best_score)

    best_score = beta
    scored = [
        (row, col, value, _placement_score(board, row, col, value))
        for row, col in board.free_cells()
        for value in (2, 4)
    ]
    if scored:
        worst = max(score for *_, score in scored)
        for row, col, value, score in scored:
            if score != worst:
                continue
            child = board.copy()
            child.place(row, col, value)
            result = search_best(child, depth, alpha, best_score, True)
            best_score = min(best_score, result.score)
            if best_score < alpha:
                return SearchResult(None, alpha)
    return SearchResult(None, best_score)


def search_depth(size: int) -> int:
    """Search depth used for a board of the given size."""
    return _SEARCH_DEPTHS.get(size, 1)


def best_move(board: Board, rng: random.Random | None = None) -> Direction | None:
    """Pick the move to play, or None when no move changes the board."""
    source = rng or random
    depth = search_depth(board.size)
    result = search_best(board, depth, _ROOT_ALPHA, _ROOT_BETA, True)
    while depth > 0 and result.move is None:
        depth -= 1
        result = search_best(board, depth, _ROOT_ALPHA, _ROOT_BETA, True)
    move = result.move if result.move is not None else Direction(source.randrange(4))
    if board.can_move(move):
        return move
    return next((d for d in Direction if board.can_move(d)), None)


def move_report(board: Board) -> dict[Direction, bool]:
    """Whether each direction would change the board."""
    return {direction: board.can_move(direction) for direction in Direction}


def show_ai(
    board: Board,
    steps: int,
    each_steps: int = 1,
    test: int | None = None,
    choose: int = 3,
    rng: random.Random | None = None,
    file: TextIO | None = None,
) -> None:
    """Let the search play a number of moves, printing every each_steps-th."""
    out = file if file is not None else sys.stdout
    source = rng or random
    out.write("Initial board:\n")
    choose_print(board, choose, out)
    for step in range(steps):
        move = best_move(board, source)
        if test is not None and step >= test:
            for direction, movable in move_report(board).items():
                state = "movable" if movable else "blocked"
                out.write(f"Direction {int(direction)}: {state}\n")
        if move is None:
            out.write("No move possible, game over.\n")
            out.write(f"Final score: {board.score}\n")
            break
        board.move(move)
        board.add_random(source)
        if step % each_steps:
            continue
        out.write(f"Step {step + 1}, move: {move.name.lower()}\n")
        if step == steps - 1:
            out.write("Final board:\n")
            choose_print(board, choose, out)
            out.write(f"Final score: {board.score}\n")
        else:
            out.write("Board after move:\n")
            choose_print(board, choose, out)