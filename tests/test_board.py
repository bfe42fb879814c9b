import io
import random

import pytest

from tiles2048.board import (
    Board,
    Direction,
    choose_print,
    format_board,
    rotate_clockwise,
    rotate_counterclockwise,
    slide_row,
)


def _grid(size, seed):
    rng = random.Random(seed)
    return [[rng.choice([0, 0, 2, 4, 8]) for _ in range(size)] for _ in range(size)]


def test_slide_row_merges_pairs():
    assert slide_row([2, 2, 2, 2]) == ([4, 4, 0, 0], 8)


def test_slide_row_no_chain_merge():
    assert slide_row([2, 2, 4, 0]) == ([4, 4, 0, 0], 4)


@pytest.mark.parametrize("seed", range(20))
def test_slide_row_preserves_sum_and_length(seed):
    row = _grid(6, seed)[0]
    new_row, _ = slide_row(row)
    assert sum(new_row) == sum(row)
    assert len(new_row) == len(row)


def test_slide_row_already_packed_unchanged():
    row = [2, 4, 8, 16]
    assert slide_row(row) == (row, 0)


@pytest.mark.parametrize("size", [1, 4, 5, 6, 8])
def test_rotations_are_inverse(size):
    cells = _grid(size, size)
    assert rotate_counterclockwise(rotate_clockwise(cells)) == cells
    four = cells
    for _ in range(4):
        four = rotate_clockwise(four)
    assert four == cells


def test_rotate_clockwise_moves_top_left_to_top_right():
    cells = [[1, 0], [0, 0]]
    assert rotate_clockwise(cells)[0][1] == 1


def test_from_flat_round_trip():
    values = list(range(16))
    board = Board.from_flat(4, values, score=7)
    assert [v for row in board.cells for v in row] == values
    assert board.score == 7
    assert board.size == 4


def test_from_flat_wrong_length():
    with pytest.raises(ValueError):
        Board.from_flat(4, [0] * 15)


def test_size_limit():
    with pytest.raises(ValueError):
        Board.from_flat(9, [0] * 81)


def test_new_board_has_two_tiles():
    board = Board.new(4, random.Random(1))
    tiles = [v for row in board.cells for v in row if v]
    assert len(tiles) == 2
    assert 2 in tiles
    assert set(tiles) <= {2, 4}
    assert board.score == 0


def test_free_cells_and_place_clear():
    board = Board.from_flat(4, [0] * 16)
    assert len(board.free_cells()) == 16
    assert board.place(1, 2, 8) is True
    assert board.place(1, 2, 4) is False
    assert board.cells[1][2] == 8
    assert (1, 2) not in board.free_cells()
    board.clear(1, 2)
    assert (1, 2) in board.free_cells()


def test_add_value_on_full_board_fails():
    board = Board.from_flat(2, [2, 4, 8, 16])
    assert board.add_value(2) is False
    assert board.add_random(random.Random(0)) is False


def test_add_random_values():
    rng = random.Random(3)
    board = Board.from_flat(8, [0] * 64)
    for _ in range(64):
        assert board.add_random(rng) is True
    assert {v for row in board.cells for v in row} <= {2, 4}
    assert board.free_cells() == []


def test_copy_is_independent():
    board = Board.from_flat(4, [2] + [0] * 15, score=3)
    clone = board.copy()
    clone.place(3, 3, 4)
    assert board.cells[3][3] == 0
    assert clone.score == board.score


@pytest.mark.parametrize("seed", range(10))
def test_right_is_mirrored_left(seed):
    cells = _grid(5, seed)
    board = Board(cells)
    mirrored = Board([list(reversed(r)) for r in cells])
    board.move(Direction.RIGHT)
    mirrored.move(Direction.LEFT)
    assert board.cells == [list(reversed(r)) for r in mirrored.cells]
    assert board.score == mirrored.score


@pytest.mark.parametrize("seed", range(10))
def test_up_is_transposed_left(seed):
    cells = _grid(6, seed)
    board = Board(cells)
    transposed = Board([list(c) for c in zip(*cells)])
    board.move(Direction.UP)
    transposed.move(Direction.LEFT)
    assert board.cells == [list(c) for c in zip(*transposed.cells)]
    assert board.score == transposed.score


@pytest.mark.parametrize("seed", range(10))
def test_down_is_transposed_right(seed):
    cells = _grid(4, seed)
    board = Board(cells)
    transposed = Board([list(c) for c in zip(*cells)])
    board.move(Direction.DOWN)
    transposed.move(Direction.RIGHT)
    assert board.cells == [list(c) for c in zip(*transposed.cells)]


@pytest.mark.parametrize("direction", list(Direction))
def test_move_without_apply_leaves_board(direction):
    cells = _grid(4, 11)
    board = Board(cells, score=5)
    board.can_move(direction)
    assert board.cells == cells
    assert board.score == 5


@pytest.mark.parametrize("direction", list(Direction))
def test_move_preserves_sum(direction):
    cells = _grid(8, 4)
    board = Board(cells)
    board.move(direction)
    assert sum(map(sum, board.cells)) == sum(map(sum, cells))


def test_move_reports_no_change():
    board = Board.from_flat(4, [2, 4, 8, 16] + [0] * 12)
    assert board.move(Direction.LEFT) is False
    assert board.move(Direction.UP) is False
    assert board.can_move(Direction.DOWN) is True


def test_unknown_direction():
    board = Board.from_flat(4, [2, 2] + [0] * 14)
    assert board.move(7) is False


def test_is_won_and_max_tile():
    board = Board.from_flat(4, [2048] + [0] * 15)
    assert board.is_won() is True
    assert board.max_tile() == 2048
    assert Board.from_flat(4, [1024] + [0] * 15).is_won() is False


def test_is_over():
    checker = [2 if (r + c) % 2 else 4 for r in range(4) for c in range(4)]
    board = Board.from_flat(4, checker)
    assert board.is_over() is True
    assert not any(board.can_move(d) for d in Direction)
    checker[0] = 0
    assert Board.from_flat(4, checker).is_over() is False
    checker[0] = checker[1]
    assert Board.from_flat(4, checker).is_over() is False


def test_format_board_zero_handling():
    board = Board.from_flat(4, [2048] + [0] * 15)
    plain = format_board(board)
    shown = format_board(board, show_zeros=True)
    assert "2048\t|" in plain
    assert "0\t|" not in plain.replace("2048\t|", "")
    assert shown.count("0\t|") == 15
    assert plain.count("\n") == 1 + 4 * board.size
    assert plain.startswith(" ------- ")


def test_choose_print_fall_through():
    board = Board.from_flat(4, [2] + [0] * 15)
    single = format_board(board, show_zeros=True)
    out = io.StringIO()
    choose_print(board, 3, out)
    assert out.getvalue() == single
    out = io.StringIO()
    choose_print(board, 1, out)
    assert out.getvalue() == format_board(board) * 2 + single


def test_choose_print_unsupported_size_fastest():
    board = Board.from_flat(3, [2] + [0] * 8)
    out = io.StringIO()
    choose_print(board, 3, out)
    assert out.getvalue() == ""
    out = io.StringIO()
    choose_print(board, 2, out)
    assert out.getvalue() == format_board(board)