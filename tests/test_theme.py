import random

import pytest

from tiles2048.theme import (
    AIMode,
    Color,
    Effect,
    Theme,
    board_background_color,
    empty_tile_color,
    random_colors,
    tile_color,
)


def test_classic_2048_color():
    assert tile_color(Theme.CLASSIC, 2048) == Color(237, 194, 46, 255)


def test_dark_largest_tile_color():
    assert tile_color(Theme.DARK, 16777216) == Color(255, 140, 255)


def test_non_power_of_two_uses_fallback():
    for theme in Theme:
        assert tile_color(theme, 3) == tile_color(theme, 2 ** 25)
        assert tile_color(theme, 3) != tile_color(theme, 2)


def test_tile_color_accepts_plain_ints():
    assert tile_color(2, 64) == tile_color(Theme.FOREST, 64)


def test_unknown_theme_rejected():
    with pytest.raises(ValueError):
        tile_color(9, 2)


@pytest.mark.parametrize("theme", list(Theme))
def test_empty_tile_color_matches_zero(theme):
    assert empty_tile_color(theme) == tile_color(theme, 0)


@pytest.mark.parametrize("theme", list(Theme))
def test_tile_colors_are_opaque(theme):
    for power in range(25):
        value = 0 if power == 0 else 2 ** power
        assert tile_color(theme, value).a == 255


def test_board_background():
    assert board_background_color(Theme.CLASSIC) == Color(0, 0, 255, 32)
    assert board_background_color(Theme.DARK).a == 200


def test_with_alpha():
    color = Color(1, 2, 3)
    assert color.with_alpha(10) == Color(1, 2, 3, 10)
    assert color.with_alpha(400).a == 255
    assert color.with_alpha(-5).a == 0


def test_labels():
    assert [Theme(i).label for i in range(4)] == ["Classic", "Dark", "Forest", "Warm"]
    assert [Effect(i).label for i in range(5)] == [
        "Flash",
        "Particle",
        "Ripple",
        "Scale",
        "Rings",
    ]
    assert AIMode(4).label == "No Limit"
    assert AIMode(0).label == "Off"


def test_random_colors_shape_and_background_alpha():
    tiles, background = random_colors(5, random.Random(4))
    assert len(tiles) == 5
    assert all(len(row) == 5 for row in tiles)
    assert background.a == 200
    assert all(0 <= ch <= 255 for row in tiles for color in row for ch in color)


def test_random_colors_reproducible():
    first_tiles, first_background = random_colors(4, random.Random(11))
    second_tiles, second_background = random_colors(4, random.Random(11))
    assert first_tiles == second_tiles
    assert first_background == second_background
    assert any(color != first_tiles[0][0] for row in first_tiles for color in row)