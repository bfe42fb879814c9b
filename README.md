# tiles2048

The 2048 sliding-tile puzzle in a desktop window, built on pygame. Slide the
tiles, merge equal numbers, and try to reach 2048. Bigger boards are
supported too.

## Features

- Four board sizes: 4x4, 5x5, 6x6 and 8x8. Each size keeps its own best score
  and its own saved game.
- Four colour themes: Classic, Dark, Forest and Warm. Each theme has an
  animated gradient background with drifting particles.
- Five merge effects: Flash, Particle, Ripple, Scale and Rings.
- A "Random Color" mode that paints the tiles in random colours.
- An auto-player with four speeds: Slow, Middle, Fast and No Limit. It runs a
  minimax search with alpha-beta pruning. The search rates a board by its
  empty cells, its largest tile, smoothness and monotonicity. The
  auto-player's moves take effect at once and are not animated.
- Automatic saving. Preferences and the game on each board size are stored in
  two small binary files (`2048_best.dat` and `game_save.dat`). On Windows
  they go in `%APPDATA%\My2048`. Elsewhere they go in `~/.config/my2048`.

## Installing

```
pip install .
```

To install with the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
tiles2048
```

Options:

- `--data-dir DIR` stores the scores and saved games in `DIR` instead of the
  default directory.
- `--seed N` seeds the random number generator, so tile placement can be
  repeated.

In the game:

- In the menu, click a board size. If a game was saved for that size, you are
  asked whether to continue it. The **Exit** button closes the window.
- Move the tiles with the arrow keys, with W/A/S/D, or with keypad 5/2/1/3
  for up, down, left and right. These keys do nothing while the auto-player
  is running.
- The buttons on the right switch the theme, the merge effect, the
  auto-player speed ("Auto: Off" stops it) and random colours.
- **Reset** starts a new game. **Menu** saves your game and goes back to the
  menu.
- **Esc** saves a game in progress and closes the window.
- When you reach 2048, press C to keep playing or R to restart. When no move
  is left, press R to restart.
- If a file named `test.ico` is in the current directory, it is used as the
  window icon.

## Using the library

The game rules and the auto-player do not depend on the window:

```python
import random
from tiles2048.board import Board
from tiles2048.ai import best_move

rng = random.Random(1)
board = Board.new(4, rng)
while not board.is_over():
    direction = best_move(board, rng)
    board.move(direction, True)
    board.add_random(rng)
print(board.score, board.max_tile())
```

- `tiles2048.board` holds `Board`, `Direction`, `slide_row` and the text
  renderings `format_board` and `choose_print`.
- `tiles2048.ai` holds the heuristics (`empty_count`, `max_tile`,
  `smoothness`, `monotonicity`, `islands`, `evaluate`), the search
  (`search_best`, `search_depth`, `best_move`) and `show_ai`. `show_ai` lets
  the auto-player play a number of steps and prints the board as text as it
  goes.
- `tiles2048.game.Game` holds the whole session state: the menus, moves,
  animations, autoplay and saving. It does no drawing.
- `tiles2048.storage.Storage` reads and writes the preference and progress
  files.