import enum
import logging
import random
from dataclasses import dataclass

import numpy as np

from tile1024 import grid as g
from tile1024.collapse import collapse_left
from tile1024.errors import InvalidArgument
from tile1024.grid import BOARD_SIZE, Grid
from tile1024.tiles import TileIdAllocator

logger = logging.getLogger(__name__)

WIN_VALUE = 1024


class Direction(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, direction: "Direction | str") -> "Direction":
        if isinstance(direction, cls):
            return direction
        if isinstance(direction, str):
            try:
                return cls(direction.strip().lower())
            except ValueError:
                pass
        raise InvalidArgument(
            f"invalid direction {direction!r}: expected one of left, right, up, down"
        )


# (transpose, reverse) applied before collapsing; undone in reverse order after
_ORIENTATION = {
    Direction.LEFT: (False, False),
    Direction.RIGHT: (False, True),
    Direction.UP: (True, False),
    Direction.DOWN: (True, True),
}


class Outcome(enum.Enum):
    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"


@dataclass
class GameConfig:
    win_value: int = WIN_VALUE
    four_probability: float = 0.1
    seed: int | None = None

    def __post_init__(self):
        if self.win_value <= 0:
            raise InvalidArgument(f"win_value must be positive, got {self.win_value}")
        if not 0.0 <= self.four_probability <= 1.0:
            raise InvalidArgument(
                f"four_probability must be within [0, 1], got {self.four_probability}"
            )


@dataclass
class MoveResult:
    old_grid: Grid
    new_grid: Grid
    changed: bool


def spawn_tile(
    grid: Grid,
    allocator: TileIdAllocator,
    rng: random.Random,
    four_probability: float = 0.1,
) -> tuple[int, int] | None:
    """
    Place a new tile (2, or 4 with `four_probability`) on a uniformly chosen
    empty cell. Returns the cell, or None when the grid is full.
    """
    places = g.empty_cells(grid)
    if len(places) == 0:
        logger.debug("spawn: no empty cells")
        return None
    x, y = rng.choice(places)
    value = 4 if rng.random() < four_probability else 2
    grid[x][y] = allocator.create(value)
    logger.debug("spawn: tile id %d value %d at (%d, %d)", grid[x][y].id, value, x, y)
    return x, y


def move_board(
    grid: Grid,
    direction: Direction | str,
    allocator: TileIdAllocator,
    rng: random.Random,
    four_probability: float = 0.1,
) -> bool:
    """
    Play one move on `grid` in place. Returns whether any tile moved or merged;
    only then is a new tile spawned. A move that changes nothing leaves the
    grid and the allocator untouched.
    """
    direction = Direction.parse(direction)
    g.validate(grid)
    transposed, reversed_ = _ORIENTATION[direction]

    work = grid
    if transposed:
        work = g.transpose(work)
    if reversed_:
        work = g.reverse_rows(work)

    moved = False
    collapsed = []
    for row in work:
        new_row, changed = collapse_left(row)
        collapsed.append(new_row)
        moved = moved or changed

    if not moved:
        logger.debug("move %s: nothing moved", direction.value)
        return False

    if reversed_:
        collapsed = g.reverse_rows(collapsed)
    if transposed:
        collapsed = g.transpose(collapsed)
    grid[:] = collapsed

    logger.debug("move %s: board changed", direction.value)
    spawn_tile(grid, allocator, rng, four_probability)
    return True


def moves_left(grid: Grid) -> bool:
    """True if there is an empty cell or two equal neighbours in a row or column."""
    n = g.validate(grid)
    if g.empty_cells(grid):
        return True
    for i in range(n):
        for j in range(n - 1):
            if grid[i][j].value == grid[i][j + 1].value:
                return True
            if grid[j][i].value == grid[j + 1][i].value:
                return True
    return False


def evaluate(grid: Grid, win_value: int = WIN_VALUE) -> Outcome:
    g.validate(grid)
    if any(tile is not None and tile.value >= win_value for row in grid for tile in row):
        outcome = Outcome.WON
    elif not moves_left(grid):
        outcome = Outcome.LOST
    else:
        outcome = Outcome.CONTINUE
    logger.debug("evaluate: %s", outcome.value)
    return outcome


class GameSession:
    """One game: the board, its tile id allocator and its random source"""

    grid: Grid

    def __init__(self, config: GameConfig | None = None):
        self._setup(config)
        self.init_game()

    def _setup(self, config: GameConfig | None):
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.seed)
        self.allocator = TileIdAllocator()

    @classmethod
    def from_values(cls, rows, config: GameConfig | None = None) -> "GameSession":
        """A session whose board is `rows` (0 = empty) instead of two random tiles."""
        session = cls.__new__(cls)
        session._setup(config)
        session.grid = g.from_values(rows, session.allocator)
        return session

    def init_game(self) -> Grid:
        """Start over with an empty board and two spawned tiles. Ids restart at 1."""
        logger.debug("init_game: starting new game")
        self.allocator = TileIdAllocator()
        self.grid = g.create_empty(BOARD_SIZE)
        self._place()
        self._place()
        return self.grid

    def _place(self):
        spawn_tile(self.grid, self.allocator, self.rng, self.config.four_probability)

    def apply_move(self, direction: Direction | str) -> MoveResult:
        """
        Play a move. `old_grid` is a snapshot taken before the move, so the
        caller can match tile ids between the two grids.
        """
        old_grid = g.clone(self.grid)
        changed = move_board(
            self.grid,
            direction,
            self.allocator,
            self.rng,
            self.config.four_probability,
        )
        return MoveResult(old_grid, self.grid, changed)

    move = apply_move

    def query_outcome(self, grid: Grid | None = None) -> Outcome:
        return evaluate(self.grid if grid is None else grid, self.config.win_value)

    def clone(self) -> "GameSession":
        s = GameSession.__new__(GameSession)
        s.config = self.config
        s.rng = random.Random()
        s.rng.setstate(self.rng.getstate())
        s.allocator = TileIdAllocator(self.allocator.peek())
        s.grid = g.clone(self.grid)
        return s

    def valid(self, direction: Direction | str) -> bool:
        return self.clone().move(direction).changed

    def alive(self) -> bool:
        return moves_left(self.grid)

    def values(self) -> np.ndarray:
        return g.values(self.grid)

    def display(self) -> str:
        width = max(4, len(str(self.values().max())))
        lines = []
        for row in self.grid:
            lines.append(
                " ".join(
                    f"{'.' if tile is None else tile.value:>{width}}" for tile in row
                )
            )
        return "\n".join(lines)
