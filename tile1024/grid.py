import logging

import numpy as np

from tile1024.errors import InvalidState
from tile1024.tiles import Tile, TileIdAllocator

logger = logging.getLogger(__name__)

BOARD_SIZE = 4

Grid = list[list[Tile | None]]


def create_empty(n: int = BOARD_SIZE) -> Grid:
    return [[None] * n for _ in range(n)]


def empty_cells(grid: Grid) -> list[tuple[int, int]]:
    """Coordinates of all empty cells, row-major."""
    places = []
    for i, row in enumerate(grid):
        for j, tile in enumerate(row):
            if tile is None:
                places.append((i, j))
    return places


def clone(grid: Grid) -> Grid:
    """
    Deep copy of a grid. Tiles are copied by value (same id and value), so
    later merges on `grid` never show up in the copy.
    """
    return [[None if tile is None else tile.copy() for tile in row] for row in grid]


def validate(grid: Grid) -> int:
    """
    Check that `grid` is a well-formed square board and return its side length.

    Raises InvalidState for ragged or non-square rows, foreign cell contents,
    non-positive values or duplicate tile ids.
    """
    if not isinstance(grid, list) or len(grid) == 0:
        raise InvalidState("grid must be a non-empty list of rows")
    n = len(grid)
    seen: set[int] = set()
    for i, row in enumerate(grid):
        if not isinstance(row, list) or len(row) != n:
            raise InvalidState(f"row {i} does not have length {n}: grid is not square")
        for j, tile in enumerate(row):
            if tile is None:
                continue
            if not isinstance(tile, Tile):
                raise InvalidState(f"cell ({i}, {j}) holds {tile!r}, not a Tile")
            if isinstance(tile.value, bool) or not isinstance(tile.value, int) or tile.value <= 0:
                raise InvalidState(f"cell ({i}, {j}) has invalid value {tile.value!r}")
            if tile.id in seen:
                raise InvalidState(f"tile id {tile.id} appears more than once")
            seen.add(tile.id)
    return n


def values(grid: Grid) -> np.ndarray:
    """Tile values as an integer matrix, 0 for empty cells."""
    return np.array(
        [[0 if tile is None else tile.value for tile in row] for row in grid],
        dtype=np.int64,
    )


def from_values(rows, allocator: TileIdAllocator) -> Grid:
    """Build a grid from a value matrix (0 = empty), allocating ids row-major."""
    grid: Grid = [
        [None if int(v) == 0 else allocator.create(int(v)) for v in row] for row in rows
    ]
    validate(grid)
    return grid


def transpose(grid: Grid) -> Grid:
    logger.debug("transpose")
    return [list(col) for col in zip(*grid)]


def reverse_rows(grid: Grid) -> Grid:
    logger.debug("reverse_rows")
    return [row[::-1] for row in grid]
