import random

import numpy as np
import pytest

from tile1024 import grid as g
from tile1024.errors import GameError, InvalidState
from tile1024.tiles import Tile, TileIdAllocator


def random_grid(rng, n=4):
    allocator = TileIdAllocator()
    rows = [[rng.choice([0, 2, 4, 8]) for _ in range(n)] for _ in range(n)]
    return g.from_values(rows, allocator)


def test_create_empty():
    grid = g.create_empty(4)
    assert len(grid) == 4
    assert all(row == [None] * 4 for row in grid)
    assert len(g.empty_cells(grid)) == 16


def test_allocator_is_strictly_increasing():
    allocator = TileIdAllocator()
    assert [allocator.next() for _ in range(3)] == [1, 2, 3]
    assert allocator.peek() == 4
    assert allocator.create(2) == Tile(4, 2)


def test_empty_cells_row_major():
    grid = g.from_values([[2, 0], [0, 4]], TileIdAllocator())
    assert g.empty_cells(grid) == [(0, 1), (1, 0)]


def test_clone_copies_tiles_by_value():
    grid = g.from_values([[2, 0], [0, 4]], TileIdAllocator())
    copy = g.clone(grid)
    assert copy == grid
    assert copy[0][0] is not grid[0][0]
    grid[0][0].value = 8
    grid[1][0] = Tile(99, 2)
    assert copy[0][0] == Tile(1, 2)
    assert copy[1][0] is None


def test_values():
    grid = g.from_values([[2, 0], [0, 4]], TileIdAllocator())
    np.testing.assert_array_equal(g.values(grid), np.array([[2, 0], [0, 4]]))


def test_from_values_assigns_ids_row_major():
    grid = g.from_values([[0, 2], [4, 8]], TileIdAllocator())
    assert [t.id for row in grid for t in row if t] == [1, 2, 3]


def test_transpose():
    grid = g.from_values([[2, 4], [8, 0]], TileIdAllocator())
    np.testing.assert_array_equal(g.values(g.transpose(grid)), [[2, 8], [4, 0]])


def test_reverse_rows():
    grid = g.from_values([[2, 4], [8, 0]], TileIdAllocator())
    np.testing.assert_array_equal(g.values(g.reverse_rows(grid)), [[4, 2], [0, 8]])


def test_orientation_round_trip():
    rng = random.Random(3)
    for _ in range(50):
        grid = random_grid(rng)
        assert g.transpose(g.transpose(grid)) == grid
        assert g.reverse_rows(g.reverse_rows(grid)) == grid


def test_transforms_do_not_touch_input():
    grid = g.from_values([[2, 4], [8, 0]], TileIdAllocator())
    before = g.clone(grid)
    g.transpose(grid)
    g.reverse_rows(grid)
    assert grid == before


@pytest.mark.parametrize(
    "bad",
    [
        [],
        "board",
        [[None, None], [None]],
        [[None, None, None], [None, None, None]],
        [[None, 2], [None, None]],
        [[Tile(1, 0), None], [None, None]],
        [[Tile(1, 3.0), None], [None, None]],
        [[Tile(1, 2), Tile(1, 4)], [None, None]],
    ],
)
def test_validate_rejects_malformed_grids(bad):
    with pytest.raises(InvalidState):
        g.validate(bad)


def test_invalid_state_is_a_game_error():
    with pytest.raises(GameError):
        g.validate([[None], [None]])


def test_validate_returns_side():
    assert g.validate(g.create_empty(4)) == 4
