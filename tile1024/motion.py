import enum
from dataclasses import dataclass

from tile1024.grid import Grid


class MotionKind(enum.Enum):
    STAYED = "stayed"
    MOVED = "moved"
    MERGED = "merged"
    SPAWNED = "spawned"


@dataclass(frozen=True)
class TileMotion:
    id: int
    value: int
    from_cell: tuple[int, int]
    to_cell: tuple[int, int]
    kind: MotionKind

    @property
    def animates(self) -> bool:
        """Whether a front end has to slide this tile to a new cell."""
        return self.from_cell != self.to_cell


def _positions(grid: Grid) -> dict[int, tuple[tuple[int, int], int]]:
    positions = {}
    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            if tile is not None:
                positions[tile.id] = ((r, c), tile.value)
    return positions


def tile_motions(old_grid: Grid, new_grid: Grid) -> list[TileMotion]:
    """
    Describe how every tile of `new_grid` got to its cell, matching tiles of the
    two grids by id. A spawned tile starts and ends on its own cell.
    """
    old = _positions(old_grid)
    motions = []
    for r, row in enumerate(new_grid):
        for c, tile in enumerate(row):
            if tile is None:
                continue
            if tile.id not in old:
                motions.append(TileMotion(tile.id, tile.value, (r, c), (r, c), MotionKind.SPAWNED))
                continue
            start, old_value = old[tile.id]
            if tile.value != old_value:
                kind = MotionKind.MERGED
            elif start != (r, c):
                kind = MotionKind.MOVED
            else:
                kind = MotionKind.STAYED
            motions.append(TileMotion(tile.id, tile.value, start, (r, c), kind))
    return motions


def consumed_ids(old_grid: Grid, new_grid: Grid) -> set[int]:
    """Ids present before the move that were merged away by it."""
    return set(_positions(old_grid)) - set(_positions(new_grid))
