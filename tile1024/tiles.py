from dataclasses import dataclass


@dataclass
class Tile:
    """A numbered piece on the board. `id` is stable until the tile is merged away."""

    id: int
    value: int

    def copy(self) -> "Tile":
        return Tile(self.id, self.value)


class TileIdAllocator:
    """Hands out tile ids: 1, 2, 3, ... never reusing one."""

    def __init__(self, start: int = 1):
        self._next = start

    def next(self) -> int:
        tile_id = self._next
        self._next += 1
        return tile_id

    def peek(self) -> int:
        """The id the next call to `next` will return."""
        return self._next

    def create(self, value: int) -> Tile:
        return Tile(self.next(), value)
