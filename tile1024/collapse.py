import logging

from tile1024.tiles import Tile

logger = logging.getLogger(__name__)


def collapse_left(row: list[Tile | None]) -> tuple[list[Tile | None], bool]:
    """
    Slide one row to the left and merge equal neighbours.

    Merging is a single left-to-right pass: the left tile of an equal pair
    survives with its id and the summed value, the right one is dropped, and
    the scan continues after the pair so a merged tile cannot merge again in
    the same move. Tiles of `row` are not mutated; a merged tile is a new Tile.

    Returns the new row (same length, padded with None) and whether anything
    differs from `row`.
    """
    size = len(row)
    filtered: list[Tile | None] = [tile for tile in row if tile is not None]
    # a gap in front of a tile means the row slides
    changed = row[: len(filtered)] != filtered

    i = 0
    while i < len(filtered) - 1:
        curr, nxt = filtered[i], filtered[i + 1]
        if curr.value == nxt.value:
            logger.debug("merging tile id %d into id %d", nxt.id, curr.id)
            filtered[i] = Tile(curr.id, curr.value + nxt.value)
            filtered[i + 1] = None
            changed = True
            i += 2
        else:
            i += 1

    merged = [tile for tile in filtered if tile is not None]
    merged += [None] * (size - len(merged))

    changed = changed or merged != row
    return merged, changed
