from __future__ import annotations

import logging
import random
from typing import List, Optional

from .geometry import Board, Cell, Tile, SPECIAL_ELEMENT_ID

logger = logging.getLogger(__name__)


def special_tile_count(width: int, height: int, chance: float) -> int:
    """
    Number of special tiles on a full board: ``round(cells * chance)``, at least
    one, bumped by one when that leaves an odd number of cells for pairs.
    """
    cells = width * height
    if cells <= 0:
        return 0
    count = max(1, int(round(cells * chance)))
    count = min(count, cells)
    if (cells - count) % 2 == 1:
        count = count + 1 if count < cells else count - 1
    return count


def generate_board(
    width: int,
    height: int,
    special_chance: float = 0.1,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Fill every cell of a ``width`` x ``height`` board.

    Normal element ids ``0 .. pairs-1`` each appear exactly twice; the special
    tiles and pairs are shuffled together so the same seeded ``rng`` always
    produces the same board.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Board size cannot be negative, got {width}x{height}")
    if not 0.0 <= special_chance <= 1.0:
        raise ValueError(f"special_chance must be within [0, 1], got {special_chance}")
    if rng is None:
        rng = random.Random()

    specials = special_tile_count(width, height, special_chance)
    pairs = (width * height - specials) // 2

    tiles: List[Tile] = [Tile(element_id=SPECIAL_ELEMENT_ID, special=True) for _ in range(specials)]
    for element_id in range(pairs):
        tiles.append(Tile(element_id=element_id))
        tiles.append(Tile(element_id=element_id))
    rng.shuffle(tiles)

    cells: List[Cell] = [(x, y) for y in range(height) for x in range(width)]
    layout = dict(zip(cells, tiles))

    logger.debug(f"Generated {width}x{height} board: {pairs} pairs, {specials} special tiles")
    return Board(width=width, height=height, tiles=layout)
