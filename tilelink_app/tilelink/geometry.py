from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

Cell = Tuple[int, int]
Direction = Tuple[int, int]

UP: Direction = (0, 1)
DOWN: Direction = (0, -1)
RIGHT: Direction = (1, 0)
LEFT: Direction = (-1, 0)

DIRECTIONS: Tuple[Direction, ...] = (UP, DOWN, RIGHT, LEFT)

_DIRECTION_NAMES: Dict[Direction, str] = {
    UP: "up",
    DOWN: "down",
    RIGHT: "right",
    LEFT: "left",
}

SPECIAL_ELEMENT_ID = -1


@dataclass(frozen=True)
class Tile:
    element_id: int
    special: bool = False


@dataclass(frozen=True)
class Board:
    """Initial layout of a board. Cells missing from ``tiles`` start empty."""
    width: int
    height: int
    tiles: Dict[Cell, Tile]


@dataclass(frozen=True)
class OccupancySnapshot:
    width: int
    height: int
    blocked: Tuple[Tuple[bool, ...], ...]   # blocked[x][y]

    def is_blocked(self, cell: Cell) -> bool:
        return is_blocked_cell(self.blocked, cell, self.width, self.height)


def is_valid_position(cell: Cell, width: int, height: int) -> bool:
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def is_blocked_cell(grid: Sequence[Sequence[bool]], cell: Cell, width: int, height: int) -> bool:
    """Look up ``grid[x][y]``; cells outside the grid never block."""
    if not is_valid_position(cell, width, height):
        return False
    x, y = cell
    return bool(grid[x][y])


def step(cell: Cell, direction: Direction) -> Cell:
    return (cell[0] + direction[0], cell[1] + direction[1])


def direction_name(direction: Direction) -> str:
    return _DIRECTION_NAMES.get(tuple(direction), "unknown")


def parse_direction(name: str) -> Optional[Direction]:
    key = str(name).strip().lower()
    for direction, dir_name in _DIRECTION_NAMES.items():
        if dir_name == key:
            return direction
    return None


def build_snapshot(width: int, height: int, occupied: Iterable[Cell]) -> OccupancySnapshot:
    """
    Columns-first boolean arena: ``blocked[x][y]`` is True for every occupied
    cell. Occupied cells outside the grid are dropped.
    """
    columns = [[False] * max(height, 0) for _ in range(max(width, 0))]
    for cell in occupied:
        if is_valid_position(cell, width, height):
            x, y = cell
            columns[x][y] = True
    return OccupancySnapshot(
        width=width,
        height=height,
        blocked=tuple(tuple(col) for col in columns),
    )
