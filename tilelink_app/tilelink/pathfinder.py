"""
Connectivity check for linking two tiles.

Two cells connect when an orthogonal path with at most two turns (three
straight segments) joins them and every cell the path crosses is empty. The
endpoints themselves are never tested: they are the tiles being matched.

``grid`` is indexed ``grid[x][y]`` and True means blocked. Cells outside
``[0, width) x [0, height)`` are never read and never block a segment.
"""
from __future__ import annotations

from typing import List, Sequence

from .geometry import Cell, DIRECTIONS, is_blocked_cell, is_valid_position, step

Grid = Sequence[Sequence[bool]]


def can_connect(start: Cell, end: Cell, grid: Grid, width: int, height: int) -> bool:
    """
    Return True if ``start`` and ``end`` can be linked with at most two turns.

    Strategies run cheapest first and the first success wins:
    straight line, one turn (L), two turns (Z).
    """
    start = tuple(start)
    end = tuple(end)
    if start == end:
        return False
    # An empty grid has no valid cell, so nothing can connect.
    if width <= 0 or height <= 0:
        return False

    if _straight_line(start, end, grid, width, height):
        return True
    if _one_turn(start, end, grid, width, height):
        return True
    if _two_turns(start, end, grid, width, height):
        return True
    return False


def _straight_line(start: Cell, end: Cell, grid: Grid, width: int, height: int) -> bool:
    sx, sy = start
    ex, ey = end

    if sy == ey:
        for x in range(min(sx, ex) + 1, max(sx, ex)):
            if is_blocked_cell(grid, (x, sy), width, height):
                return False
        return True

    if sx == ex:
        for y in range(min(sy, ey) + 1, max(sy, ey)):
            if is_blocked_cell(grid, (sx, y), width, height):
                return False
        return True

    return False


def _one_turn(start: Cell, end: Cell, grid: Grid, width: int, height: int) -> bool:
    for corner in ((start[0], end[1]), (end[0], start[1])):
        # A turn needs an empty cell inside the board.
        if not is_valid_position(corner, width, height) or is_blocked_cell(grid, corner, width, height):
            continue
        if (_straight_line(start, corner, grid, width, height)
                and _straight_line(corner, end, grid, width, height)):
            return True
    return False


def _reachable_points(start: Cell, grid: Grid, width: int, height: int) -> List[Cell]:
    """Cells visible from ``start`` along the four axes, up to the first obstacle or edge."""
    points: List[Cell] = []
    for direction in DIRECTIONS:
        current = step(start, direction)
        while is_valid_position(current, width, height):
            if is_blocked_cell(grid, current, width, height):
                break
            points.append(current)
            current = step(current, direction)
    return points


def _two_turns(start: Cell, end: Cell, grid: Grid, width: int, height: int) -> bool:
    # start -> point is already clear, so one more turn from point finishes the path.
    for point in _reachable_points(start, grid, width, height):
        if _one_turn(point, end, grid, width, height):
            return True
    return False
