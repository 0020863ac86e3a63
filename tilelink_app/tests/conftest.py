"""
Shared pytest fixtures for the tilelink tests
"""

import pytest

from tilelink.board_io import parse_rows
from tilelink.engine import init_state
from tilelink.geometry import build_snapshot


@pytest.fixture
def blocked_grid():
    """Factory: (width, height, blocked cells) -> ``grid[x][y]`` arena"""
    def _make(width, height, blocked):
        return build_snapshot(width, height, blocked).blocked
    return _make


@pytest.fixture
def make_state():
    """Factory: board rows (top row first) -> fresh GameState"""
    def _make(rows, board_id="test"):
        return init_state(parse_rows(rows), board_id)
    return _make


@pytest.fixture
def full_board_rows():
    """3x3 board with no empty cells and a special tile in the middle"""
    return [
        "1 2 5",
        "2 * 1",
        "5 3 3",
    ]
