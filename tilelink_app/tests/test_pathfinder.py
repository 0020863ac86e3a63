from itertools import combinations

from tilelink.geometry import build_snapshot
from tilelink.pathfinder import can_connect, _reachable_points


def test_same_cell_never_connects(blocked_grid):
    grid = blocked_grid(3, 3, [])
    assert not can_connect((1, 1), (1, 1), grid, 3, 3)
    assert not can_connect((0, 0), (0, 0), grid, 3, 3)


def test_straight_row_on_empty_board(blocked_grid):
    grid = blocked_grid(3, 3, [(0, 0), (2, 0)])
    assert can_connect((0, 0), (2, 0), grid, 3, 3)


def test_straight_column_and_adjacent(blocked_grid):
    grid = blocked_grid(3, 4, [(1, 0), (1, 3), (2, 2), (2, 3)])
    assert can_connect((1, 0), (1, 3), grid, 3, 4)
    assert can_connect((2, 2), (2, 3), grid, 3, 4)


def test_one_turn_through_free_corner(blocked_grid):
    # Only the corner (0, 2) is free; (2, 0) holds a tile.
    grid = blocked_grid(3, 3, [(0, 0), (2, 2), (2, 0)])
    assert can_connect((0, 0), (2, 2), grid, 3, 3)


def test_one_turn_corner_must_be_empty(blocked_grid):
    # 2x2 board with every cell occupied: both corners hold tiles.
    grid = blocked_grid(2, 2, [(0, 0), (1, 1), (0, 1), (1, 0)])
    assert not can_connect((0, 0), (1, 1), grid, 2, 2)


def test_detour_over_blocked_row_uses_two_turns(blocked_grid):
    grid = blocked_grid(3, 3, [(0, 0), (1, 0), (2, 0)])
    assert can_connect((0, 0), (2, 0), grid, 3, 3)


def test_detour_fails_when_every_route_is_blocked(blocked_grid):
    grid = blocked_grid(3, 3, [(0, 0), (1, 0), (2, 0), (1, 1), (1, 2)])
    assert not can_connect((0, 0), (2, 0), grid, 3, 3)


def test_z_shape_when_both_corners_are_taken(blocked_grid):
    grid = blocked_grid(4, 3, [(0, 0), (3, 2), (0, 2), (3, 0)])
    assert can_connect((0, 0), (3, 2), grid, 4, 3)
    assert can_connect((3, 2), (0, 0), grid, 4, 3)


def test_staircase_needing_three_turns_fails(blocked_grid):
    # Only free route: (0,0) -> (0,1) -> (1,1) -> (1,2) -> (2,2).
    blocked = [(0, 0), (2, 2), (1, 0), (2, 0), (2, 1), (0, 2)]
    grid = blocked_grid(3, 3, blocked)
    assert not can_connect((0, 0), (2, 2), grid, 3, 3)


def test_enclosed_start_cannot_reach_far_target(blocked_grid):
    blocked = [(2, 2), (1, 2), (3, 2), (2, 1), (2, 3), (0, 0)]
    grid = blocked_grid(5, 5, blocked)
    assert _reachable_points((2, 2), grid, 5, 5) == []
    assert not can_connect((2, 2), (0, 0), grid, 5, 5)


def test_reachable_points_stop_at_first_obstacle(blocked_grid):
    grid = blocked_grid(5, 5, [(2, 2), (2, 4), (0, 2)])
    points = _reachable_points((2, 2), grid, 5, 5)
    assert points == [(2, 3), (2, 1), (2, 0), (3, 2), (4, 2), (1, 2)]
    assert (2, 4) not in points
    assert (0, 2) not in points


def test_single_row_board(blocked_grid):
    grid = blocked_grid(5, 1, [(0, 0), (4, 0)])
    assert can_connect((0, 0), (4, 0), grid, 5, 1)

    grid = blocked_grid(5, 1, [(0, 0), (2, 0), (4, 0)])
    assert not can_connect((0, 0), (4, 0), grid, 5, 1)


def test_single_column_board(blocked_grid):
    grid = blocked_grid(1, 4, [(0, 0), (0, 1), (0, 3)])
    assert not can_connect((0, 0), (0, 3), grid, 1, 4)
    assert can_connect((0, 1), (0, 3), blocked_grid(1, 4, [(0, 1), (0, 3)]), 1, 4)


def test_out_of_range_cells_do_not_block_straight_segments(blocked_grid):
    grid = blocked_grid(3, 3, [(0, 0)])
    assert can_connect((0, 0), (0, 5), grid, 3, 3)


def test_never_raises_on_degenerate_input():
    assert not can_connect((0, 0), (1, 1), (), 0, 0)
    assert not can_connect((-2, -2), (3, 4), build_snapshot(3, 3, []).blocked, 3, 3)


def test_zero_sized_grid_never_connects():
    assert not can_connect((0, 0), (3, 0), (), 0, 0)
    assert not can_connect((0, 0), (0, 2), (), 0, 0)
    assert not can_connect((0, 0), (2, 0), ((), (), ()), 3, 0)


def _sample_board():
    width, height = 5, 4
    blocked = [
        (0, 0), (1, 0), (3, 0),
        (1, 1), (2, 1), (4, 1),
        (0, 2), (3, 2),
        (1, 3), (2, 3), (4, 3),
    ]
    return width, height, blocked


def test_connectivity_is_symmetric():
    width, height, blocked = _sample_board()
    grid = build_snapshot(width, height, blocked).blocked
    for a, b in combinations(blocked, 2):
        assert can_connect(a, b, grid, width, height) == can_connect(b, a, grid, width, height), (a, b)


def test_more_obstacles_never_create_a_path():
    width, height, blocked = _sample_board()
    base = build_snapshot(width, height, blocked).blocked
    free = [(x, y) for x in range(width) for y in range(height) if (x, y) not in blocked]
    for a, b in combinations(blocked, 2):
        before = can_connect(a, b, base, width, height)
        for extra in free:
            grid = build_snapshot(width, height, blocked + [extra]).blocked
            after = can_connect(a, b, grid, width, height)
            assert before or not after, (a, b, extra)
