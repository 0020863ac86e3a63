from tilelink.geometry import (
    DIRECTIONS,
    DOWN,
    LEFT,
    RIGHT,
    UP,
    build_snapshot,
    direction_name,
    is_blocked_cell,
    is_valid_position,
    parse_direction,
    step,
)


def test_direction_order_and_names():
    assert DIRECTIONS == ((0, 1), (0, -1), (1, 0), (-1, 0))
    assert [direction_name(d) for d in DIRECTIONS] == ["up", "down", "right", "left"]
    assert direction_name((1, 1)) == "unknown"


def test_parse_direction():
    assert parse_direction("Up") == UP
    assert parse_direction(" down ") == DOWN
    assert parse_direction("LEFT") == LEFT
    assert parse_direction("right") == RIGHT
    assert parse_direction("diagonal") is None


def test_valid_positions_and_step():
    assert is_valid_position((0, 0), 2, 3)
    assert is_valid_position((1, 2), 2, 3)
    assert not is_valid_position((2, 0), 2, 3)
    assert not is_valid_position((0, -1), 2, 3)
    assert not is_valid_position((0, 0), 0, 0)
    assert step((1, 1), LEFT) == (0, 1)


def test_snapshot_is_indexed_by_column():
    snapshot = build_snapshot(3, 2, [(2, 1), (5, 5)])
    assert snapshot.blocked[2][1]
    assert len(snapshot.blocked) == 3
    assert all(len(col) == 2 for col in snapshot.blocked)
    assert snapshot.is_blocked((2, 1))
    assert not snapshot.is_blocked((0, 0))
    assert not snapshot.is_blocked((5, 5))


def test_empty_snapshot():
    snapshot = build_snapshot(0, 0, [(0, 0)])
    assert snapshot.blocked == ()
    assert not snapshot.is_blocked((0, 0))


def test_is_blocked_cell_skips_out_of_range():
    grid = ((False, True), (True, False))
    assert is_blocked_cell(grid, (0, 1), 2, 2)
    assert not is_blocked_cell(grid, (0, 0), 2, 2)
    assert not is_blocked_cell(grid, (2, 0), 2, 2)
    assert not is_blocked_cell(grid, (0, -1), 2, 2)
