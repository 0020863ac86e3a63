from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, replace
from typing import Dict, List, Literal, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .geometry import (
    Board,
    Cell,
    DIRECTIONS,
    Direction,
    OccupancySnapshot,
    Tile,
    build_snapshot,
    direction_name,
    is_valid_position,
    parse_direction,
    step,
)
from .pathfinder import can_connect

logger = logging.getLogger(__name__)

Phase = Literal["playing", "paused", "game_over"]


@dataclass(frozen=True)
class GameState:
    board_id: str
    state_id: str                       # unique per init/reset (forces frontend resync)
    width: int
    height: int
    tiles: Dict[Cell, Tile]             # layout; cleared tiles stay here and are listed in matched
    matched: frozenset[Cell]
    selected: Optional[Cell] = None
    armed_special: Optional[Cell] = None  # special tile waiting for a direction
    score: int = 0
    phase: Phase = "playing"
    victory: bool = False
    last_action: str = ""


# --- init / queries ---

def init_state(board: Board, board_id: str = "random") -> GameState:
    return GameState(
        board_id=board_id,
        state_id=str(uuid.uuid4()),
        width=board.width,
        height=board.height,
        tiles=dict(board.tiles),
        matched=frozenset(),
        last_action="init",
    )


def is_live(state: GameState, cell: Cell) -> bool:
    return cell in state.tiles and cell not in state.matched


def live_cells(state: GameState) -> List[Cell]:
    return sorted(c for c in state.tiles if c not in state.matched)


def remaining_tiles(state: GameState) -> int:
    return len(live_cells(state))


def occupancy(state: GameState) -> OccupancySnapshot:
    """Snapshot for the pathfinder: a cell is blocked while it holds an uncleared tile."""
    return build_snapshot(state.width, state.height, live_cells(state))


def tiles_in_direction(state: GameState, origin: Cell, direction: Direction, count: int) -> List[Cell]:
    """
    Walk from the cell next to ``origin`` to the edge of the board, collecting up
    to ``count`` uncleared normal tiles. Empty cells and special tiles are
    passed over, not treated as walls.
    """
    found: List[Cell] = []
    cell = step(origin, direction)
    while is_valid_position(cell, state.width, state.height) and len(found) < count:
        if is_live(state, cell) and not state.tiles[cell].special:
            found.append(cell)
        cell = step(cell, direction)
    return found


def shuffle_remaining(state: GameState, rng: random.Random) -> GameState:
    """Redistribute the uncleared tiles over the cells they currently occupy."""
    cells = live_cells(state)
    pool = [state.tiles[c] for c in cells]
    rng.shuffle(pool)
    new_tiles = dict(state.tiles)
    new_tiles.update(zip(cells, pool))
    return replace(state, tiles=new_tiles, selected=None, armed_special=None, last_action="shuffle")


def has_moves(state: GameState, config: GameConfig = DEFAULT_CONFIG) -> bool:
    """
    True while some uncleared pair can still be linked or some special tile
    can still sweep ``config.sweep_count`` tiles in one of the four directions.
    """
    cells = live_cells(state)
    by_element: Dict[int, List[Cell]] = {}
    for cell in cells:
        tile = state.tiles[cell]
        if tile.special:
            if any(len(tiles_in_direction(state, cell, d, config.sweep_count)) >= config.sweep_count
                   for d in DIRECTIONS):
                return True
        else:
            by_element.setdefault(tile.element_id, []).append(cell)

    snapshot = occupancy(state)
    for group in by_element.values():
        for i, first in enumerate(group):
            for second in group[i + 1:]:
                if can_connect(first, second, snapshot.blocked, snapshot.width, snapshot.height):
                    return True
    return False


# --- event contracts ---

EventType = Literal[
    "CLICK_TILE",
    "SELECT_DIRECTION",
    "CANCEL_DIRECTION",
    "PAUSE",
    "RESUME",
    "SHUFFLE",
]


@dataclass(frozen=True)
class GridEvent:
    type: EventType
    payload: dict


# --- reducers ---

def reduce(state: GameState, event: GridEvent, config: GameConfig = DEFAULT_CONFIG) -> GameState:
    """
    Apply one player event and return the next state. Input that does not
    apply in the current state is ignored and tagged in ``last_action``;
    the reducer never raises on player input.
    """
    payload = event.payload or {}

    t = event.type
    if t == "CLICK_TILE":
        return _on_click_tile(state, payload, config)
    if t == "SELECT_DIRECTION":
        return _on_select_direction(state, payload, config)
    if t == "CANCEL_DIRECTION":
        return replace(state, armed_special=None, last_action="direction:cancel")
    if t == "PAUSE":
        if state.phase != "playing":
            return replace(state, last_action="pause:ignored")
        return replace(state, phase="paused", last_action="pause")
    if t == "RESUME":
        if state.phase != "paused":
            return replace(state, last_action="resume:ignored")
        return replace(state, phase="playing", last_action="resume")
    if t == "SHUFFLE":
        if state.phase != "playing":
            return replace(state, last_action="shuffle:ignored")
        seed = payload.get("seed", None)
        return _check_game_over(shuffle_remaining(state, random.Random(seed)), config)
    return replace(state, last_action=f"ignored:{t}")


# --- helpers ---

def _parse_cell_id(raw: object) -> Optional[Cell]:
    try:
        x_s, y_s = str(raw).split(",")
        return (int(x_s), int(y_s))
    except ValueError:
        return None


def _check_game_over(state: GameState, config: GameConfig) -> GameState:
    if not state.tiles:
        return state
    if remaining_tiles(state) == 0:
        logger.info(f"Board {state.board_id} cleared with score {state.score}")
        return replace(state, phase="game_over", victory=True, selected=None, armed_special=None)
    if not has_moves(state, config):
        logger.info(f"Board {state.board_id} has no moves left; final score {state.score}")
        return replace(state, phase="game_over", victory=False, selected=None, armed_special=None)
    return state


def _on_click_tile(state: GameState, payload: dict, config: GameConfig) -> GameState:
    if state.phase != "playing":
        return replace(state, last_action="click:not_playing")

    cell = _parse_cell_id(payload.get("cell_id", ""))
    if cell is None:
        return replace(state, last_action="click:bad_cell_id")
    if not is_live(state, cell):
        return replace(state, last_action="click:empty_or_matched")

    if state.tiles[cell].special:
        return replace(state, selected=None, armed_special=cell, last_action="click:arm_special")

    selected = state.selected
    if selected is None or not is_live(state, selected):
        return replace(state, selected=cell, last_action="click:select")
    if selected == cell:
        return replace(state, selected=None, last_action="click:deselect")

    return _try_match(state, selected, cell, config)


def _try_match(state: GameState, first: Cell, second: Cell, config: GameConfig) -> GameState:
    if state.tiles[first].element_id != state.tiles[second].element_id:
        return replace(state, selected=second, last_action="match:different")

    snapshot = occupancy(state)
    if not can_connect(first, second, snapshot.blocked, snapshot.width, snapshot.height):
        logger.debug(f"No path between {first} and {second}")
        return replace(state, selected=second, last_action="match:no_path")

    logger.info(f"Matched element {state.tiles[first].element_id} at {first} and {second}")
    out = replace(
        state,
        matched=state.matched | {first, second},
        selected=None,
        score=state.score + config.match_points,
        last_action="match",
    )
    return _check_game_over(out, config)


def _on_select_direction(state: GameState, payload: dict, config: GameConfig) -> GameState:
    if state.phase != "playing":
        return replace(state, last_action="direction:not_playing")

    special = state.armed_special
    if special is None or not is_live(state, special):
        return replace(state, armed_special=None, last_action="direction:no_special")

    direction = parse_direction(payload.get("dir", ""))
    if direction is None:
        return replace(state, last_action="direction:ignored")

    name = direction_name(direction)
    found = tiles_in_direction(state, special, direction, config.sweep_count)
    if len(found) < config.sweep_count:
        logger.debug(f"Not enough tiles {name} of {special} to clear ({len(found)} found)")
        return replace(state, armed_special=None, last_action=f"direction:{name}:miss")

    logger.info(f"Special at {special} cleared {found} going {name}")
    out = replace(
        state,
        matched=state.matched | {special, *found},
        armed_special=None,
        score=state.score + config.special_points,
        last_action=f"direction:{name}",
    )
    return _check_game_over(out, config)
