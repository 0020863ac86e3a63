from __future__ import annotations

from typing import Any, Dict, List

from .geometry import Cell, Tile, DIRECTIONS, direction_name
from .engine import GameState, remaining_tiles

SPECIAL_GLYPH = "★"

GLYPHS: List[str] = [
    "🍎", "🍌", "🍇", "🍒", "🍋", "🍉", "🍑", "🍍",
    "🥝", "🥥", "🍓", "🫐", "🍐", "🍊", "🥕", "🌽",
    "🍄", "🌶", "🥑", "🍆", "🥦", "🧄", "🧅", "🥔",
    "🌰", "🥜", "🍞", "🧀", "🥚", "🍪", "🍩", "🍫",
]


def cell_id(cell: Cell) -> str:
    return f"{cell[0]},{cell[1]}"


def tile_glyph(tile: Tile) -> str:
    if tile.special:
        return SPECIAL_GLYPH
    if 0 <= tile.element_id < len(GLYPHS):
        return GLYPHS[tile.element_id]
    return str(tile.element_id)


def status_text(state: GameState) -> str:
    if state.phase == "game_over":
        if state.victory:
            return f"Board cleared! Final score: {state.score}"
        return f"No moves left. Final score: {state.score}"
    if state.phase == "paused":
        return "Paused"
    if state.armed_special is not None:
        return "Pick a direction for the special tile"
    return f"{remaining_tiles(state)} tiles left"


def make_board_props(state: GameState) -> Dict[str, Any]:
    rows_payload = []
    # Top row first: y grows upward so "up" moves toward the top of the screen.
    for y in range(state.height - 1, -1, -1):
        row = []
        for x in range(state.width):
            cell = (x, y)
            tile = state.tiles.get(cell)
            matched = cell in state.matched
            empty = tile is None or matched
            row.append(
                {
                    "id": cell_id(cell),
                    "x": x,
                    "y": y,
                    "glyph": "" if empty else tile_glyph(tile),
                    "is_empty": empty,
                    "is_matched": matched,
                    "is_special": bool(tile is not None and tile.special and not matched),
                    "highlight": {
                        "selected": cell == state.selected,
                        "armed": cell == state.armed_special,
                    },
                }
            )
        rows_payload.append(row)

    return {
        "schema_version": "tilelinkboardprops.v1",
        "board": {
            "width": state.width,
            "height": state.height,
            "rows": rows_payload,
        },
        "directions": [direction_name(d) for d in DIRECTIONS],
        "status": {
            "score": state.score,
            "phase": state.phase,
            "victory": state.victory,
            "remaining": remaining_tiles(state),
            "awaiting_direction": state.armed_special is not None,
            "text": status_text(state),
            "last_action": state.last_action,
        },
        "sync": {
            "board_id": state.board_id,
            "state_id": state.state_id,
        },
    }
