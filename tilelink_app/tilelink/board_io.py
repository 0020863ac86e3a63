from __future__ import annotations

import json
import logging
import os
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .geometry import Board, Cell, Tile, SPECIAL_ELEMENT_ID

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "boardfile.v1"

EMPTY_TOKEN = "."
SPECIAL_TOKEN = "*"


@dataclass(frozen=True)
class BoardMeta:
    id: str
    title: str
    author: str
    difficulty: str
    filename: str


class BoardValidationError(ValueError):
    pass


def _parse_token(token: str, row_no: int, col_no: int) -> Optional[Tile]:
    if token == EMPTY_TOKEN:
        return None
    if token == SPECIAL_TOKEN:
        return Tile(element_id=SPECIAL_ELEMENT_ID, special=True)
    if not (token.isascii() and token.isdigit()):
        raise BoardValidationError(
            f"Invalid token {token!r} at row {row_no}, column {col_no}. "
            f"Use '{EMPTY_TOKEN}', '{SPECIAL_TOKEN}' or a non-negative integer."
        )
    return Tile(element_id=int(token))


def parse_rows(rows: Sequence[str]) -> Board:
    """
    Build a board from whitespace-separated rows listed top to bottom:
    ``rows[0]`` is the row with ``y = height - 1``.
    """
    if not rows:
        raise BoardValidationError("Board has no rows.")

    split_rows = [str(row).split() for row in rows]
    width = len(split_rows[0])
    if width == 0:
        raise BoardValidationError("Board rows cannot be empty.")
    for i, tokens in enumerate(split_rows):
        if len(tokens) != width:
            raise BoardValidationError(
                f"Row {i} has {len(tokens)} cells; expected {width} (rows must be rectangular)."
            )

    height = len(split_rows)
    tiles: Dict[Cell, Tile] = {}
    for row_no, tokens in enumerate(split_rows):
        y = height - 1 - row_no
        for x, token in enumerate(tokens):
            tile = _parse_token(token, row_no, x)
            if tile is not None:
                tiles[(x, y)] = tile

    # Every normal tile needs a partner or the board can never be cleared.
    counts = Counter(t.element_id for t in tiles.values() if not t.special)
    odd = sorted(eid for eid, n in counts.items() if n % 2 == 1)
    if odd:
        raise BoardValidationError(f"Element ids appear an odd number of times: {odd}")

    return Board(width=width, height=height, tiles=tiles)


def list_boards(board_dir: str) -> List[BoardMeta]:
    metas: List[BoardMeta] = []
    if not os.path.isdir(board_dir):
        return metas

    for fn in sorted(os.listdir(board_dir)):
        if not fn.lower().endswith(".json"):
            continue
        path = os.path.join(board_dir, fn)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            # Listing stays best-effort; load_board reports the details.
            logger.warning(f"Skipping unreadable board file {fn}: {e}")
            continue
        meta = raw.get("meta", {}) if isinstance(raw, dict) else {}
        meta = meta or {}
        stem = fn[: -len(".json")]
        metas.append(
            BoardMeta(
                id=str(meta.get("id", stem)),
                title=str(meta.get("title", stem)),
                author=str(meta.get("author", "")),
                difficulty=str(meta.get("difficulty", "")),
                filename=fn,
            )
        )
    return metas


def load_board(path: str) -> Board:
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except ValueError as e:
            raise BoardValidationError(f"Board file {os.path.basename(path)} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise BoardValidationError("Board file must contain a JSON object.")

    schema_version = str(raw.get("schema_version", "")).strip()
    if schema_version != SCHEMA_VERSION:
        raise BoardValidationError(
            f"Unsupported or missing schema_version: {schema_version!r}. Expected {SCHEMA_VERSION!r}."
        )

    rows = raw.get("rows")
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise BoardValidationError("'rows' must be a list of strings.")

    board = parse_rows(rows)
    logger.info(f"Loaded board {os.path.basename(path)} ({board.width}x{board.height}, {len(board.tiles)} tiles)")
    return board
