from __future__ import annotations

import logging
import os, sys
import random

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import streamlit as st

from tilelink.config import load_config, configure_logging
from tilelink.board_io import list_boards, load_board, BoardValidationError
from tilelink.engine import init_state, reduce, GridEvent
from tilelink.layout import generate_board
from tilelink.ui_adapters import make_board_props

logger = logging.getLogger(__name__)

APP_TITLE = "Tilelink"
RANDOM_BOARD = "Random board"

DEFAULT_INSTRUCTIONS = """**How to Play**

Click two identical tiles to link them. They clear when a line with **at most two turns**
can join them through empty cells.

- Click a tile to select it; click it again to deselect.
- A ★ tile clears the next two tiles in a direction of your choice.
- **Shuffle** redistributes the remaining tiles.
- Clear the board to win. The game ends early when no link or sweep is left.
"""


def _ensure_state():
    if "config" not in st.session_state:
        try:
            config = load_config()
        except ValueError as e:
            st.error(f"Invalid settings: {e}")
            st.stop()
        configure_logging(config.log_level)
        st.session_state.config = config

    if "board" not in st.session_state:
        st.session_state.board = None
    if "board_id" not in st.session_state:
        st.session_state.board_id = None
    if "game_state" not in st.session_state:
        st.session_state.game_state = None

    if "show_instructions" not in st.session_state:
        st.session_state.show_instructions = False


def _dispatch(etype: str, payload: dict | None = None):
    st.session_state.game_state = reduce(
        st.session_state.game_state,
        GridEvent(type=etype, payload=payload or {}),
        st.session_state.config,
    )


def _render_board(props: dict):
    board = props["board"]
    for row in board["rows"]:
        cols = st.columns(board["width"], gap="small")
        for col, cell in zip(cols, row):
            with col:
                hl = cell["highlight"]
                btn_type = "primary" if (hl["selected"] or hl["armed"]) else "secondary"
                st.button(
                    cell["glyph"] or " ",
                    key=f"tile_{props['sync']['state_id']}_{cell['id']}",
                    use_container_width=True,
                    type=btn_type,
                    disabled=cell["is_empty"],
                    on_click=_dispatch,
                    args=("CLICK_TILE", {"cell_id": cell["id"]}),
                )


def _render_direction_picker(props: dict):
    st.markdown("**Special tile: pick a direction**")
    cols = st.columns(len(props["directions"]) + 1)
    for col, name in zip(cols, props["directions"]):
        with col:
            st.button(
                name.capitalize(),
                key=f"dir_{name}",
                use_container_width=True,
                on_click=_dispatch,
                args=("SELECT_DIRECTION", {"dir": name}),
            )
    with cols[-1]:
        st.button("Cancel", key="dir_cancel", use_container_width=True,
                  on_click=_dispatch, args=("CANCEL_DIRECTION", {}))


def main():
    st.set_page_config(page_title=APP_TITLE, page_icon="🀄", layout="wide")
    _ensure_state()

    config = st.session_state.config
    metas = list_boards(config.board_dir)

    with st.sidebar:
        st.header("Board")
        options = {RANDOM_BOARD: None}
        options.update({f"{m.id} — {m.title}": m for m in metas})
        pick = st.selectbox("Select a board", list(options.keys()))
        chosen = options[pick]
        seed_text = st.text_input("Seed (random boards)", value="")

        load_clicked = st.button("New game", type="primary", use_container_width=True)
        restart_clicked = st.button("Restart", use_container_width=True, disabled=st.session_state.board is None)
        st.divider()
        game_state = st.session_state.game_state
        playing = game_state is not None and game_state.phase == "playing"
        paused = game_state is not None and game_state.phase == "paused"
        if st.button("Resume" if paused else "Pause", use_container_width=True, disabled=not (playing or paused)):
            _dispatch("RESUME" if paused else "PAUSE")
        if st.button("Shuffle", use_container_width=True, disabled=not playing):
            _dispatch("SHUFFLE", {"seed": seed_text.strip() or None})

        if st.button("Instructions", use_container_width=True):
            st.session_state.show_instructions = not st.session_state.show_instructions

    if load_clicked:
        if chosen is None:
            rng = random.Random(seed_text.strip() or None)
            board = generate_board(config.width, config.height, config.special_chance, rng)
            st.session_state.board = board
            st.session_state.board_id = f"random:{seed_text.strip()}" if seed_text.strip() else "random"
            st.session_state.game_state = init_state(board, st.session_state.board_id)
        else:
            path = os.path.join(config.board_dir, chosen.filename)
            try:
                board = load_board(path)
            except BoardValidationError as e:
                st.session_state.board = None
                st.session_state.game_state = None
                st.error(f"Board invalid: {e}")
            else:
                st.session_state.board = board
                st.session_state.board_id = chosen.id
                st.session_state.game_state = init_state(board, chosen.id)

    if restart_clicked and st.session_state.board is not None:
        logger.info(f"Restarting board {st.session_state.board_id}")
        st.session_state.game_state = init_state(st.session_state.board, st.session_state.board_id)

    st.title(APP_TITLE)

    if st.session_state.show_instructions:
        with st.expander("Instructions", expanded=True):
            st.markdown(DEFAULT_INSTRUCTIONS)

    if st.session_state.game_state is None:
        st.info("Start a new game to play.")
        st.stop()

    props = make_board_props(st.session_state.game_state)
    status = props["status"]

    c1, c2 = st.columns(2)
    c1.metric("Score", status["score"])
    c2.metric("Tiles left", status["remaining"])

    if status["victory"]:
        st.success(status["text"])
        st.balloons()
    else:
        st.caption(f"{status['text']} • Last: {status['last_action']}")

    _render_board(props)

    if status["awaiting_direction"] and status["phase"] == "playing":
        _render_direction_picker(props)


if __name__ == "__main__":
    main()
