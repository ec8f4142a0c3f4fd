import streamlit as st
import pandas as pd

from tile1024.controller import MoveController
from tile1024.game import GameSession, Outcome
from tile1024.motion import consumed_ids


def get_controller() -> MoveController:
    if "controller" not in st.session_state:
        st.session_state.controller = MoveController(GameSession())
    return st.session_state.controller


def display_board(session: GameSession):
    """
    Display the board with the classic tile colours.
    Each tile shows its value, with its id in small print underneath.
    """
    color_map = {
        2: "#EEE4DA",
        4: "#EDE0C8",
        8: "#F2B179",
        16: "#F59563",
        32: "#F67C5F",
        64: "#F65E3B",
        128: "#EDCF72",
        256: "#EDCC61",
        512: "#EDC850",
        1024: "#EDC53F",
        2048: "#EDC22E",
    }
    empty_color = "#CDC1B4"
    default_color = "#3C3A32"

    st.markdown("""
    <style>
    .tile-container {
        background-color: #BBADA0;
        border-radius: 6px;
        padding: 10px;
        width: fit-content;
    }
    .tile {
        width: 80px;
        height: 80px;
        margin: 4px;
        border-radius: 3px;
        display: flex;
        flex-direction: column;
        justify-content: center;
        align-items: center;
        font-family: 'Arial', sans-serif;
        font-weight: bold;
        font-size: 24px;
        color: #776E65;
    }
    .tile small {
        font-size: 10px;
        font-weight: normal;
    }
    .value-high {
        color: #F9F6F2;
    }
    </style>
    """, unsafe_allow_html=True)

    s = '<div class="tile-container">'
    for row in session.grid:
        s += '<div style="display: flex;">'
        for tile in row:
            if tile is None:
                s += f'<div class="tile" style="background-color: {empty_color};"></div>'
                continue
            bg_color = color_map.get(tile.value, default_color)
            text_class = "value-high" if tile.value >= 8 else ""
            s += (
                f'<div class="tile {text_class}" style="background-color: {bg_color};">'
                f"{tile.value}<small>#{tile.id}</small></div>"
            )
        s += "</div>"
    s += "</div>"

    st.markdown(s, unsafe_allow_html=True)

    board = session.values()
    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Highest Tile", int(board.max()))
    with col2:
        st.metric("Tiles", int((board != 0).sum()))


def display_motions(controller: MoveController):
    if not controller.motions:
        return
    df = pd.DataFrame(
        [
            {
                "id": m.id,
                "value": m.value,
                "from": "%d,%d" % m.from_cell,
                "to": "%d,%d" % m.to_cell,
                "kind": m.kind.value,
            }
            for m in controller.motions
        ]
    )
    st.subheader("Last move")
    st.dataframe(df, hide_index=True)
    merged_away = st.session_state.get("consumed", set())
    if merged_away:
        st.caption("Merged away: " + ", ".join(f"#{i}" for i in sorted(merged_away)))


if __name__ == "__main__":
    st.title("1024")

    controller = get_controller()

    if st.button("New Game"):
        controller.new_game()
        st.session_state.consumed = set()

    cols = st.columns(4)
    for col, direction in zip(cols, ["left", "up", "down", "right"]):
        with col:
            if st.button(direction.capitalize()):
                result = controller.handle_intent(direction)
                if result is not None:
                    st.session_state.consumed = consumed_ids(result.old_grid, result.new_grid)
                    # no animation here, so the move is presented at once
                    controller.finish_presentation()

    display_board(controller.session)
    display_motions(controller)

    if controller.outcome is Outcome.WON:
        st.success("You made the 1024 tile! Keep going or start a new game.")
    elif controller.outcome is Outcome.LOST:
        st.error("Game over! No moves left.")
