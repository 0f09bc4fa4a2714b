import streamlit as st
from dataclasses import replace

from hex_arena.config import CONFIG_RANGES, GridConfig, default_config
from .shared_ui import color_section, float_slider

__all__ = [
    "set_default_config",
    "get_config_from_widgets",
]


def set_default_config() -> None:
    if "config" not in st.session_state:
        st.session_state["config"] = default_config()


def get_config_from_widgets() -> GridConfig:
    current: GridConfig = st.session_state["config"]

    st.subheader("Map Controls")
    lo, hi, step = CONFIG_RANGES["radius"]
    radius = int(
        st.slider(
            "Grid Radius",
            int(lo),
            int(hi),
            min(max(current.radius, int(lo)), int(hi)),
            step=int(step),
            key="radius",
        )
    )
    base_scale_factor = float_slider(
        "Base Scale Factor", "base_scale_factor", current.base_scale_factor
    )
    path_scale_factor = float_slider(
        "Path Scale Factor", "path_scale_factor", current.path_scale_factor
    )
    arena_scale_factor = float_slider(
        "Arena Scale Factor", "arena_scale_factor", current.arena_scale_factor
    )
    border_color_factor = float_slider(
        "Border Color Factor", "border_color_factor", current.border_color_factor
    )
    render_empty = st.checkbox(
        "Render background tiles", value=current.render_empty, key="render_empty"
    )

    st.subheader("Colors")
    cols = st.columns(3)
    with cols[0]:
        map_color = color_section("Map", current.map_color, key="map_color")
    with cols[1]:
        arena_color = color_section("Arena", current.arena_color, key="arena_color")
    with cols[2]:
        path_color = color_section("Path", current.path_color, key="path_color")

    base_cols = st.columns(len(current.base_colors))
    base_colors = []
    for idx, (col, color) in enumerate(zip(base_cols, current.base_colors)):
        with col:
            base_colors.append(
                color_section(f"Base #{idx + 1}", color, key=f"base_color_{idx}")
            )

    return replace(
        current,
        radius=radius,
        base_scale_factor=base_scale_factor,
        path_scale_factor=path_scale_factor,
        arena_scale_factor=arena_scale_factor,
        border_color_factor=border_color_factor,
        render_empty=render_empty,
        map_color=map_color,
        arena_color=arena_color,
        path_color=path_color,
        base_colors=tuple(base_colors),
    )
