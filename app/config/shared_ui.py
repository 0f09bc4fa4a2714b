from __future__ import annotations

import streamlit as st

from hex_arena.config import CONFIG_RANGES
from hex_arena.types import Color
from hex_arena.utils.color import to_rgb8


def color_to_hex(color: Color) -> str:
    r, g, b = to_rgb8(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_color(value: str) -> Color:
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {value!r}")
    return (
        int(value[0:2], 16) / 255.0,
        int(value[2:4], 16) / 255.0,
        int(value[4:6], 16) / 255.0,
    )


def color_section(label: str, current: Color, key: str) -> Color:
    picked = st.color_picker(label, value=color_to_hex(current), key=key)
    return hex_to_color(picked)


def float_slider(label: str, name: str, current: float) -> float:
    lo, hi, step = CONFIG_RANGES[name]
    # Clamp values that came from code rather than the slider itself
    value = min(max(float(current), lo), hi)
    return float(
        st.slider(label, float(lo), float(hi), value, step=float(step), key=name)
    )


__all__ = ["color_section", "color_to_hex", "float_slider", "hex_to_color"]
