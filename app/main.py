import logging

import streamlit as st
from pyrsistent import thaw

from config import set_default_config, get_config_from_widgets
from hex_arena.config import GridConfig, InvalidConfig
from hex_arena.lifecycle import GridLifecycleManager
from hex_arena.renderer.preview import PreviewRenderer

logging.basicConfig(level=logging.INFO)

st.set_page_config(layout="wide", page_title="Hex Arena")


def get_manager() -> GridLifecycleManager:
    if "manager" not in st.session_state:
        st.session_state["manager"] = GridLifecycleManager()
    return st.session_state["manager"]


def regenerate_if_changed(manager: GridLifecycleManager, config: GridConfig) -> None:
    if manager.config == config:
        return
    try:
        manager.regenerate(config)
    except InvalidConfig as e:
        st.error(f"Grid generation failed: {e}")


# --------- Main App ---------

set_default_config()
manager = get_manager()
tab_preview, tab_state = st.tabs(["Preview", "State"])

with st.sidebar:
    config: GridConfig = get_config_from_widgets()
    st.session_state["config"] = config

regenerate_if_changed(manager, st.session_state["config"])

with tab_preview:
    renderer = PreviewRenderer(resolution=800)
    st.image(renderer.render(manager.batches), use_container_width=True)

with tab_state:
    if manager.snapshot is not None:
        st.json(thaw(manager.snapshot.description), expanded=1)
