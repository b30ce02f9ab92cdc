
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

if __package__ in (None, ""):
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

from hint_app.hints.catalog import HOME_HINTS, HintDefinition
from hint_app.ui.components import (
    begin_render,
    finish_render,
    hint_indicator,
    hint_status_table,
)
from hint_app.ui.state import ensure_keys, get_hint_controller
from hint_app.utils.log import log

# Placeholder card bodies keyed by hint id; real values come from the backend.
_CARD_BODIES = {
    "home-fear-greed": ("Fear & Greed", "54", "Neutral"),
    "home-view-controls": ("View", "List", "Sorted by market cap"),
    "home-search": ("Search", "BTC, ETH, SOL…", "Type a name or symbol"),
}


def render_card(definition: HintDefinition) -> None:
    label, value, caption = _CARD_BODIES.get(definition.id, (definition.title, "—", ""))
    with st.container(border=True):
        hint_indicator(definition)
        st.metric(label, value)
        if caption:
            st.caption(caption)


def render_sidebar() -> None:
    controller = get_hint_controller()
    with st.sidebar:
        st.subheader("Hints")
        enabled = st.toggle("Highlight new hints", key="hint_highlight")
        if enabled != controller.enabled:
            controller.set_enabled(enabled)
            log("ui.hints.toggle", enabled=enabled)
        st.checkbox("Show hint diagnostics", key="show_hint_diagnostics")


def main() -> None:
    st.set_page_config(page_title="Market Dashboard", layout="wide")
    ensure_keys({"hint_highlight": get_hint_controller().enabled})
    begin_render()

    render_sidebar()
    st.title("Market Dashboard")

    columns = st.columns(len(HOME_HINTS.hints))
    for column, definition in zip(columns, HOME_HINTS.hints):
        with column:
            render_card(definition)

    if st.session_state.get("show_hint_diagnostics"):
        st.divider()
        hint_status_table()

    finish_render()


if __name__ == "__main__":
    main()
