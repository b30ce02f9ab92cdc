"""Streamlit components for hint indicators and their diagnostics."""

from __future__ import annotations

from html import escape
from typing import Any, MutableMapping

import pandas as pd
import streamlit as st

from hint_app.hints.catalog import VIEWED_COLOR, HintDefinition
from hint_app.hints.controller import HintController
from hint_app.ui.state import get_hint_controller

_HINT_CSS = """
<style>
@keyframes hint-ripple{0%{transform:scale(1);opacity:0.6;}100%{transform:scale(2.2);opacity:0;}}
.hint-indicator{position:relative;display:inline-flex;align-items:center;justify-content:center;width:32px;height:32px;}
.hint-indicator__ring{position:absolute;width:16px;height:16px;border-radius:8px;box-sizing:border-box;animation:hint-ripple 1.5s ease-out infinite;}
.hint-indicator__dot{position:relative;z-index:1;width:16px;height:16px;border-radius:8px;display:flex;align-items:center;justify-content:center;font-size:0.65rem;font-weight:700;box-sizing:border-box;}
</style>
"""

_RENDERED_KEY = "_hints_rendered_this_run"
_MOUNTED_KEY = "_hints_mounted"


def _ensure_hint_css() -> None:
    """Inject indicator styling once per session."""

    flag = "_hint_css_injected"
    if st.session_state.get(flag):
        return
    st.session_state[flag] = True
    st.markdown(_HINT_CSS, unsafe_allow_html=True)


def indicator_html(definition: HintDefinition, *, active: bool, viewed: bool) -> str:
    """Markup for the indicator dot: filled and pulsing when active, outlined otherwise."""

    color = escape(VIEWED_COLOR if viewed else definition.color)
    opacity = 0.6 if viewed else 1
    icon = escape(definition.icon)
    ring = ""
    if active and not viewed:
        ring = f"<div class='hint-indicator__ring' style='border:2px solid {color};'></div>"
        dot_style = f"background-color:{color};color:#FFFFFF;"
    else:
        dot_style = f"background-color:transparent;border:1.5px solid {color};color:{color};"
    state = "active" if active and not viewed else ("viewed" if viewed else "idle")
    return (
        f"<div class='hint-indicator' data-hint='{escape(definition.id)}' "
        f"data-state='{state}' style='opacity:{opacity};'>"
        f"{ring}<div class='hint-indicator__dot' style='{dot_style}'>{icon}</div>"
        "</div>"
    )


def begin_render(state: MutableMapping[str, Any] | None = None) -> None:
    """Start a script run; indicators rendered from here on count as mounted."""

    if state is None:
        state = st.session_state
    state[_RENDERED_KEY] = []


def finish_render(
    controller: HintController | None = None,
    state: MutableMapping[str, Any] | None = None,
) -> list[str]:
    """Unregister hints that were mounted last run but not rendered in this one.

    Returns the ids that were unmounted.
    """

    if state is None:
        state = st.session_state
    if controller is None:
        controller = get_hint_controller(state)

    rendered = list(state.get(_RENDERED_KEY) or [])
    previous = list(state.get(_MOUNTED_KEY) or [])
    unmounted = [hint_id for hint_id in previous if hint_id not in rendered]
    for hint_id in unmounted:
        controller.unregister(hint_id)
    state[_MOUNTED_KEY] = rendered
    state[_RENDERED_KEY] = []
    return unmounted


def hint_indicator(
    definition: HintDefinition,
    *,
    controller: HintController | None = None,
) -> str:
    """Mount and render one hint indicator. Returns ``active``, ``viewed`` or ``idle``."""

    state = st.session_state
    if controller is None:
        controller = get_hint_controller(state)

    controller.register(definition.id, definition.priority)
    rendered = state.get(_RENDERED_KEY)
    if rendered is None:
        rendered = []
        state[_RENDERED_KEY] = rendered
    if definition.id not in rendered:
        rendered.append(definition.id)

    active = controller.is_active(definition.id)
    viewed = controller.is_viewed(definition.id)

    _ensure_hint_css()
    st.markdown(indicator_html(definition, active=active, viewed=viewed), unsafe_allow_html=True)
    with st.expander(definition.title, expanded=False):
        st.markdown(definition.content)
        if not viewed:
            st.button(
                "Got it",
                key=f"hint-dismiss-{definition.id}",
                on_click=controller.dismiss,
                args=(definition.id,),
            )

    if viewed:
        return "viewed"
    return "active" if active else "idle"


def hint_status_frame(controller: HintController) -> pd.DataFrame:
    """Tabular view of every known hint: registered ones first, then viewed-only."""

    snapshot = controller.snapshot()
    viewed = set(snapshot["viewed"])
    rows: list[dict[str, Any]] = []
    for entry in snapshot["registered"]:
        hint_id = entry["id"]
        if hint_id == snapshot["active"]:
            status = "active"
        elif hint_id in viewed:
            status = "viewed"
        else:
            status = "waiting"
        rows.append({"hint": hint_id, "priority": entry["priority"], "mounted": True, "status": status})

    registered = {row["hint"] for row in rows}
    for hint_id in snapshot["viewed"]:
        if hint_id not in registered:
            rows.append({"hint": hint_id, "priority": None, "mounted": False, "status": "viewed"})

    return pd.DataFrame(rows, columns=["hint", "priority", "mounted", "status"])


def hint_status_table(controller: HintController | None = None) -> pd.DataFrame:
    """Render :func:`hint_status_frame` for the diagnostics panel."""

    if controller is None:
        controller = get_hint_controller()
    frame = hint_status_frame(controller)
    if not controller.enabled:
        st.caption("Hint emphasis is disabled for this session.")
    if frame.empty:
        st.caption("No hints mounted yet.")
    else:
        st.dataframe(frame, hide_index=True, use_container_width=True)
    return frame
