"""Session state helpers binding the hint controller to a Streamlit session."""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

import streamlit as st

from hint_app.hints.controller import HintController
from hint_app.hints.factory import build_controller
from hint_app.utils.envs import Settings, get_settings

BASE_SESSION_STATE: dict[str, Any] = {
    "show_hint_diagnostics": False,
}

_CONTROLLER_KEY = "_hint_controller"
_STORAGE_PREFIX = "_hint_storage:"


def _as_mutable(state: Mapping[str, Any]) -> MutableMapping[str, Any] | None:
    if isinstance(state, MutableMapping):
        return state
    # ``st.session_state`` is ``MutableMapping``-like but may not register as such.
    for method_name in ("__setitem__", "__getitem__", "get"):
        if not hasattr(state, method_name):
            return None
    return state  # type: ignore[return-value]


class SessionStateStorage:
    """Key/value backend living in ``st.session_state``.

    Values survive reruns for as long as the browser session lasts, which is
    exactly the lifetime dismissed hints are meant to be remembered for.
    Keys are namespaced so they cannot collide with widget state.
    """

    def __init__(self, state: MutableMapping[str, Any] | None = None):
        self._state = state

    @property
    def state(self) -> MutableMapping[str, Any]:
        if self._state is not None:
            return self._state
        mutable = _as_mutable(st.session_state)
        if mutable is None:
            raise RuntimeError("Streamlit session state is not available")
        return mutable

    def get(self, key: str) -> str | None:
        value = self.state.get(_STORAGE_PREFIX + key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self.state[_STORAGE_PREFIX + key] = value


def ensure_keys(overrides: Mapping[str, Any] | None = None) -> None:
    """Populate ``st.session_state`` with default values for the dashboard."""

    defaults = dict(BASE_SESSION_STATE)
    if overrides:
        for key, value in overrides.items():
            if value is None:
                continue
            defaults[key] = value

    state = st.session_state
    for key, value in defaults.items():
        if key not in state:
            state[key] = value


def get_hint_controller(
    state: MutableMapping[str, Any] | None = None,
    *,
    settings: Settings | None = None,
) -> HintController:
    """Return this session's controller, creating and initialising it once."""

    if state is None:
        state = st.session_state

    controller = state.get(_CONTROLLER_KEY)
    if isinstance(controller, HintController):
        return controller

    controller = build_controller(
        settings if settings is not None else get_settings(),
        session=SessionStateStorage(state),
    )
    state[_CONTROLLER_KEY] = controller
    return controller
