"""UI helpers for the Streamlit front-end."""

from .state import BASE_SESSION_STATE, SessionStateStorage, ensure_keys, get_hint_controller
from . import components

__all__ = [
    "BASE_SESSION_STATE",
    "SessionStateStorage",
    "components",
    "ensure_keys",
    "get_hint_controller",
]
