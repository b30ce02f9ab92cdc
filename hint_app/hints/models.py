"""Value types shared by the hint registry, selector and controller."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HintEntry:
    """A mounted hint indicator.

    ``sequence`` grows with every successful registration and breaks ties
    between entries sharing the same ``priority``: the lower sequence wins.
    """

    id: str
    priority: int
    sequence: int


def validate_hint_id(hint_id: object) -> str:
    if not isinstance(hint_id, str):
        raise TypeError(f"hint id must be a string, got {type(hint_id).__name__}")
    return hint_id


def validate_priority(priority: object) -> int:
    # bool is an int subclass but never a meaningful priority.
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise TypeError(f"hint priority must be an integer, got {type(priority).__name__}")
    return priority
