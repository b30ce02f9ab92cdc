"""Pure selection of the single active hint."""

from __future__ import annotations

from collections.abc import Container, Iterable

from .models import HintEntry


def select_active(entries: Iterable[HintEntry], viewed: Container[str]) -> str | None:
    """Return the id of the unviewed entry with the lowest priority.

    Ties are resolved by registration order (lowest ``sequence``), which keeps
    the result independent of the order ``entries`` arrive in. Returns
    ``None`` when every entry has been viewed or there are none.
    """

    best: HintEntry | None = None
    for entry in entries:
        if entry.id in viewed:
            continue
        if best is None or (entry.priority, entry.sequence) < (best.priority, best.sequence):
            best = entry
    return best.id if best is not None else None
