"""Registry of the hint indicators currently mounted in the UI."""

from __future__ import annotations

import itertools
from typing import Dict

from .models import HintEntry


class HintRegistry:
    """Tracks mounted hints and the order in which they were registered.

    The first registration of an id wins: later calls with the same id are
    ignored, priority included. Unregistering forgets the entry completely,
    so a remount receives a fresh sequence number.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, HintEntry] = {}
        self._sequence = itertools.count()

    def register(self, hint_id: str, priority: int) -> bool:
        if hint_id in self._entries:
            return False
        self._entries[hint_id] = HintEntry(hint_id, priority, next(self._sequence))
        return True

    def unregister(self, hint_id: str) -> bool:
        return self._entries.pop(hint_id, None) is not None

    def get(self, hint_id: str) -> HintEntry | None:
        return self._entries.get(hint_id)

    def entries(self) -> list[HintEntry]:
        """Snapshot of current entries in registration order."""

        return list(self._entries.values())

    def __contains__(self, hint_id: object) -> bool:
        return hint_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
