"""Session-scoped persistence of dismissed hint ids."""

from __future__ import annotations

import json
from typing import Iterable

from .diagnostics import log_event
from .storage import KeyValueStorage

DEFAULT_STORAGE_KEY = "wraith-hints-viewed"


class ViewedStore:
    """Round-trips the viewed-hint set through a fallible key/value backend.

    The persisted value is a JSON array of hint ids stored under a single
    key. Reads degrade to "nothing viewed yet" and writes are best effort:
    neither ever raises to the caller.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load_ordered(self) -> list[str]:
        """Return persisted ids in stored order with duplicates removed."""

        try:
            raw = self.storage.get(self.key)
        except Exception as exc:
            log_event("hints.store.load.error", key=self.key, err=str(exc), exc=exc)
            return []

        if raw is None or raw == "":
            return []

        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as exc:
            log_event("hints.store.load.invalid", key=self.key, err=str(exc))
            return []

        if not isinstance(parsed, list):
            log_event("hints.store.load.invalid", key=self.key, kind=type(parsed).__name__)
            return []

        ordered: list[str] = []
        seen: set[str] = set()
        for item in parsed:
            if isinstance(item, str) and item not in seen:
                seen.add(item)
                ordered.append(item)
        return ordered

    def load(self) -> set[str]:
        return set(self.load_ordered())

    def save(self, viewed: Iterable[str]) -> None:
        try:
            payload = json.dumps(list(viewed), ensure_ascii=False)
            self.storage.set(self.key, payload)
        except Exception as exc:
            log_event("hints.store.save.error", key=self.key, err=str(exc), exc=exc)
