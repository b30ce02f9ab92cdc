"""Key/value backends the viewed-hint store can persist into.

Every backend exposes ``get(key) -> str | None`` and ``set(key, value)``.
Either call may raise; :class:`~hint_app.hints.viewed_store.ViewedStore`
absorbs the failure.
"""

from __future__ import annotations

import json
from pathlib import Path
from threading import RLock
from typing import Dict, Protocol

from ..utils.file_io import atomic_write_text

__all__ = ["KeyValueStorage", "MemoryStorage", "JsonFileStorage"]


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Plain dict backend for headless hosts and tests."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Thread-safe string store persisted as a JSON object on disk.

    The file is reloaded lazily when its modification time changes, so two
    dashboard processes pointed at the same file see each other's writes.
    Writes replace the file atomically.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = RLock()
        self._data: Dict[str, str] = {}
        self._mtime: float | None = None
        self._loaded = False

    # --- internal helpers -------------------------------------------------
    def _load_from_disk(self) -> None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._data = {}
            self._mtime = None
            self._loaded = True
            return

        data: Dict[str, str] = {}
        if raw.strip():
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = {}
            if isinstance(parsed, dict):
                data = {str(k): v for k, v in parsed.items() if isinstance(v, str)}

        self._data = data
        self._loaded = True
        try:
            self._mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            self._mtime = None

    def _ensure_fresh(self) -> None:
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            mtime = None

        if not self._loaded or mtime != self._mtime:
            self._load_from_disk()

    def _flush(self) -> None:
        atomic_write_text(
            self.path,
            json.dumps(self._data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        try:
            self._mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            self._mtime = None

    # --- public API -------------------------------------------------------
    def get(self, key: str) -> str | None:
        with self._lock:
            self._ensure_fresh()
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._ensure_fresh()
            self._data[key] = value
            self._flush()
