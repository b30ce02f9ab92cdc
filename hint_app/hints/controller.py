"""Facade coordinating hint registration, dismissal and activation."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List

from .diagnostics import log_event
from .models import validate_hint_id, validate_priority
from .registry import HintRegistry
from .selector import select_active
from .storage import MemoryStorage
from .viewed_store import ViewedStore

DEFAULT_PRIORITY = 100

ActiveListener = Callable[[str | None, str | None], None]


class HintController:
    """The only object UI code talks to for onboarding hints.

    Owns the :class:`HintRegistry` and the viewed list, and recomputes the
    active hint synchronously at the end of every mutation. All mutations run
    under one re-entrant lock, so a query issued after a mutation always sees
    its full effect. Listeners registered with :meth:`subscribe` are called
    with ``(previous, current)`` after the lock is released, and only when
    the active hint actually changes.
    """

    def __init__(
        self,
        store: ViewedStore | None = None,
        *,
        default_priority: int = DEFAULT_PRIORITY,
        enabled: bool = True,
    ) -> None:
        self.store = store if store is not None else ViewedStore(MemoryStorage())
        self.default_priority = validate_priority(default_priority)
        self._registry = HintRegistry()
        self._viewed: Dict[str, None] = {}
        self._active: str | None = None
        self._enabled = bool(enabled)
        self._initialized = False
        self._listeners: List[ActiveListener] = []
        self._lock = threading.RLock()

    # --- lifecycle --------------------------------------------------------
    def initialize(self) -> None:
        """Load previously dismissed hints once and compute the active hint.

        Mutations issued before this call load the persisted list
        themselves, so a late call never drops stored dismissals.
        """

        with self._lock:
            if not self._load_viewed():
                return
            change = self._recompute()
        self._notify(change)

    @property
    def initialized(self) -> bool:
        return self._initialized

    # --- commands ---------------------------------------------------------
    def register(self, hint_id: str, priority: int | None = None) -> None:
        validate_hint_id(hint_id)
        value = self.default_priority if priority is None else validate_priority(priority)
        with self._lock:
            loaded = self._load_viewed()
            if not self._registry.register(hint_id, value) and not loaded:
                return
            change = self._recompute()
        self._notify(change)

    def unregister(self, hint_id: str) -> None:
        with self._lock:
            loaded = self._load_viewed()
            if not self._registry.unregister(hint_id) and not loaded:
                return
            change = self._recompute()
        self._notify(change)

    def dismiss(self, hint_id: str) -> None:
        validate_hint_id(hint_id)
        with self._lock:
            loaded = self._load_viewed()
            if hint_id in self._viewed:
                if not loaded:
                    return
            else:
                self._viewed[hint_id] = None
                self.store.save(self._viewed)
                log_event("hints.dismissed", hint=hint_id, registered=hint_id in self._registry)
            change = self._recompute()
        self._notify(change)

    def set_enabled(self, enabled: bool) -> None:
        """Toggle hint emphasis globally without touching registrations."""

        with self._lock:
            self._load_viewed()
            self._enabled = bool(enabled)
            change = self._recompute()
        self._notify(change)

    # --- queries ----------------------------------------------------------
    @property
    def enabled(self) -> bool:
        return self._enabled

    def is_active(self, hint_id: str) -> bool:
        with self._lock:
            return self._active is not None and self._active == hint_id

    def is_viewed(self, hint_id: str) -> bool:
        with self._lock:
            return hint_id in self._viewed

    def is_registered(self, hint_id: str) -> bool:
        with self._lock:
            return hint_id in self._registry

    def active_hint(self) -> str | None:
        with self._lock:
            return self._active

    def viewed_hints(self) -> tuple[str, ...]:
        """Dismissed ids in the order they were persisted or dismissed."""

        with self._lock:
            return tuple(self._viewed)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "active": self._active,
                "enabled": self._enabled,
                "registered": [
                    {"id": entry.id, "priority": entry.priority, "sequence": entry.sequence}
                    for entry in self._registry.entries()
                ],
                "viewed": list(self._viewed),
            }

    # --- observers --------------------------------------------------------
    def subscribe(self, listener: ActiveListener) -> Callable[[], None]:
        """Call ``listener(previous, current)`` whenever the active hint changes.

        Returns a callable that removes the listener; calling it more than
        once is harmless.
        """

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass

        return _unsubscribe

    # --- internals --------------------------------------------------------
    def _load_viewed(self) -> bool:
        """Merge the persisted viewed list on first use; return True if it ran."""

        if self._initialized:
            return False
        for hint_id in self.store.load_ordered():
            self._viewed.setdefault(hint_id, None)
        self._initialized = True
        return True

    def _recompute(self) -> tuple[str | None, str | None] | None:
        """Refresh the active hint; return ``(previous, current)`` if it moved."""

        previous = self._active
        if self._enabled:
            current = select_active(self._registry.entries(), self._viewed)
        else:
            current = None
        self._active = current
        if previous == current:
            return None
        log_event("hints.active.changed", previous=previous, current=current)
        return previous, current

    def _notify(self, change: tuple[str | None, str | None] | None) -> None:
        if change is None:
            return
        with self._lock:
            listeners = list(self._listeners)
        previous, current = change
        for listener in listeners:
            try:
                listener(previous, current)
            except Exception as exc:
                log_event(
                    "hints.listener.error",
                    listener=getattr(listener, "__name__", repr(listener)),
                    err=str(exc),
                    exc=exc,
                )
