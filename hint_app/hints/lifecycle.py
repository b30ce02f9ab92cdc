"""Explicit mount/unmount hooks binding a UI element to a hint id."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .controller import HintController


class HintMount:
    """Attach/detach handle owned by a single indicator component.

    ``attach`` registers the hint and ``detach`` unregisters it. Both are
    idempotent, so a component can call them from whatever lifecycle
    callbacks its framework offers without tracking state itself.
    """

    def __init__(self, controller: HintController, hint_id: str, priority: int | None = None):
        self.controller = controller
        self.hint_id = hint_id
        self.priority = priority
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def active(self) -> bool:
        return self.controller.is_active(self.hint_id)

    @property
    def viewed(self) -> bool:
        return self.controller.is_viewed(self.hint_id)

    def attach(self) -> "HintMount":
        if not self._attached:
            self.controller.register(self.hint_id, self.priority)
            self._attached = True
        return self

    def detach(self) -> None:
        if self._attached:
            self._attached = False
            self.controller.unregister(self.hint_id)

    def dismiss(self) -> None:
        self.controller.dismiss(self.hint_id)

    def __enter__(self) -> "HintMount":
        return self.attach()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()


@contextmanager
def mounted(
    controller: HintController, hint_id: str, priority: int | None = None
) -> Iterator[HintMount]:
    """Keep ``hint_id`` registered for the duration of the ``with`` block."""

    mount = HintMount(controller, hint_id, priority)
    mount.attach()
    try:
        yield mount
    finally:
        mount.detach()
