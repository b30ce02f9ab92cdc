"""Event logging for the hint subsystem."""

from __future__ import annotations

import contextlib
from typing import Any

from ..utils import log as log_module


def log_event(event: str, **payload: Any) -> None:
    """Write ``event`` through :func:`hint_app.utils.log.log`.

    Hints are cosmetic, so an unwritable log directory is dropped here
    instead of surfacing from a store read or a controller mutation.
    """

    with contextlib.suppress(Exception):
        log_module.log(event, **payload)
