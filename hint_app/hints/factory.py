"""Wire a :class:`HintController` from :class:`~hint_app.utils.envs.Settings`."""

from __future__ import annotations

from ..utils.envs import Settings, get_settings
from .diagnostics import log_event
from .controller import HintController
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from .viewed_store import ViewedStore


def build_storage(
    settings: Settings, *, session: KeyValueStorage | None = None
) -> KeyValueStorage:
    backend = settings.storage_backend
    if backend == "file":
        return JsonFileStorage(settings.resolved_storage_file())
    if backend == "session":
        if session is not None:
            return session
        log_event("hints.storage.session_unavailable", fallback="memory")
    return MemoryStorage()


def build_controller(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
    session: KeyValueStorage | None = None,
    initialize: bool = True,
) -> HintController:
    """Create a controller using ``storage`` or the backend named in settings."""

    if settings is None:
        settings = get_settings()
    backend = storage if storage is not None else build_storage(settings, session=session)
    controller = HintController(
        ViewedStore(backend, settings.storage_key),
        default_priority=settings.default_priority,
        enabled=settings.hints_enabled,
    )
    if initialize:
        controller.initialize()
    return controller
