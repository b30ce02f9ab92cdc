"""Onboarding hint orchestration: which help indicator pulses, and which are done."""

from .controller import DEFAULT_PRIORITY, HintController
from .factory import build_controller, build_storage
from .lifecycle import HintMount, mounted
from .models import HintEntry
from .registry import HintRegistry
from .selector import select_active
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from .viewed_store import DEFAULT_STORAGE_KEY, ViewedStore

__all__ = [
    "DEFAULT_PRIORITY",
    "DEFAULT_STORAGE_KEY",
    "HintController",
    "HintEntry",
    "HintMount",
    "HintRegistry",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "ViewedStore",
    "build_controller",
    "build_storage",
    "mounted",
    "select_active",
]
