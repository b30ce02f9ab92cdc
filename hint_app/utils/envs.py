from __future__ import annotations
import os, json
from dataclasses import asdict, fields
from pydantic.dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from .log import log
from .paths import HINTS_FILE, SETTINGS_FILE

CacheKey = Tuple[Optional[float], Tuple[Tuple[str, Any], ...]]

STORAGE_BACKENDS = ("session", "file", "memory")

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off"}

_ENV_MAP = {
    "storage_key": "HINTS_STORAGE_KEY",
    "default_priority": "HINTS_DEFAULT_PRIORITY",
    "hints_enabled": "HINTS_ENABLED",
    "storage_backend": "HINTS_STORAGE_BACKEND",
    "storage_file": "HINTS_STORAGE_FILE",
}

_CACHE: dict[str, Any] = {
    "settings": None,
    "key": None,
}


@dataclass
class Settings:
    # Key under which the JSON array of dismissed hint ids is stored.
    storage_key: str = "wraith-hints-viewed"
    default_priority: int = 100
    hints_enabled: bool = True
    # session | file | memory
    storage_backend: str = "session"
    storage_file: str = ""

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            self.storage_backend = "session"
        if not str(self.storage_key).strip():
            self.storage_key = "wraith-hints-viewed"

    def resolved_storage_file(self) -> Path:
        if self.storage_file:
            return Path(self.storage_file).expanduser()
        return HINTS_FILE


def _cast_bool(x: Any) -> Optional[bool]:
    if isinstance(x, bool):
        return x
    text = str(x).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None


def _cast_int(x: Any) -> Optional[int]:
    if isinstance(x, bool):
        return None
    try:
        return int(str(x).strip())
    except (TypeError, ValueError):
        return None


def _cast_str(x: Any) -> Optional[str]:
    text = str(x).strip()
    return text or None


_CASTERS: Dict[str, Callable[[Any], Any]] = {
    "storage_key": _cast_str,
    "default_priority": _cast_int,
    "hints_enabled": _cast_bool,
    "storage_backend": lambda x: (_cast_str(x) or "").lower() or None,
    "storage_file": _cast_str,
}


def _read_env() -> Dict[str, Optional[str]]:
    return {k: os.getenv(v) for k, v in _ENV_MAP.items()}


def _coerce_payload(payload: Dict[str, Any], *, source: str) -> Dict[str, Any]:
    """Cast known fields and drop anything that fails to parse."""

    result: Dict[str, Any] = {}
    for key, raw in payload.items():
        caster = _CASTERS.get(key)
        if caster is None or raw is None:
            continue
        value = caster(raw)
        if value is None:
            log("envs.settings.invalid", field=key, source=source, value=str(raw))
            continue
        if key == "storage_backend" and value not in STORAGE_BACKENDS:
            log("envs.settings.invalid", field=key, source=source, value=value)
            continue
        result[key] = value
    return result


def _env_signature(env: Dict[str, Any]) -> Tuple[Tuple[str, Any], ...]:
    return tuple(sorted(env.items()))


def _load_file() -> Dict[str, Any]:
    try:
        raw = SETTINGS_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        log("envs.settings.read.error", err=str(exc), path=str(SETTINGS_FILE))
        return {}

    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        log("envs.settings.parse.error", err=str(exc), path=str(SETTINGS_FILE))
        return {}
    return payload if isinstance(payload, dict) else {}


def _file_mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def _filter_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    allowed = {f.name for f in fields(Settings)}
    return {k: v for k, v in payload.items() if k in allowed}


def _merge(*payloads: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    for payload in payloads:
        merged.update(payload)
    return merged


def _invalidate_cache() -> None:
    _CACHE["settings"] = None
    _CACHE["key"] = None


def get_settings(force_reload: bool = False) -> Settings:
    raw_env = _read_env()
    key: CacheKey = (_file_mtime(SETTINGS_FILE), _env_signature(raw_env))

    cached = _CACHE.get("settings")
    if not force_reload and cached is not None and _CACHE.get("key") == key:
        return cached

    base = asdict(Settings())
    file_payload = _coerce_payload(_filter_fields(_load_file()), source="file")
    env_payload = _coerce_payload(raw_env, source="env")
    settings = Settings(**_filter_fields(_merge(base, file_payload, env_payload)))

    _CACHE["settings"] = settings
    _CACHE["key"] = key
    return settings
