
from __future__ import annotations

import json
import threading
import time
import traceback
from types import TracebackType
from typing import Any, Iterable, Iterator, Mapping

from .file_io import atomic_write_text, tail_lines
from .paths import LOG_DIR

LOG_FILE = LOG_DIR / "app.log"
ERROR_LOG_FILE = LOG_DIR / "error.log"

# Retention limits; tests shrink them through monkeypatching.
MAX_LOG_BYTES = 2_000_000
RETAIN_LOG_LINES = 2_000
MAX_ERROR_LOG_BYTES = 1_000_000
ERROR_RETAIN_LOG_LINES = 1_000

_LOCK = threading.RLock()

_SEVERITY_KEYWORDS = {
    "critical": "critical",
    "fatal": "critical",
    "error": "error",
    "fail": "error",
    "exception": "error",
    "warn": "warning",
    "warning": "warning",
    "invalid": "warning",
}

_SENSITIVE_KEYWORDS = ("secret", "token", "password", "apikey", "api_key")

_ERROR_SEVERITIES = {"error", "critical"}


def _normalise_limit(value: int | str | None, fallback: int) -> int:
    try:
        limit = int(value) if value is not None else fallback
    except (TypeError, ValueError):
        limit = fallback
    return max(limit, 0)


def _iter_json_lines(
    lines: Iterable[str], *, drop_invalid: bool
) -> Iterator[tuple[str, Any | None]]:
    """Yield ``(raw, parsed)`` pairs for JSON lines, tolerating blanks."""

    for raw in lines:
        text = raw.strip()
        if not text:
            if drop_invalid:
                continue
            yield raw, None
            continue

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            if drop_invalid:
                continue
            raise ValueError(f"invalid JSON log line: {raw!r}") from None

        yield raw, parsed


def _is_sensitive_key(key: object) -> bool:
    if not isinstance(key, str):
        return False
    lowered = key.strip().lower()
    return any(token in lowered for token in _SENSITIVE_KEYWORDS)


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return _sanitize_mapping(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_sanitize_value(item) for item in value), key=str)
    return value


def _sanitize_mapping(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in mapping.items():
        key_text = str(key)
        if _is_sensitive_key(key_text):
            cleaned[key_text] = "***"
            continue
        cleaned[key_text] = _sanitize_value(value)
    return cleaned


def _prune_log_file(
    path, *, max_bytes: int, retain_lines: int
) -> None:
    """Keep only the newest ``retain_lines`` records once ``path`` grows too big."""

    if max_bytes <= 0 or retain_lines <= 0:
        return
    try:
        size = path.stat().st_size
    except OSError:
        return

    if size <= max_bytes:
        return

    tail = tail_lines(path, retain_lines, drop_blank=True)
    cleaned = [raw for raw, _ in _iter_json_lines(tail, drop_invalid=True)]
    text = "\n".join(cleaned) + "\n" if cleaned else ""
    atomic_write_text(path, text, encoding="utf-8")


def _derive_severity(event: str, explicit: str | None) -> str:
    if explicit:
        return explicit.lower()

    tokens = [part.lower() for part in event.replace("-", ".").split(".") if part]
    for token in tokens:
        mapped = _SEVERITY_KEYWORDS.get(token)
        if mapped:
            return mapped
    lowered = event.lower()
    for keyword, mapped in _SEVERITY_KEYWORDS.items():
        if keyword in lowered:
            return mapped
    return "info"


def _normalise_exception(
    exc: BaseException | tuple[type[BaseException], BaseException, TracebackType] | None,
) -> dict[str, Any] | None:
    if exc is None:
        return None

    if isinstance(exc, tuple):
        exc_type, exc_value, tb = exc
    else:
        exc_type = type(exc)
        exc_value = exc
        tb = exc.__traceback__

    if exc_type is None or exc_value is None:
        return None

    return {
        "type": f"{exc_type.__module__}.{exc_type.__name__}",
        "message": str(exc_value),
        "traceback": "".join(traceback.format_exception(exc_type, exc_value, tb)),
    }


def _append_record(path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text + "\n")


def log(
    event: str,
    *,
    severity: str | None = None,
    exc: BaseException | tuple[type[BaseException], BaseException, TracebackType] | None = None,
    **payload: Any,
) -> None:
    """Append a JSON record with ``event`` and ``payload`` to the log file."""

    record: dict[str, Any] = {
        "ts": int(time.time() * 1000),
        "event": event,
        "severity": _derive_severity(event, severity),
        "thread": threading.current_thread().name,
        "payload": _sanitize_mapping(payload),
    }

    exception_payload = _normalise_exception(exc)
    if exception_payload is not None:
        record["exception"] = exception_payload

    text = json.dumps(record, ensure_ascii=False, default=str)

    with _LOCK:
        _append_record(LOG_FILE, text)
        _prune_log_file(LOG_FILE, max_bytes=MAX_LOG_BYTES, retain_lines=RETAIN_LOG_LINES)

        if record["severity"] in _ERROR_SEVERITIES:
            _append_record(ERROR_LOG_FILE, text)
            _prune_log_file(
                ERROR_LOG_FILE,
                max_bytes=MAX_ERROR_LOG_BYTES,
                retain_lines=ERROR_RETAIN_LOG_LINES,
            )


def read_tail(
    n: int | str = 1000,
    *,
    parse: bool = False,
    drop_invalid: bool = True,
) -> list[Any]:
    """Return the tail of the log file, optionally parsed as JSON objects."""

    limit = _normalise_limit(n, 1000)
    if limit <= 0:
        return []

    lines = tail_lines(LOG_FILE, limit)

    if not parse:
        return lines

    return [
        parsed
        for _, parsed in _iter_json_lines(lines, drop_invalid=drop_invalid)
        if parsed is not None
    ]
