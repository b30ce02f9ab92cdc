"""Filesystem primitives shared by the log writer and the file storage backend.

Both the JSON-lines log and :class:`~hint_app.hints.storage.JsonFileStorage`
rewrite whole files. Writes go through a temporary file in the same
directory followed by :func:`os.replace`, so readers never observe a
truncated document even when the process dies mid-write.
"""

from __future__ import annotations

from pathlib import Path
import contextlib
import os
import tempfile

__all__ = ["atomic_write_text", "ensure_directory", "tail_lines"]


def ensure_directory(path: Path | str) -> Path:
    """Create ``path`` (and parents) if needed and return it as a :class:`Path`."""

    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def atomic_write_text(
    path: Path | str,
    text: str,
    *,
    encoding: str = "utf-8",
    fsync: bool = False,
) -> None:
    """Replace the contents of ``path`` with ``text`` in one step.

    Parameters
    ----------
    path:
        Destination file. Missing parent directories are created.
    text:
        New file contents.
    encoding:
        Text encoding, UTF-8 by default.
    fsync:
        Flush the temporary file to disk before the rename.
    """

    destination = Path(path)
    ensure_directory(destination.parent)

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding=encoding, delete=False, dir=destination.parent
        ) as handle:
            handle.write(text)
            handle.flush()
            if fsync:
                os.fsync(handle.fileno())
            tmp_name = handle.name

        os.replace(tmp_name, destination)
    except Exception:
        if tmp_name:
            with contextlib.suppress(FileNotFoundError):
                os.remove(tmp_name)
        raise


def tail_lines(
    path: Path | str,
    limit: int | None = None,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
    drop_blank: bool = False,
) -> list[str]:
    """Return up to ``limit`` trailing lines of ``path`` without newlines.

    Missing files yield an empty list. ``limit=None`` returns every line.
    """

    target = Path(path)
    if not target.exists():
        return []
    if limit is not None and limit <= 0:
        return []

    with target.open("r", encoding=encoding, errors=errors) as handle:
        lines = [line.rstrip("\r\n") for line in handle]

    if drop_blank:
        lines = [line for line in lines if line.strip()]

    if limit is not None:
        lines = lines[-limit:]
    return lines
