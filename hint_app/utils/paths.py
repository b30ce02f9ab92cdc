from __future__ import annotations
from pathlib import Path
from typing import Mapping
import os
import re


PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DATA_DIR = PACKAGE_ROOT / "_data"

# Profiles that share the default data directory.
_DEFAULT_PROFILES = {"default", "prod", "production"}


def profile_name(raw: str | None) -> str | None:
    """Directory-safe name for ``HINTAPP_ENV``, or None for the default profile."""

    text = (raw or "").strip().lower()
    if not text or text in _DEFAULT_PROFILES:
        return None
    return re.sub(r"[^a-z0-9_.-]", "-", text)


def data_dir_for(env: Mapping[str, str]) -> Path:
    override = env.get("HINTAPP_DATA_DIR")
    if override:
        return Path(override).expanduser()
    profile = profile_name(env.get("HINTAPP_ENV"))
    if profile is None:
        return DEFAULT_DATA_DIR
    return DEFAULT_DATA_DIR / "profiles" / profile


DATA_DIR = data_dir_for(os.environ)
LOG_DIR = DATA_DIR / "logs"
CACHE_DIR = DATA_DIR / "cache"

for d in (LOG_DIR, CACHE_DIR):
    d.mkdir(parents=True, exist_ok=True)

SETTINGS_FILE = DATA_DIR / "settings.json"
HINTS_FILE = CACHE_DIR / "hints.json"
