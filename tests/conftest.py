import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("HINTAPP_ENV", "test")

# Ensure the project root is on sys.path for module imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hint_app.utils import envs as envs_module  # noqa: E402
from hint_app.utils import log as log_module  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path, monkeypatch):
    log_file = tmp_path / "logs" / "app.log"
    monkeypatch.setattr(log_module, "LOG_FILE", log_file)
    monkeypatch.setattr(log_module, "ERROR_LOG_FILE", tmp_path / "logs" / "error.log")
    return log_file


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    for env_key in envs_module._ENV_MAP.values():
        monkeypatch.delenv(env_key, raising=False)
    monkeypatch.setattr(envs_module, "SETTINGS_FILE", tmp_path / "settings.json")
    envs_module._invalidate_cache()
    yield
    envs_module._invalidate_cache()
