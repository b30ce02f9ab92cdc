from __future__ import annotations

import json
import os

from hint_app.hints.storage import JsonFileStorage, MemoryStorage
from hint_app.hints.viewed_store import DEFAULT_STORAGE_KEY, ViewedStore


class ExplodingStorage:
    def __init__(self):
        self.set_calls = 0

    def get(self, key):
        raise OSError("storage disabled")

    def set(self, key, value):
        self.set_calls += 1
        raise OSError("quota exceeded")


def test_memory_storage_round_trip():
    storage = MemoryStorage({"x": "1"})
    assert storage.get("x") == "1"
    assert storage.get("missing") is None
    storage.set("x", "2")
    assert storage.get("x") == "2"


def test_viewed_store_uses_single_json_array_key():
    storage = MemoryStorage()
    store = ViewedStore(storage)

    store.save(["hint-a", "hint-b"])

    assert store.key == DEFAULT_STORAGE_KEY == "wraith-hints-viewed"
    assert json.loads(storage.get("wraith-hints-viewed")) == ["hint-a", "hint-b"]
    assert store.load() == {"hint-a", "hint-b"}


def test_viewed_store_load_degrades_to_empty():
    assert ViewedStore(MemoryStorage()).load() == set()
    assert ViewedStore(MemoryStorage({"k": "{not json"}), "k").load() == set()
    assert ViewedStore(MemoryStorage({"k": '{"hint": true}'}), "k").load() == set()
    assert ViewedStore(MemoryStorage({"k": '"hint"'}), "k").load() == set()
    assert ViewedStore(MemoryStorage({"k": ""}), "k").load() == set()


def test_viewed_store_load_keeps_order_and_ignores_junk_items():
    storage = MemoryStorage({"k": json.dumps(["b", 3, "a", None, "b", {"x": 1}])})
    store = ViewedStore(storage, "k")

    assert store.load_ordered() == ["b", "a"]
    assert store.load() == {"a", "b"}


def test_viewed_store_swallows_backend_failures(_isolated_logs):
    storage = ExplodingStorage()
    store = ViewedStore(storage)

    assert store.load() == set()
    store.save({"hint"})

    assert storage.set_calls == 1
    events = [json.loads(line)["event"] for line in _isolated_logs.read_text(encoding="utf-8").splitlines()]
    assert events == ["hints.store.load.error", "hints.store.save.error"]


def test_json_file_storage_round_trip(tmp_path):
    path = tmp_path / "nested" / "hints.json"
    storage = JsonFileStorage(path)

    assert storage.get("k") is None
    storage.set("k", '["a"]')

    assert JsonFileStorage(path).get("k") == '["a"]'
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": '["a"]'}


def test_json_file_storage_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "hints.json"
    path.write_text("{broken", encoding="utf-8")
    storage = JsonFileStorage(path)

    assert storage.get("k") is None
    storage.set("k", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "[]"}


def test_json_file_storage_reloads_external_changes(tmp_path):
    path = tmp_path / "hints.json"
    storage = JsonFileStorage(path)
    storage.set("k", '["a"]')

    path.write_text(json.dumps({"k": '["a", "b"]'}), encoding="utf-8")
    stat = path.stat()
    os.utime(path, (stat.st_atime + 10, stat.st_mtime + 10))

    assert storage.get("k") == '["a", "b"]'


def test_viewed_store_survives_unwritable_log_directory(tmp_path, monkeypatch):
    from hint_app.utils import log as log_module

    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(log_module, "LOG_FILE", blocker / "app.log")
    monkeypatch.setattr(log_module, "ERROR_LOG_FILE", blocker / "error.log")

    store = ViewedStore(ExplodingStorage())

    assert store.load() == set()
    store.save(["hint"])
    assert ViewedStore(MemoryStorage({"k": "{not json"}), "k").load_ordered() == []
