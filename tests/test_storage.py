"""Tests for key/value preference storage."""

import json
import logging

from core.storage import JsonFileStore, MemoryStore


class TestMemoryStore:
    def test_get_set(self):
        store = MemoryStore()

        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_initial_values_are_copied(self):
        initial = {"k": "v"}
        store = MemoryStore(initial)

        store.set("k", "changed")

        assert initial == {"k": "v"}


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "prefs.json")

        assert store.get("anything") is None
        assert not (tmp_path / "prefs.json").exists()

    def test_set_writes_json_object(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JsonFileStore(path)

        store.set("leaderboard_json", "[]")
        store.set("other", "x")

        assert json.loads(path.read_text(encoding="utf-8")) == {"leaderboard_json": "[]", "other": "x"}

    def test_values_survive_reopen(self, tmp_path):
        path = tmp_path / "prefs.json"
        JsonFileStore(path).set("name", "プレイヤー")

        assert JsonFileStore(path).get("name") == "プレイヤー"

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "prefs.json"

        JsonFileStore(path).set("k", "v")

        assert path.exists()

    def test_leaves_no_temp_files(self, tmp_path):
        store = JsonFileStore(tmp_path / "prefs.json")

        store.set("a", "1")
        store.set("b", "2")

        assert [p.name for p in tmp_path.iterdir()] == ["prefs.json"]

    def test_corrupt_file_loads_empty(self, tmp_path, caplog):
        path = tmp_path / "prefs.json"
        path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            store = JsonFileStore(path)

        assert store.get("k") is None
        assert "not valid JSON" in caplog.text

    def test_non_utf8_file_loads_empty(self, tmp_path, caplog):
        path = tmp_path / "prefs.json"
        path.write_bytes(b'{"leaderboard_json": "\xff\xfe garbage"}')

        with caplog.at_level(logging.WARNING):
            store = JsonFileStore(path)

        assert store.get("leaderboard_json") is None
        assert "not UTF-8" in caplog.text

    def test_non_utf8_file_is_replaced_on_next_write(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_bytes(b"\xff\xfe")
        store = JsonFileStore(path)

        store.set("k", "v")

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_deeply_nested_file_loads_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

        assert JsonFileStore(path).get("k") is None

    def test_non_object_file_loads_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert JsonFileStore(path).get("0") is None

    def test_non_string_values_are_dropped(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"good": "yes", "bad": 3}), encoding="utf-8")
        store = JsonFileStore(path)

        assert store.get("good") == "yes"
        assert store.get("bad") is None

    def test_write_failure_is_logged_not_raised(self, tmp_path, monkeypatch, caplog):
        store = JsonFileStore(tmp_path / "prefs.json")

        def fail():
            raise OSError("disk full")

        monkeypatch.setattr(store, "_write", fail)
        with caplog.at_level(logging.ERROR):
            store.set("k", "v")

        assert store.get("k") == "v"
        assert "Failed to write preferences" in caplog.text
