"""Unit tests for the key-value stores and OverrideStore.

WHY: Overrides are the only user data the app keeps. A corrupt settings
file must not crash startup, a slow disk must not stall typing, and the
last edit must be the one that survives a restart.

HOW: Tests are organized by concern:
  - TestJsonFileKeyValueStore: read/write, atomic replace, bad documents
  - TestMemoryKeyValueStore: copy semantics
  - TestOverrideLoad: absent, valid, and malformed payloads
  - TestOverrideSave: round trip, snapshots, ordering, non-blocking,
    failure logging, flush/close

RULES:
- All file I/O uses tmp_path
- Tests that inspect the backend call flush() first
- Blocking backends are released in a finally block so no thread hangs
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from spell_it_please.storage.kv import (
    JsonFileKeyValueStore,
    KeyValueStore,
    KeyValueStoreError,
    MemoryKeyValueStore,
)
from spell_it_please.storage.overrides import DEFAULT_OVERRIDES_KEY, OverrideStore


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _RecordingBackend(KeyValueStore):
    """Backend that records every set() and can be made to block or fail."""

    def __init__(self) -> None:
        self.writes: List[Any] = []
        self.release = threading.Event()
        self.release.set()
        self.fail = False

    def get(self, key: str) -> Optional[Any]:
        return self.writes[-1] if self.writes else None

    def set(self, key: str, value: Any) -> None:
        self.release.wait(5)
        if self.fail:
            raise KeyValueStoreError("disk full")
        self.writes.append(value)


def _writer_threads() -> List[threading.Thread]:
    return [t for t in threading.enumerate() if t.name == "override-writer"]


def _file_store(tmp_path, payload) -> OverrideStore:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({DEFAULT_OVERRIDES_KEY: payload}), encoding="utf-8")
    return OverrideStore(JsonFileKeyValueStore(path))


# ---------------------------------------------------------------------------
# TestJsonFileKeyValueStore
# ---------------------------------------------------------------------------


class TestJsonFileKeyValueStore:

    def test_missing_file_returns_none(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "absent.json")
        assert store.get("anything") is None

    def test_set_then_get(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "settings.json")
        store.set("AlphabetCache", {"a": "Apple"})
        assert store.get("AlphabetCache") == {"a": "Apple"}

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "settings.json"
        JsonFileKeyValueStore(path).set("k", "v")
        assert path.is_file()

    def test_other_keys_preserved(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "settings.json")
        store.set("theme", "dark")
        store.set("AlphabetCache", {"b": "Bob"})
        assert store.get("theme") == "dark"

    def test_non_ascii_written_escaped(self, tmp_path):
        path = tmp_path / "settings.json"
        store = JsonFileKeyValueStore(path)
        store.set("AlphabetCache", {"€": "Euro"})
        assert "\\u20ac" in path.read_text(encoding="utf-8")
        assert store.get("AlphabetCache") == {"€": "Euro"}

    def test_lone_surrogate_round_trips(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "settings.json")
        store.set("k", "\ud83d")
        assert store.get("k") == "\ud83d"

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "settings.json")
        store.set("a", 1)
        store.set("a", 2)
        assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(KeyValueStoreError):
            JsonFileKeyValueStore(path).get("a")

    def test_deeply_nested_document_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        with pytest.raises(KeyValueStoreError):
            JsonFileKeyValueStore(path).get("a")

    def test_non_object_document_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(KeyValueStoreError):
            JsonFileKeyValueStore(path).get("a")

    def test_set_replaces_unreadable_document(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("garbage", encoding="utf-8")
        store = JsonFileKeyValueStore(path)
        store.set("a", "b")
        assert store.get("a") == "b"


# ---------------------------------------------------------------------------
# TestMemoryKeyValueStore
# ---------------------------------------------------------------------------


class TestMemoryKeyValueStore:

    def test_values_are_copied(self):
        store = MemoryKeyValueStore()
        value = {"a": "Apple"}
        store.set("k", value)
        value["a"] = "changed"
        assert store.get("k") == {"a": "Apple"}

    def test_initial_values(self):
        assert MemoryKeyValueStore({"k": 1}).get("k") == 1


# ---------------------------------------------------------------------------
# TestOverrideLoad
# ---------------------------------------------------------------------------


class TestOverrideLoad:
    """load() returns a mapping or None, never raises."""

    def test_nothing_saved(self, override_store):
        assert override_store.load() is None

    def test_valid_payload(self, tmp_path):
        store = _file_store(tmp_path, {"a": "Apple", "€": "Euro", " ": ""})
        assert store.load() == {"a": "Apple", "€": "Euro", " ": ""}

    def test_grapheme_cluster_key_accepted(self, tmp_path):
        store = _file_store(tmp_path, {"e\u0301": "E acute"})
        assert store.load() == {"e\u0301": "E acute"}

    @pytest.mark.parametrize("payload", [
        ["a", "Apple"],
        "Apple",
        42,
        {"a": 1},
        {"a": None},
        {"": "Empty"},
        {"ab": "Two letters"},
        {"\ud83d": "Half"},
        {"a": "\ud83d"},
    ])
    def test_malformed_payload_is_absent(self, tmp_path, payload):
        assert _file_store(tmp_path, payload).load() is None

    def test_corrupt_file_is_absent(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding="utf-8")
        store = OverrideStore(JsonFileKeyValueStore(path))
        with caplog.at_level(logging.WARNING):
            assert store.load() is None
        assert "using defaults" in caplog.text

    def test_deeply_nested_file_is_absent(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        nested = "[" * 100000 + "]" * 100000
        path.write_text('{"AlphabetCache": ' + nested + "}", encoding="utf-8")
        store = OverrideStore(JsonFileKeyValueStore(path))
        with caplog.at_level(logging.WARNING):
            assert store.load() is None
        assert "using defaults" in caplog.text

    def test_unexpected_backend_error_is_absent(self, caplog):
        backend = MagicMock(spec=KeyValueStore)
        backend.get.side_effect = RuntimeError("backend gone")
        with caplog.at_level(logging.WARNING):
            assert OverrideStore(backend).load() is None
        assert "using defaults" in caplog.text

    def test_custom_key(self, memory_backend):
        memory_backend.set("Custom", {"x": "X-ray"})
        assert OverrideStore(memory_backend, key="Custom").load() == {"x": "X-ray"}
        assert OverrideStore(memory_backend).load() is None


# ---------------------------------------------------------------------------
# TestOverrideSave
# ---------------------------------------------------------------------------


class TestOverrideSave:
    """save() snapshots and writes in the background, last write wins."""

    def test_round_trip(self, override_store):
        mapping = {"a": "Apple", "\U0001f600": "Smiley", "e\u0301": "E acute"}
        override_store.save(mapping)
        assert override_store.flush(timeout=5)
        assert override_store.load() == mapping

    def test_round_trip_through_file(self, tmp_path):
        store = OverrideStore(JsonFileKeyValueStore(tmp_path / "settings.json"))
        try:
            store.save({"£": "Quid", "z": "Zebra"})
            assert store.flush(timeout=5)
        finally:
            store.close(timeout=5)

        reopened = OverrideStore(JsonFileKeyValueStore(tmp_path / "settings.json"))
        assert reopened.load() == {"£": "Quid", "z": "Zebra"}

    def test_save_replaces_not_merges(self, override_store):
        override_store.save({"a": "Apple", "b": "Bob"})
        override_store.save({"c": "Cat"})
        assert override_store.flush(timeout=5)
        assert override_store.load() == {"c": "Cat"}

    def test_mapping_copied_at_call_time(self):
        backend = _RecordingBackend()
        backend.release.clear()
        store = OverrideStore(backend)
        try:
            mapping = {"a": "Apple"}
            store.save(mapping)
            mapping["a"] = "Mutated"
        finally:
            backend.release.set()
        assert store.flush(timeout=5)
        store.close(timeout=5)
        assert backend.writes == [{"a": "Apple"}]

    def test_saves_applied_in_order(self):
        backend = _RecordingBackend()
        store = OverrideStore(backend)
        for i in range(20):
            store.save({"a": str(i)})
        assert store.flush(timeout=5)
        store.close(timeout=5)
        assert [w["a"] for w in backend.writes] == [str(i) for i in range(20)]

    def test_save_does_not_block(self):
        backend = _RecordingBackend()
        backend.release.clear()
        store = OverrideStore(backend)
        try:
            store.save({"a": "Apple"})
            assert backend.writes == []
            assert store.flush(timeout=0.05) is False
        finally:
            backend.release.set()
        assert store.flush(timeout=5)
        store.close(timeout=5)
        assert backend.writes == [{"a": "Apple"}]

    def test_write_failure_is_logged_not_raised(self, caplog):
        backend = _RecordingBackend()
        backend.fail = True
        store = OverrideStore(backend)
        with caplog.at_level(logging.ERROR):
            store.save({"a": "Apple"})
            assert store.flush(timeout=5)
        store.close(timeout=5)
        assert "Failed to save 1 code-word overrides" in caplog.text

    def test_writer_keeps_running_after_failure(self):
        backend = _RecordingBackend()
        backend.fail = True
        store = OverrideStore(backend)
        store.save({"a": "Apple"})
        assert store.flush(timeout=5)
        backend.fail = False
        store.save({"b": "Bob"})
        assert store.flush(timeout=5)
        store.close(timeout=5)
        assert backend.writes == [{"b": "Bob"}]

    def test_flush_without_saves(self, override_store):
        assert override_store.flush(timeout=1)
        assert override_store.flush()

    def test_close_then_save_restarts_writer(self, override_store):
        override_store.save({"a": "1"})
        assert override_store.close(timeout=5)
        override_store.save({"a": "2"})
        assert override_store.flush(timeout=5)
        assert override_store.load() == {"a": "2"}

    def test_late_save_after_timed_out_close_keeps_one_writer(self):
        backend = _RecordingBackend()
        backend.release.clear()
        store = OverrideStore(backend)
        writers = len(_writer_threads())
        try:
            store.save({"a": "1"})
            assert store.close(timeout=0.05) is False
            store.save({"a": "2"})
            assert len(_writer_threads()) == writers + 1
        finally:
            backend.release.set()
        assert store.flush(timeout=5)
        assert store.close(timeout=5)
        assert backend.writes == [{"a": "1"}, {"a": "2"}]
        assert len(_writer_threads()) == writers

    def test_timed_out_flush_starts_no_threads(self):
        backend = _RecordingBackend()
        backend.release.clear()
        store = OverrideStore(backend)
        try:
            store.save({"a": "Apple"})
            threads = threading.active_count()
            for _ in range(3):
                assert store.flush(timeout=0.01) is False
            assert threading.active_count() == threads
        finally:
            backend.release.set()
        assert store.flush(timeout=5)
        store.close(timeout=5)
