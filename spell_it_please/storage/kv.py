"""Simple durable key-value stores for application settings.

WHY: Overrides must survive restarts, but a database would be far more
than the app needs. A "user defaults" style store (one document holding
a handful of keyed values) is enough and easy to inspect by hand.

HOW: KeyValueStore is a two-method ABC. JsonFileKeyValueStore keeps all
keys in a single JSON object on disk and rewrites the whole document on
every set(). MemoryKeyValueStore keeps values in a dict for tests and
ephemeral sessions.

RULES:
- get() returns None for keys that were never set (and for a missing file)
- set() replaces the stored value for that key; other keys are preserved
- File writes are atomic: temp file in the same directory + os.replace
- set() calls are serialized with a threading.Lock
- An unreadable or non-object document raises KeyValueStoreError
- Non-ASCII text is written as \\u escapes, so any Python str round-trips
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStoreError(Exception):
    """Raised when the backing document cannot be read or written."""


class KeyValueStore(ABC):
    """Abstract base for settings stores keyed by plain strings."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the JSON-compatible value stored under ``key``, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under ``key``, replacing any prior value."""


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; values are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = copy.deepcopy(value)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as one JSON object in a file.

    WHY: Mirrors how desktop apps keep small preferences: a single file
    in the user's home directory that can be deleted to reset the app.

    HOW: get() re-reads the document each time (it is tiny and only read
    at startup). set() reads, updates one key, and writes the document to
    a temp file that then atomically replaces the original.

    RULES:
    - Parent directories are created on first write
    - A concurrent reader sees either the old or the new document, never
      a partial one
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        return self._read_document().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            try:
                document = self._read_document()
            except KeyValueStoreError:
                logger.warning("Replacing unreadable settings file: %s", self._path)
                document = {}
            document[key] = value
            self._write_document(document)

    def _read_document(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError, RecursionError) as exc:
            raise KeyValueStoreError(
                "Cannot read settings file {}: {}".format(self._path, exc)
            ) from exc
        if not isinstance(document, dict):
            raise KeyValueStoreError(
                "Settings file {} does not contain a JSON object".format(self._path)
            )
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=".{}.".format(self._path.name),
                suffix=".tmp",
                dir=str(self._path.parent),
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise KeyValueStoreError(
                "Cannot write settings file {}: {}".format(self._path, exc)
            ) from exc
