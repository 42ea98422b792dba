"""Persistence of user code-word overrides.

WHY: Users tune code words ("Alpha" instead of "Alfa", a colleague's
name for "k") and expect those choices to survive a restart. The edit
path runs on every keystroke in the UI thread, so writing to disk must
never block it.

HOW: OverrideStore sits on top of a KeyValueStore and keeps the whole
override mapping under one fixed key. load() validates the stored
payload with jsonschema. save() snapshots the mapping and puts it on a
queue drained by a single daemon writer thread, so saves land on disk
in submission order and the last full write wins.

RULES:
- load() never raises; absent or malformed data returns None
- Every key of a valid payload is exactly one grapheme
- save() copies the mapping at call time and returns immediately
- Each save replaces the stored mapping completely (no merge)
- Write failures are logged and dropped; they never reach the caller
- At most one writer thread drains the queue at any time
- The writer thread is a daemon: pending saves may be lost on exit
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Dict, Mapping, Optional

import jsonschema

from spell_it_please.core.text import is_single_character, is_well_formed
from spell_it_please.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDES_KEY = "AlphabetCache"

OVERRIDES_SCHEMA: Dict[str, object] = {
    "type": "object",
    "propertyNames": {"type": "string", "minLength": 1},
    "additionalProperties": {"type": "string"},
}
"""JSON Schema for the persisted payload: character → code word."""

# Queue sentinel that tells the writer thread to exit.
_STOP = object()


class OverrideStore:
    """Loads and saves the character → code-word override mapping.

    WHY: The converter should not know where overrides live. Injecting
    this store keeps persistence swappable and lets tests use an
    in-memory backend or a mock.

    HOW: Reads go straight to the backend. Writes are queued for a
    lazily started writer thread that owns every backend write.

    RULES:
    - Characters are stored as their plain string form (JSON object keys)
    - flush() waits for all queued saves; close() flushes and stops the
      writer
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = DEFAULT_OVERRIDES_KEY,
    ) -> None:
        self._backend = backend
        self._key = key
        self._queue: queue.Queue = queue.Queue()
        self._writer: Optional[threading.Thread] = None
        self._writer_lock = threading.Lock()

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Optional[Dict[str, str]]:
        """Return the persisted overrides, or None if absent or malformed.

        WHY: A corrupt or hand-edited settings file must never stop the
        app from starting; the built-in alphabet is always a safe fallback.

        HOW: Reads the payload from the backend, validates it against
        OVERRIDES_SCHEMA, then checks that every key is a single grapheme.

        RULES:
        - Never raises
        - Returns a fresh dict the caller may mutate
        """
        try:
            payload = self._backend.get(self._key)
        except Exception:
            logger.warning("Could not read saved overrides; using defaults", exc_info=True)
            return None

        if payload is None:
            return None

        try:
            jsonschema.validate(instance=payload, schema=OVERRIDES_SCHEMA)
        except jsonschema.ValidationError as exc:
            logger.warning("Ignoring malformed saved overrides: %s", exc.message)
            return None

        invalid = [key for key in payload if not is_single_character(key)]
        if invalid:
            logger.warning(
                "Ignoring saved overrides with multi-character keys: %r", invalid[:5]
            )
            return None

        if not all(is_well_formed(word) for word in payload.values()):
            logger.warning("Ignoring saved overrides with unencodable code words")
            return None

        logger.info("Loaded %d saved code-word overrides", len(payload))
        return dict(payload)

    def save(self, mapping: Mapping[str, str]) -> None:
        """Queue a full replacement of the stored overrides.

        The mapping is copied before this method returns, so the caller
        may keep mutating its own dict.
        """
        snapshot = dict(mapping)
        with self._writer_lock:
            self._ensure_writer()
            self._queue.put(snapshot)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Block until all queued saves are written.

        Args:
            timeout: Maximum seconds to wait, or None to wait indefinitely.

        Returns:
            True if the queue drained, False if the timeout expired first.
        """
        drained = self._queue.all_tasks_done
        with drained:
            return drained.wait_for(lambda: not self._queue.unfinished_tasks, timeout)

    def close(self, timeout: Optional[float] = None) -> bool:
        """Flush pending saves and stop the writer thread.

        Returns:
            True if the writer exited, False if the timeout expired first.
            A writer that outlives the timeout keeps draining the queue and
            exits once it is empty.
        """
        with self._writer_lock:
            writer = self._writer
            if writer is None:
                return True
            self._queue.put(_STOP)
        writer.join(timeout)
        return not writer.is_alive()

    def _ensure_writer(self) -> None:
        # Caller holds _writer_lock.
        if self._writer is not None and self._writer.is_alive():
            return
        self._writer = threading.Thread(
            target=self._run_writer,
            name="override-writer",
            daemon=True,
        )
        self._writer.start()

    def _run_writer(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    # Saves queued after the stop request keep this writer alive.
                    with self._writer_lock:
                        if self._queue.empty():
                            self._writer = None
                            return
                    continue
                self._write(item)
            finally:
                self._queue.task_done()

    def _write(self, snapshot: Dict[str, str]) -> None:
        try:
            self._backend.set(self._key, snapshot)
        except Exception:
            logger.exception("Failed to save %d code-word overrides", len(snapshot))
        else:
            logger.debug("Saved %d code-word overrides", len(snapshot))
