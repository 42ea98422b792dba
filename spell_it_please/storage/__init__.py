"""Persistence for user code-word overrides.

WHY: Overrides must survive restarts without slowing down typing.

HOW: kv.py provides a JSON-file key-value store (plus an in-memory one
for tests). overrides.py validates and (de)serializes the override
mapping and writes it from a background thread.

RULES:
- Loading never fails; malformed data means "no overrides"
- Saving never blocks the caller and never raises to it
"""

from spell_it_please.storage.kv import (
    JsonFileKeyValueStore,
    KeyValueStore,
    KeyValueStoreError,
    MemoryKeyValueStore,
)
from spell_it_please.storage.overrides import DEFAULT_OVERRIDES_KEY, OverrideStore

__all__ = [
    "DEFAULT_OVERRIDES_KEY",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "KeyValueStoreError",
    "MemoryKeyValueStore",
    "OverrideStore",
]
