"""Shared test fixtures for the spell_it_please test suite.

WHY: Most test modules need a converter wired to a store, and many need
to inspect what the store wrote. Centralizing the wiring keeps tests
focused on behavior instead of setup.

HOW: Fixtures provide an in-memory key-value store, an OverrideStore on
top of it (closed after the test so no writer thread outlives it), a
converter with no persistence, and a converter backed by the store.

RULES:
- No fixture touches the user's real settings file
- File-backed tests build their own stores under tmp_path
"""

import pytest

from spell_it_please.core.converter import PhoneticConverter
from spell_it_please.storage.kv import MemoryKeyValueStore
from spell_it_please.storage.overrides import OverrideStore


@pytest.fixture
def memory_backend():
    """Empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def override_store(memory_backend):
    """OverrideStore over the in-memory backend; writer stopped on teardown."""
    store = OverrideStore(memory_backend)
    yield store
    store.close(timeout=5)


@pytest.fixture
def converter():
    """Converter with the built-in alphabet and no persistence."""
    return PhoneticConverter()


@pytest.fixture
def persistent_converter(override_store):
    """Converter that saves its overrides through override_store."""
    return PhoneticConverter(override_store)
