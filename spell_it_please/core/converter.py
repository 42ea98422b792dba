"""Phonetic alphabet converter: the engine behind every spelled row.

WHY: The presentation layer needs one object that answers "how do I
spell this character right now?", accepts user edits to that answer,
and renders the whole input for the clipboard. Keeping overrides and
defaults behind this single seam means the UI never touches persistence
or the built-in table directly.

HOW: The converter owns a mutable override dict and reads through a
ChainMap of (overrides, defaults), so the active code word is always
the override if one exists, else the default. Edits mutate the override
dict in place and hand a snapshot to the injected OverrideStore, which
writes it in the background.

RULES:
- Reads and writes use the same key normalization (lowercase), so an
  edit made on "A" is visible when converting "a" and vice versa
- convert() has no side effects and never performs I/O
- update_code_word() is visible to convert() immediately; persistence
  is eventually consistent
- Overrides are never removed; reverting stores the default value as
  an override
- Only one logical owner (the UI thread) mutates the converter
"""

from __future__ import annotations

import logging
from collections import ChainMap
from typing import Dict, List, Mapping, Optional

from spell_it_please.core.alphabet import DEFAULT_ALPHABET, normalize_for_lookup
from spell_it_please.core.models import PhoneticRepresentation
from spell_it_please.core.text import is_single_character, is_well_formed, split_characters
from spell_it_please.formatters.transcript import TranscriptFormatter
from spell_it_please.storage.overrides import OverrideStore

logger = logging.getLogger(__name__)


class PhoneticConverter:
    """Converts characters to code words, layering user overrides over defaults.

    Args:
        store: Where overrides are loaded from and saved to. None keeps
               overrides in memory only.
        default_alphabet: The built-in table. Defaults to DEFAULT_ALPHABET.
    """

    def __init__(
        self,
        store: Optional[OverrideStore] = None,
        default_alphabet: Mapping[str, str] = DEFAULT_ALPHABET,
    ) -> None:
        self._store = store
        self._defaults = default_alphabet
        self._overrides: Dict[str, str] = {}
        self._formatter = TranscriptFormatter()

        if store is not None:
            saved = store.load()
            if saved:
                for character, code_word in saved.items():
                    self._overrides[normalize_for_lookup(character)] = code_word

        self._current: ChainMap = ChainMap(self._overrides, self._defaults)

    @property
    def overrides(self) -> Dict[str, str]:
        """A copy of the user overrides, keyed by normalized character."""
        return dict(self._overrides)

    @property
    def current_alphabet(self) -> Dict[str, str]:
        """A flattened copy of the active alphabet (defaults + overrides)."""
        return dict(self._current)

    def convert(self, character: str) -> PhoneticRepresentation:
        """Look up the active and default code words for one character.

        Args:
            character: A single user-perceived character, any case.

        Returns:
            PhoneticRepresentation carrying the original character; both
            code-word fields are None when the character is unmapped.
        """
        normalized = normalize_for_lookup(character)
        return PhoneticRepresentation(
            character=character,
            code_word=self._current.get(normalized),
            default_code_word=self._defaults.get(normalized),
        )

    def convert_text(self, text: str) -> List[PhoneticRepresentation]:
        """Convert every character of ``text``, in order."""
        return [self.convert(character) for character in split_characters(text)]

    def update_code_word(self, character: str, new_code_word: str) -> None:
        """Set the code word for a character and persist all overrides.

        WHY: Called on every keystroke in a row's edit field, so the new
        word must show up immediately while disk I/O happens elsewhere.

        HOW: Writes the override under the normalized key, then passes
        the override dict to the store, which snapshots it and writes in
        the background.

        RULES:
        - ``character`` must be exactly one grapheme
        - ``new_code_word`` must be a string (may be empty) that can be
          saved, so lone surrogates are refused in either argument
        - Setting the default value still records an override entry

        Raises:
            ValueError: If ``character`` is not exactly one grapheme, or
                ``new_code_word`` holds a lone surrogate.
            TypeError: If ``new_code_word`` is not a string.
        """
        if not isinstance(new_code_word, str):
            raise TypeError(
                "Code word must be a string, got {}".format(type(new_code_word).__name__)
            )
        if not is_single_character(character):
            raise ValueError(
                "Expected a single character, got {!r}".format(character)
            )
        if not is_well_formed(new_code_word):
            raise ValueError(
                "Code word cannot be saved: {!r}".format(new_code_word)
            )

        self._overrides[normalize_for_lookup(character)] = new_code_word

        if self._store is not None:
            self._store.save(self._overrides)

    def get_clipboard_copyable_representation_of(self, text: str) -> str:
        """Render ``text`` as one "<CHARACTER>: <code word>" line per character.

        Example:
            >>> PhoneticConverter().get_clipboard_copyable_representation_of("Hi!")
            'H: Hotel\\nI: India\\n!: Exclamation mark\\n'
        """
        return self._formatter.format(self.convert_text(text))
