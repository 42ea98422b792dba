"""Presentation-facing controller for one spelling session.

WHY: The window shows one row per typed character. Editing a row must
also refresh every other row showing the same character, and the Copy
button needs the whole input rendered. That logic is not visual, so it
lives here where it can be tested without a display.

HOW: SpellingSession holds the current input text (pre-split into
graphemes) and a PhoneticConverter. Row edits go through the converter,
then find_occurrences() tells the caller which rows to repaint.

RULES:
- Positions are grapheme indices into the current text
- edit() and revert() return every position showing the same character
  in either case (including the edited one), in ascending order
- revert() on a character without a built-in code word clears its
  code word to ""
"""

from __future__ import annotations

from typing import List

from spell_it_please.core.alphabet import normalize_for_lookup
from spell_it_please.core.converter import PhoneticConverter
from spell_it_please.core.models import PhoneticRepresentation
from spell_it_please.core.text import find_occurrences, split_characters


class SpellingSession:
    """The input text being spelled plus the converter that spells it."""

    def __init__(self, converter: PhoneticConverter, text: str = "") -> None:
        self._converter = converter
        self._text = ""
        self._characters: List[str] = []
        self.set_text(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def characters(self) -> List[str]:
        return list(self._characters)

    def __len__(self) -> int:
        return len(self._characters)

    def set_text(self, text: str) -> None:
        """Replace the input text; called on every change of the input field."""
        self._text = text
        self._characters = split_characters(text)

    def row(self, position: int) -> PhoneticRepresentation:
        return self._converter.convert(self._character_at(position))

    def rows(self) -> List[PhoneticRepresentation]:
        return [self._converter.convert(c) for c in self._characters]

    def edit(self, position: int, new_code_word: str) -> List[int]:
        """Change the code word of the character at ``position``.

        Returns:
            Positions of every row that now shows a different code word
            and must be refreshed.

        Raises:
            IndexError: If ``position`` is outside the current text.
        """
        character = self._character_at(position)
        self._converter.update_code_word(character, new_code_word)
        return find_occurrences(self._text, character, key=normalize_for_lookup)

    def revert(self, position: int) -> List[int]:
        """Restore the built-in code word for the character at ``position``."""
        return self.edit(position, self.row(position).revert_target)

    def clipboard_text(self) -> str:
        return self._converter.get_clipboard_copyable_representation_of(self._text)

    def _character_at(self, position: int) -> str:
        if not 0 <= position < len(self._characters):
            raise IndexError(
                "Position {} outside text of {} characters".format(
                    position, len(self._characters)
                )
            )
        return self._characters[position]
