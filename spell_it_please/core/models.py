"""Data model shared by the converter, formatters and presentation layer.

WHY: The list renderer, the clipboard formatter and the tests all need
the same three facts about a character: what was typed, which code word
is active, and which code word is built in. One small value type keeps
those facts together so nobody has to consult the converter twice.

HOW: PhoneticRepresentation is a frozen dataclass. The convenience
properties derive display state (mapped, overridden, revertable) from
the two code-word fields.

RULES:
- character is the original, non-normalized character (case preserved)
- code_word is the active word: override if present, else default
- default_code_word is always the built-in value
- Both code-word fields are None for unmapped characters
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PhoneticRepresentation:
    """One character together with its active and default code words.

    RULES:
    - Immutable; a fresh instance is produced by every convert() call
    - An override equal to the default is indistinguishable from no override
    """

    character: str
    code_word: Optional[str] = None
    default_code_word: Optional[str] = None

    @property
    def is_mapped(self) -> bool:
        """True when the character has an active code word (even an empty one)."""
        return self.code_word is not None

    @property
    def is_overridden(self) -> bool:
        """True when the active code word differs from the built-in one."""
        return self.code_word != self.default_code_word

    @property
    def revert_target(self) -> str:
        """The text a revert writes back: the built-in word, or "" if unmapped."""
        return self.default_code_word or ""

    def can_revert(self, edited_text: Optional[str] = None) -> bool:
        """Whether a revert-to-default action should be offered.

        The presentation layer passes the text currently shown in the
        row's edit field; without it the active code word is compared.
        An unmapped character shows as an empty field, so it offers a
        revert once the user has typed a word for it.
        """
        current = self.code_word if edited_text is None else edited_text
        return (current or "") != self.revert_target
