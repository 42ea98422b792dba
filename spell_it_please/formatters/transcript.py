"""Clipboard transcript formatter.

WHY: When the user taps Copy, the spelled-out text is pasted into chats,
emails or ticket systems. It must read naturally as plain text with one
character per line, no matter which app receives it.

HOW: Each PhoneticRepresentation becomes "<CHARACTER>: <code word>"
followed by a newline. The character label is uppercased for
readability; unmapped characters get an empty code word.

RULES:
- One line per character, in input order, each ending with "\\n"
- Label: character.upper() (case-insensitive display)
- Unmapped characters render as "<CHARACTER>: " (never an error)
- Space renders as " : " because its code word is ""
- Empty input renders as ""
"""

from __future__ import annotations

from typing import Iterable

from spell_it_please.core.models import PhoneticRepresentation

_LINE_TEMPLATE = "{label}: {code_word}\n"


class TranscriptFormatter:
    """Renders converted characters into the clipboard-ready text block."""

    def format_line(self, representation: PhoneticRepresentation) -> str:
        return _LINE_TEMPLATE.format(
            label=representation.character.upper(),
            code_word=representation.code_word or "",
        )

    def format(self, representations: Iterable[PhoneticRepresentation]) -> str:
        """Join one formatted line per representation into a single string."""
        return "".join(self.format_line(r) for r in representations)


def format_transcript(representations: Iterable[PhoneticRepresentation]) -> str:
    """Shortcut for ``TranscriptFormatter().format(representations)``."""
    return TranscriptFormatter().format(representations)
