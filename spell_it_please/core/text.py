"""Character segmentation and occurrence lookup for input text.

WHY: Users type characters, not code points. "é" written as "e" plus a
combining accent, a flag emoji or a family emoji built from ZWJ
sequences must each be spelled as ONE row. And when the user edits the
code word on one row, every other row showing the same character has to
refresh too.

HOW: split_characters() segments text into extended grapheme clusters
with the ``regex`` library's ``\\X`` pattern (UAX #29).
find_occurrences() walks those clusters and reports the positions equal
to a given character.

RULES:
- Positions are grapheme indices, never code-point or UTF-16 offsets
- find_occurrences compares raw characters unless a key function is given
- A string holding a lone surrogate is never a character
- All functions are pure
"""

from __future__ import annotations

from typing import Callable, List, Optional

import regex

_GRAPHEME = regex.compile(r"\X")


def split_characters(text: str) -> List[str]:
    """Split text into user-perceived characters (extended grapheme clusters)."""
    return _GRAPHEME.findall(text)


def is_well_formed(value: str) -> bool:
    """True when ``value`` can be encoded as UTF-8 (no lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_single_character(value: str) -> bool:
    """True when ``value`` is exactly one well-formed grapheme cluster."""
    return is_well_formed(value) and len(split_characters(value)) == 1


def find_occurrences(
    text: str,
    character: str,
    key: Optional[Callable[[str], str]] = None,
) -> List[int]:
    """Return the ordered grapheme positions in ``text`` equal to ``character``.

    Args:
        text: The full input text currently displayed.
        character: The character whose code word just changed.
        key: Optional normalization applied to both sides before comparing,
             e.g. the lookup normalization so "A" also matches "a".

    Returns:
        Ascending list of positions; empty when the character is absent.
    """
    if key is None:
        key = _identity
    target = key(character)
    return [
        index
        for index, candidate in enumerate(split_characters(text))
        if key(candidate) == target
    ]


def _identity(value: str) -> str:
    return value
