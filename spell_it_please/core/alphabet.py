"""Built-in phonetic alphabet: character → default code word.

WHY: Every conversion needs a fallback code word when the user has not
set an override. The defaults are plain data, kept in one table so both
humans and coding agents can read and extend them without touching logic.

HOW: DEFAULT_ALPHABET is a read-only mapping (MappingProxyType over a
module-private dict). Keys are lowercase letters, digits, punctuation and
a curated set of common non-ASCII symbols. lookup() lowercases the input
before reading the table.

RULES:
- Letters a–z map to the NATO spelling alphabet (Alfa … Zulu)
- Uppercase letters are NOT stored; lookups normalize to lowercase first
- Space maps to "" (spelled as silence), not to a missing entry
- Characters absent from the table (emoji, CJK, ...) return None
- The table is never mutated after import
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

_ALPHABET: dict[str, str] = {
    " ": "",
    "!": "Exclamation mark",
    "\"": "Quotation mark",
    "#": "Hash / Number sign",
    "$": "Dollar sign",
    "%": "Percent sign",
    "&": "Ampersand",
    "'": "Apostrophe",
    "(": "Left/Opening parenthesis",
    ")": "Right/Closing parenthesis",
    "*": "Asterisk",
    "+": "Plus sign",
    ",": "Comma",
    "-": "Hyphen",
    ".": "Period",
    "/": "Slash",
    "0": "Zero",
    "1": "One",
    "2": "Two",
    "3": "Three",
    "4": "Four",
    "5": "Five",
    "6": "Six",
    "7": "Seven",
    "8": "Eight",
    "9": "Nine",
    ":": "Colon",
    ";": "Semicolon",
    "<": "Less-than sign",
    "=": "Equal sign",
    ">": "Greater-than sign",
    "?": "Question mark",
    "@": "At sign",
    "[": "Left/Opening square bracket",
    "\\": "Backslash",
    "]": "Right/Closing square bracket",
    "^": "Caret / Circumflex accent",
    "_": "Low line",
    "`": "Backtick / Grave accent",
    # NATO spelling alphabet
    "a": "Alfa",
    "b": "Bravo",
    "c": "Charlie",
    "d": "Delta",
    "e": "Echo",
    "f": "Foxtrot",
    "g": "Golf",
    "h": "Hotel",
    "i": "India",
    "j": "Juliett",
    "k": "Kilo",
    "l": "Lima",
    "m": "Mike",
    "n": "November",
    "o": "Oscar",
    "p": "Papa",
    "q": "Quebec",
    "r": "Romeo",
    "s": "Sierra",
    "t": "Tango",
    "u": "Uniform",
    "v": "Victor",
    "w": "Whiskey",
    "x": "Xray",
    "y": "Yankee",
    "z": "Zulu",
    "{": "Left/Opening curly bracket",
    "|": "Vertical bar",
    "}": "Right/Closing curly bracket",
    "~": "Tilde",
    # Common non-ASCII symbols
    "\u00A3": "Pound sign",
    "\u00A5": "Yen sign",
    "\u00A7": "Section sign / Silcrow",
    "\u00A9": "Copyright symbol",
    "\u00AE": "Registered trademark symbol",
    "\u00B0": "Degree sign",
    "\u00B2": "Superscript two",
    "\u00B3": "Superscript three",
    "\u00B4": "Acute accent",
    "\u00B5": "Micro sign",
    "\u00B7": "Middle dot",
    "\u00B9": "Superscript one",
    "\u2013": "En dash",
    "\u2014": "Em dash",
    "\u2015": "Horizontal bar",
    "\u2022": "Bullet",
    "\u201C": "Left double quotation mark",
    "\u201D": "Right double quotation mark",
    "\u2019": "Single quotation mark",
    "\u20AC": "Euro sign",
}

DEFAULT_ALPHABET: Mapping[str, str] = MappingProxyType(_ALPHABET)
"""Read-only view of the built-in alphabet, keyed by lowercase character."""


def normalize_for_lookup(character: str) -> str:
    """Normalize a character to the key form used by every alphabet mapping."""
    return character.lower()


def lookup(character: str) -> Optional[str]:
    """Return the built-in code word for a character, or None if unmapped.

    Case-insensitive: ``lookup("A") == lookup("a") == "Alfa"``.
    """
    return DEFAULT_ALPHABET.get(normalize_for_lookup(character))
