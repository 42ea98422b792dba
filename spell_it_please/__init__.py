"""Spell It Please: phonetic spelling of typed text.

WHY: Spelling names, codes and addresses over the phone goes wrong
without a shared phonetic alphabet. This package turns any text into one
code word per character ("a" → "Alfa"), lets users override the word for
any character, remembers those overrides, and produces a transcript
ready for the clipboard.

HOW: Three layers. The core (alphabet table, converter, text
segmentation, session controller) is pure Python with no UI. Storage
persists overrides through a small key-value store with a background
writer. A thin Tkinter GUI wires both to a window.

RULES:
- The core never imports tkinter
- The in-memory override mapping is the source of truth; disk is a mirror
- Adding a symbol to the built-in alphabet = one line in core/alphabet.py
"""

__version__ = "0.1.0"
