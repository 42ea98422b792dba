"""Conversion engine: alphabet table, converter, text segmentation, session.

WHY: The core package holds everything that decides how a character is
spelled. It is shared by the GUI and the tests and has no knowledge of
widgets or files.

HOW: alphabet.py defines the built-in table, models.py the value type
returned for each character, text.py grapheme segmentation and
occurrence lookup, converter.py the override-aware PhoneticConverter,
and session.py the controller the presentation layer drives.

RULES:
- No tkinter imports anywhere in this package
- Persistence is injected (OverrideStore), never imported as a global
"""
