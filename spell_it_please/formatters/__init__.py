"""Output formatters for converted text.

WHY: The GUI's Copy button needs the spelled-out text as one plain
string. Keeping rendering out of the converter lets the line format
change without touching lookup logic.

HOW: transcript.py renders a sequence of PhoneticRepresentation values
as "<CHARACTER>: <code word>" lines.

RULES:
- Formatters are pure: same input, same output
"""

from spell_it_please.formatters.transcript import TranscriptFormatter, format_transcript

__all__ = ["TranscriptFormatter", "format_transcript"]
