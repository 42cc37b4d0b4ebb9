"""
Text notation for music.

Parses a simplified abc notation into Music values.
"""

from music_language.notation.parser import parse_notes, parse_pitch, parse_symbol

__all__ = [
    "parse_notes",
    "parse_pitch",
    "parse_symbol",
]
