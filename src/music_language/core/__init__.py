"""
Core music primitives - the algebra everything else composes on.

- Pitch: Semitone distance from middle C
- Note, Rest: Leaves of a music tree
- Concat, Together: Sequential and simultaneous composition
- Forever: Endless repetition
- duration, transpose: Operations defined over every variant
"""

from music_language.core.music import (
    INFINITY,
    Concat,
    Forever,
    Music,
    Note,
    Rest,
    Together,
    duration,
    is_music,
    transpose,
)
from music_language.core.pitch import MIDDLE_C, OCTAVE, Pitch

__all__ = [
    # Pitch
    "Pitch",
    "OCTAVE",
    "MIDDLE_C",
    # Music
    "Music",
    "Note",
    "Rest",
    "Concat",
    "Together",
    "Forever",
    "INFINITY",
    "duration",
    "transpose",
    "is_music",
]
