"""
Music language - a small algebra for composing music.

Write pieces in a simplified abc notation, combine them into rounds,
canons and accompaniments, and compile the result to a deterministic
schedule of MIDI events.
"""

from music_language.compiler import MusicCompiler, Schedule, compile_music
from music_language.constants import Instrument
from music_language.core import Concat, Forever, Music, Note, Pitch, Rest, Together
from music_language.errors import (
    ChannelCapacityExceeded,
    MusicError,
    ParseError,
    PreconditionViolation,
)
from music_language.models import CompileSettings

__version__ = "0.1.0"

__all__ = [
    # Values
    "Pitch",
    "Instrument",
    "Music",
    "Note",
    "Rest",
    "Concat",
    "Together",
    "Forever",
    # Compilation
    "CompileSettings",
    "MusicCompiler",
    "Schedule",
    "compile_music",
    # Errors
    "MusicError",
    "ParseError",
    "ChannelCapacityExceeded",
    "PreconditionViolation",
]
