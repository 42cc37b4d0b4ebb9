"""
The music language - factories and combinators for composing pieces.

Import everything from here to write music in a declarative style:

    from music_language.language import *

    bass = notes("D,2 A,,2 | B,,2 ^F,,2", Instrument.CELLO)
    piece = accompany(forever(melody), bass)
"""

from music_language.language.combinators import (
    CONCAT,
    IDENTITY,
    TOGETHER,
    Builder,
    Filter,
    accompany,
    canon,
    compose,
    concat,
    counterpoint,
    delay,
    delayer,
    forever,
    note,
    notes,
    repeat,
    rest,
    round,
    series,
    together,
    transpose,
    transposer,
)

__all__ = [
    # Types
    "Filter",
    "Builder",
    # Factories
    "notes",
    "note",
    "rest",
    "concat",
    "together",
    "transpose",
    "forever",
    "delay",
    # Functional objects
    "IDENTITY",
    "transposer",
    "delayer",
    "compose",
    "TOGETHER",
    "CONCAT",
    # Producers
    "series",
    "counterpoint",
    "canon",
    "round",
    "repeat",
    "accompany",
]
