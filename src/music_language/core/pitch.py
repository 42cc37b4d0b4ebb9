"""
Pitch primitive.

A Pitch is a semitone distance from middle C. Unlike a pitch class it is
octave-aware: C' (an octave up) and C are different pitches.
"""

from __future__ import annotations

from functools import total_ordering
from typing import ClassVar

from music_language.constants import MIDDLE_C_MIDI
from music_language.errors import PreconditionViolation

# Semitones above middle C for each letter, within the middle octave
_LETTER_SEMITONES: dict[str, int] = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}

# abc-style spelling for each semitone of an octave (sharps only)
_ABC_NAMES: list[str] = [
    "C",
    "^C",
    "D",
    "^D",
    "E",
    "F",
    "^F",
    "G",
    "^G",
    "A",
    "^A",
    "B",
]


@total_ordering
class Pitch:
    """
    A pitch, measured in semitones from middle C.

    Pitch(0) is middle C, Pitch(12) is the C above it, Pitch(-1) is
    the B below it. Enharmonic spellings collapse to the same value.

    Immutable and hashable.
    """

    __slots__ = ("_semitones",)
    _semitones: int

    OCTAVE: ClassVar[int] = 12
    MIDDLE_C: ClassVar[Pitch]

    def __init__(self, semitones: int) -> None:
        """Create a pitch the given number of semitones above middle C."""
        if isinstance(semitones, bool) or not isinstance(semitones, int):
            raise PreconditionViolation(f"Semitones must be an integer, got {semitones!r}")
        object.__setattr__(self, "_semitones", int(semitones))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Pitch is immutable")

    @property
    def semitones(self) -> int:
        """Semitones above (or below, if negative) middle C."""
        return self._semitones

    def transpose(self, semitones_up: int) -> Pitch:
        """Transpose by a number of semitones (positive or negative)."""
        return Pitch(self._semitones + semitones_up)

    def difference(self, other: Pitch) -> int:
        """Number of semitones from other up to this pitch."""
        return self._semitones - other._semitones

    def to_midi(self) -> int:
        """Convert to MIDI note number. Middle C = 60."""
        return self.difference(Pitch.MIDDLE_C) + MIDDLE_C_MIDI

    @classmethod
    def from_midi(cls, midi_note: int) -> Pitch:
        """Create a pitch from a MIDI note number."""
        return cls(midi_note - MIDDLE_C_MIDI)

    @classmethod
    def parse(cls, letter: str) -> Pitch:
        """
        Get the pitch of a letter A-G in the octave starting at middle C.

        Accidentals and octave marks are notation concerns, handled by
        the notation parser through transpose().
        """
        if letter not in _LETTER_SEMITONES:
            raise ValueError(f"Pitch letter must be one of A-G, got {letter!r}")
        return cls(_LETTER_SEMITONES[letter])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._semitones == other._semitones

    def __lt__(self, other: Pitch) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self._semitones < other._semitones

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        return f"Pitch({self._semitones})"

    def __str__(self) -> str:
        """abc-style name: ^F for F sharp, C' an octave up, C, an octave down."""
        octaves, semitone = divmod(self._semitones, Pitch.OCTAVE)
        suffix = "'" * octaves if octaves > 0 else "," * -octaves
        return _ABC_NAMES[semitone] + suffix


Pitch.MIDDLE_C = Pitch(0)

OCTAVE = Pitch.OCTAVE
MIDDLE_C = Pitch.MIDDLE_C
