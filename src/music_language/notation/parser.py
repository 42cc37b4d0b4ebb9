"""
Notation parser - a simplified abc notation for writing music as text.

A piece is a sequence of whitespace-delimited symbols. The vertical bar |
marks measures for the reader and is treated as whitespace.

Grammar:
    piece      ::= symbol*
    symbol     ::= "." duration         (rest)
                 | pitch duration       (note)
    pitch      ::= accidental letter octave*
    accidental ::= "" (natural) | "_" (flat) | "^" (sharp)
    letter     ::= A-G
    octave     ::= "'" (up an octave) | "," (down an octave)
    duration   ::= "" (one beat) | n | n/m | /m

Examples (4 beats per measure):
    C      quarter note, middle C
    A'2    half note, high A
    _D/2   eighth note, D flat above middle C
    .1/2   eighth rest
"""

from __future__ import annotations

import re
from fractions import Fraction

from music_language.constants import ErrorMessages, Instrument
from music_language.core.music import Concat, Music, Note, Rest
from music_language.core.pitch import OCTAVE, Pitch
from music_language.errors import ParseError

# Symbols are split on runs of whitespace and measure bars
_DELIMITER = re.compile(r"[\s|]+")

# pitch part, optional integer multiplier, optional /divisor
_SYMBOL = re.compile(r"([^/0-9]*)([0-9]+)?(/[0-9]+)?")

_REST = "."


def parse_notes(notes: str, instrument: Instrument = Instrument.PIANO) -> Music:
    """
    Parse a string of notation into Music.

    Args:
        notes: Notes and rests in the notation described above
        instrument: Instrument that plays every note

    Returns:
        The symbols concatenated left to right, starting from Rest(0)

    Raises:
        ParseError: If any symbol does not match the grammar
    """
    music: Music = Rest(0)
    for symbol in _DELIMITER.split(notes):
        if symbol:
            music = Concat(music, parse_symbol(symbol, instrument))
    return music


def parse_symbol(symbol: str, instrument: Instrument = Instrument.PIANO) -> Music:
    """Parse one symbol into a Note or a Rest."""
    match = _SYMBOL.fullmatch(symbol)
    if match is None:
        raise ParseError(ErrorMessages.UNPARSEABLE_SYMBOL.format(symbol=symbol), symbol)

    pitch_symbol, multiplier, divisor = match.groups()
    beats = _parse_duration(symbol, multiplier, divisor)

    if pitch_symbol == _REST:
        return Rest(beats)
    try:
        pitch = parse_pitch(pitch_symbol)
    except ParseError as e:
        raise ParseError(ErrorMessages.UNPARSEABLE_SYMBOL.format(symbol=symbol), symbol) from e
    return Note(beats, pitch, instrument)


def parse_pitch(symbol: str) -> Pitch:
    """
    Parse a pitch such as C, ^F, _B, A', or G,,.

    Octave marks are peeled off the end and accidentals off the front,
    each one a transposition of whatever is left.
    """
    if symbol.endswith("'"):
        return parse_pitch(symbol[:-1]).transpose(OCTAVE)
    if symbol.endswith(","):
        return parse_pitch(symbol[:-1]).transpose(-OCTAVE)
    if symbol.startswith("^"):
        return parse_pitch(symbol[1:]).transpose(1)
    if symbol.startswith("_"):
        return parse_pitch(symbol[1:]).transpose(-1)
    try:
        return Pitch.parse(symbol)
    except ValueError:
        raise ParseError(ErrorMessages.UNPARSEABLE_PITCH.format(symbol=symbol), symbol) from None


def _parse_duration(symbol: str, multiplier: str | None, divisor: str | None) -> Fraction:
    beats = Fraction(1)
    if multiplier is not None:
        beats *= int(multiplier)
    if divisor is not None:
        denominator = int(divisor[1:])
        if denominator == 0:
            raise ParseError(ErrorMessages.UNPARSEABLE_SYMBOL.format(symbol=symbol), symbol)
        beats /= denominator
    return beats
