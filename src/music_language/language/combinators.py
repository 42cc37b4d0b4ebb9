"""
Combinators - factories and higher-order functions for building music.

Everything here is built from the five primitive variants; no combinator
introduces a new kind of node. Recursive pieces like rounds and canons
come from series(), which repeatedly applies a filter (Music -> Music)
and joins the results with a builder (Music x Music -> Music).

Example:
    melody = notes("C C C3/4 D/4 E | E3/4 D/4 E3/4 F/4 G2", Instrument.PIANO)
    row_your_boat = round(melody, 4, 3)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from fractions import Fraction

from music_language.constants import ErrorMessages, Instrument
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
)
from music_language.core.music import transpose as _transpose
from music_language.core.pitch import Pitch
from music_language.errors import PreconditionViolation
from music_language.notation.parser import parse_notes

# f : Music -> Music
Filter = Callable[[Music], Music]

# f : Music x Music -> Music
Builder = Callable[[Music, Music], Music]


def _check_music(name: str, value: object) -> None:
    if not is_music(value):
        raise PreconditionViolation(ErrorMessages.NOT_MUSIC.format(name=name, value=value))


def _check_count(n: int) -> None:
    if n < 1:
        raise PreconditionViolation(ErrorMessages.TOO_FEW_VOICES.format(n=n))


# ------------------------------------------------------------------
# Factories
# ------------------------------------------------------------------


def notes(text: str, instrument: Instrument = Instrument.PIANO) -> Music:
    """Make music from a string of notation (see music_language.notation)."""
    return parse_notes(text, instrument)


def note(beats: int | Fraction, pitch: Pitch, instrument: Instrument) -> Music:
    """A note of the given pitch played by instrument for beats."""
    return Note(beats, pitch, instrument)


def rest(beats: int | Fraction) -> Music:
    """A rest lasting beats."""
    return Rest(beats)


def concat(first: Music, second: Music) -> Music:
    """first followed by second."""
    return Concat(first, second)


def together(top: Music, bottom: Music) -> Music:
    """top played at the same time as bottom."""
    return Together(top, bottom)


def transpose(music: Music, semitones_up: int) -> Music:
    """Every note of music moved up (or down) by semitones_up."""
    return _transpose(music, semitones_up)


def forever(music: Music) -> Music:
    """music played repeatedly in an endless loop."""
    return Forever(music)


def delay(music: Music, beats: int | Fraction) -> Music:
    """music preceded by a rest of beats."""
    return Concat(Rest(beats), music)


# ------------------------------------------------------------------
# Functional objects
# ------------------------------------------------------------------


def IDENTITY(music: Music) -> Music:  # noqa: N802
    """The filter that leaves music unchanged."""
    return music


def transposer(semitones_up: int) -> Filter:
    """Filter f such that f(m) = transpose(m, semitones_up)."""

    def apply(music: Music) -> Music:
        return _transpose(music, semitones_up)

    return apply


def delayer(beats: int | Fraction) -> Filter:
    """Filter f such that f(m) = delay(m, beats)."""
    if beats < 0:
        raise PreconditionViolation(ErrorMessages.NEGATIVE_DURATION.format(duration=beats))

    def apply(music: Music) -> Music:
        return delay(music, beats)

    return apply


def compose(f: Filter, g: Filter) -> Filter:
    """Filter that applies f, then g."""

    def apply(music: Music) -> Music:
        return g(f(music))

    return apply


def TOGETHER(top: Music, bottom: Music) -> Music:  # noqa: N802
    """Builder that plays both pieces at once."""
    return Together(top, bottom)


def CONCAT(first: Music, second: Music) -> Music:  # noqa: N802
    """Builder that plays the pieces one after the other."""
    return Concat(first, second)


# ------------------------------------------------------------------
# Producers
# ------------------------------------------------------------------


def series(music: Music, builder: Builder, transform: Filter, n: int) -> Music:
    """
    Combine n successive transformations of music.

    series(m, b, f, 1) = m
    series(m, b, f, n) = b(m, series(f(m), b, f, n - 1))

    So the i-th element (counting from 1) is f applied i - 1 times.
    """
    _check_music("music", music)
    _check_count(n)

    elements = [music]
    for _ in range(n - 1):
        elements.append(transform(elements[-1]))

    # fold from the right so the tree nests as b(m1, b(m2, ... b(mn-1, mn)))
    result = elements.pop()
    while elements:
        result = builder(elements.pop(), result)
    return result


def counterpoint(music: Music, transform: Filter, n: int) -> Music:
    """n voices played together, each the previous voice passed through transform."""
    return series(music, TOGETHER, transform, n)


def canon(music: Music, delay_beats: int | Fraction, transform: Filter, n: int) -> Music:
    """
    An n-voice canon.

    Each voice is the previous one passed through transform, then
    delayed by delay_beats.
    """
    return counterpoint(music, compose(transform, delayer(delay_beats)), n)


def round(music: Music, delay_beats: int | Fraction, n: int) -> Music:  # noqa: A001
    """
    A simple n-voice round.

    Every voice is identical except for its delay. round(m, d, 1) == m.
    """
    return canon(music, delay_beats, IDENTITY, n)


def repeat(music: Music, n: int, transform: Filter = IDENTITY) -> Music:
    """
    n repetitions of music in a single voice.

    The i-th repetition is transform applied i - 1 times; with the
    default transform every repetition is identical.
    """
    return series(music, CONCAT, transform, n)


def accompany(first: Music, second: Music) -> Music:
    """
    Play two pieces together so that they end together.

    The shorter piece is repeated for as long as the longer one plays:
    looped forever if the longer piece is infinite, otherwise repeated
    the nearest whole number of times (rounding halves up).

    Requires that one piece is infinite, or that one duration is a whole
    multiple of the other. With any other ratio the result ends close to,
    but not exactly at, the end of the longer piece.
    """
    _check_music("first", first)
    _check_music("second", second)

    if duration(first) < duration(second):
        first, second = second, first

    # now first is at least as long as second
    longer = duration(first)
    shorter = duration(second)
    if shorter == INFINITY:
        return Together(first, second)
    if longer == INFINITY:
        return Together(first, Forever(second))
    if shorter == 0:
        raise PreconditionViolation(ErrorMessages.UNDEFINED_RATIO)

    times = math.floor(Fraction(longer) / Fraction(shorter) + Fraction(1, 2))
    return Together(first, repeat(second, times))
