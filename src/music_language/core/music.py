"""
Music algebra - the five variants and the operations over them.

A piece of music is an immutable tree built from:
- Note: one pitch on one instrument for a duration
- Rest: silence for a duration
- Concat: two pieces, one after the other
- Together: two pieces starting at the same instant
- Forever: a piece looped without end

Durations are in beats and use Fraction for exact subdivisions.
Equality is structural: two trees are equal if they are built from
equal constructors applied to equal arguments.

Parsed notation is a Concat chain as deep as the piece is long, so every
operation here walks the tree with an explicit stack instead of recursing.
Hashes are computed once at construction from the children's hashes.
Only repr() still recurses and is limited by the interpreter's recursion
depth; use str() to print long pieces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Union

from music_language.constants import ErrorMessages, Instrument
from music_language.core.pitch import Pitch
from music_language.errors import PreconditionViolation

# duration() returns this for anything containing a Forever
INFINITY = math.inf


def _to_beats(value: int | float | Fraction) -> Fraction:
    """Normalize a duration to an exact, finite, non-negative Fraction."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Fraction)):
        raise PreconditionViolation(f"Duration must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise PreconditionViolation(ErrorMessages.INFINITE_DURATION.format(duration=value))
    beats = Fraction(value)
    if beats < 0:
        raise PreconditionViolation(ErrorMessages.NEGATIVE_DURATION.format(duration=value))
    return beats


def _require_music(name: str, value: object) -> None:
    if not isinstance(value, _MusicNode):
        raise PreconditionViolation(ErrorMessages.NOT_MUSIC.format(name=name, value=value))


class _MusicNode:
    """Shared structural equality, hashing and rendering for the variants."""

    _hash: int

    def _parts(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def _seal(self) -> None:
        object.__setattr__(self, "_hash", hash((type(self).__name__, *self._parts())))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _MusicNode):
            return NotImplemented
        stack: list[tuple[_MusicNode, _MusicNode]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a is b:
                continue
            if type(a) is not type(b) or a._hash != b._hash:
                return False
            for x, y in zip(a._parts(), b._parts()):
                if isinstance(x, _MusicNode):
                    stack.append((x, y))
                elif x != y:
                    return False
        return True

    def __str__(self) -> str:
        return _render(self)


@dataclass(frozen=True, eq=False)
class Note(_MusicNode):
    """A single pitch played by an instrument for a number of beats."""

    duration: Fraction
    pitch: Pitch
    instrument: Instrument
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", _to_beats(self.duration))
        if not isinstance(self.pitch, Pitch):
            raise PreconditionViolation(f"Note pitch must be a Pitch, got {self.pitch!r}")
        if not isinstance(self.instrument, Instrument):
            raise PreconditionViolation(
                f"Note instrument must be an Instrument, got {self.instrument!r}"
            )
        self._seal()

    def _parts(self) -> tuple[Any, ...]:
        return (self.duration, self.pitch, self.instrument)


@dataclass(frozen=True, eq=False)
class Rest(_MusicNode):
    """Silence for a number of beats."""

    duration: Fraction
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", _to_beats(self.duration))
        self._seal()

    def _parts(self) -> tuple[Any, ...]:
        return (self.duration,)


@dataclass(frozen=True, eq=False)
class Concat(_MusicNode):
    """Two pieces played one after the other."""

    first: Music
    second: Music
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_music("first", self.first)
        _require_music("second", self.second)
        self._seal()

    def _parts(self) -> tuple[Any, ...]:
        return (self.first, self.second)


@dataclass(frozen=True, eq=False)
class Together(_MusicNode):
    """
    Two pieces played at the same time.

    Both start at the same instant but may end at different times.
    """

    top: Music
    bottom: Music
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_music("top", self.top)
        _require_music("bottom", self.bottom)
        self._seal()

    def _parts(self) -> tuple[Any, ...]:
        return (self.top, self.bottom)


@dataclass(frozen=True, eq=False)
class Forever(_MusicNode):
    """A piece played over and over in an endless loop."""

    body: Music
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_music("body", self.body)
        self._seal()

    def _parts(self) -> tuple[Any, ...]:
        return (self.body,)


Music = Union[Note, Rest, Concat, Together, Forever]


def is_music(value: object) -> bool:
    """Check whether a value is one of the five Music variants."""
    return isinstance(value, (Note, Rest, Concat, Together, Forever))


def _not_music(value: object) -> PreconditionViolation:
    return PreconditionViolation(ErrorMessages.NOT_MUSIC.format(name="music", value=value))


def _render(music: Music) -> str:
    # items are either literal text or subtrees still to render
    out: list[str] = []
    stack: list[Any] = [music]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        elif isinstance(item, Note):
            out.append(f"{item.pitch}{item.duration}")
        elif isinstance(item, Rest):
            out.append(f".{item.duration}")
        elif isinstance(item, Concat):
            stack.extend((item.second, " ", item.first))
        elif isinstance(item, Together):
            stack.extend((")", item.bottom, " |||| ", item.top, "together("))
        elif isinstance(item, Forever):
            stack.extend((")", item.body, "forever("))
        else:
            raise _not_music(item)
    return "".join(out)


def duration(music: Music) -> Fraction | float:
    """
    Total duration of a piece, in beats.

    Returns a Fraction for finite pieces and math.inf for any piece
    containing a Forever.
    """
    results: list[Fraction | float] = []
    # (node, children already evaluated)
    stack: list[tuple[Music, bool]] = [(music, False)]
    while stack:
        node, ready = stack.pop()
        if isinstance(node, (Note, Rest)):
            results.append(node.duration)
        elif isinstance(node, Forever):
            results.append(INFINITY)
        elif isinstance(node, (Concat, Together)):
            if ready:
                right = results.pop()
                left = results.pop()
                results.append(left + right if isinstance(node, Concat) else max(left, right))
            else:
                left_child, right_child = node._parts()
                stack.extend(((node, True), (right_child, False), (left_child, False)))
        else:
            raise _not_music(node)
    return results.pop()


def transpose(music: Music, semitones_up: int) -> Music:
    """
    Transpose every note in a piece up (or down, if negative).

    Rests and structure are untouched, so transpose(m, 0) == m.
    """
    results: list[Music] = []
    stack: list[tuple[Music, bool]] = [(music, False)]
    while stack:
        node, ready = stack.pop()
        if isinstance(node, Note):
            results.append(
                Note(node.duration, node.pitch.transpose(semitones_up), node.instrument)
            )
        elif isinstance(node, Rest):
            results.append(node)
        elif isinstance(node, Forever):
            if ready:
                results.append(Forever(results.pop()))
            else:
                stack.extend(((node, True), (node.body, False)))
        elif isinstance(node, (Concat, Together)):
            if ready:
                right = results.pop()
                left = results.pop()
                results.append(type(node)(left, right))
            else:
                left_child, right_child = node._parts()
                stack.extend(((node, True), (right_child, False), (left_child, False)))
        else:
            raise _not_music(node)
    return results.pop()
