"""
Music compiler - schedules a piece of music as timestamped events.

The compiler walks a music tree once. Each variant places its events
relative to a start tick and reports the tick where it ends:

    Note      note on at start, note off after its duration
    Rest      nothing, just advances time
    Concat    first at start, second where first ends
    Together  both at start, ends when the later one ends
    Forever   the body back to back until the playback cap is reached

All per-compile state (event sink, channel table) lives in a
CompileContext owned by a single compile call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction

from music_language.compiler.schedule import EventType, Schedule, ScheduleEvent
from music_language.constants import ErrorMessages, Instrument
from music_language.core.music import (
    Concat,
    Forever,
    Music,
    Note,
    Rest,
    Together,
    duration,
)
from music_language.errors import ChannelCapacityExceeded, PreconditionViolation
from music_language.models.settings import CompileSettings

logger = logging.getLogger(__name__)


@dataclass
class CompileContext:
    """
    Mutable state for a single compile pass.

    Events are appended in the order the tree walk produces them;
    schedule() sorts them by tick without disturbing that order for ties.
    """

    settings: CompileSettings
    events: list[ScheduleEvent] = field(default_factory=list)
    channels: dict[Instrument, int] = field(default_factory=dict)
    next_channel: int = 0

    @property
    def ticks_per_beat(self) -> int:
        return self.settings.ticks_per_beat

    @property
    def max_playback_ticks(self) -> int:
        return self.settings.max_playback_ticks

    def ticks(self, beats: Fraction) -> int:
        """Convert beats to whole ticks, truncating any fraction of a tick."""
        return int(beats * self.ticks_per_beat)

    def channel_for(self, instrument: Instrument) -> int:
        """
        Get the channel playing an instrument, allocating one on first use.

        A new channel gets a program change at tick 0 so the device plays
        the right instrument from the start.

        Raises:
            ChannelCapacityExceeded: If every channel is already taken
        """
        if instrument in self.channels:
            return self.channels[instrument]

        capacity = self.settings.channel_capacity
        if self.next_channel >= capacity:
            raise ChannelCapacityExceeded(
                ErrorMessages.TOO_MANY_INSTRUMENTS.format(capacity=capacity), capacity
            )

        channel = self.next_channel
        self.next_channel += 1
        self.channels[instrument] = channel
        self.emit(EventType.PROGRAM_CHANGE, channel, instrument.program, 0)
        logger.debug(f"Allocated channel {channel} to {instrument.name}")
        return channel

    def emit(self, event_type: EventType, channel: int, value: int, tick: int) -> None:
        """Append an event to the sink."""
        self.events.append(ScheduleEvent(type=event_type, channel=channel, value=value, tick=tick))

    def schedule(self, end_tick: int) -> Schedule:
        """Freeze the sink into a Schedule, ordered by tick."""
        return Schedule(
            events=sorted(self.events, key=lambda e: e.tick),
            channels=dict(self.channels),
            ticks_per_beat=self.settings.ticks_per_beat,
            beats_per_minute=self.settings.beats_per_minute,
            end_tick=end_tick,
        )


# Work items for compile_at's explicit stack
_VISIT = "visit"  # schedule a node at a tick, leaving its end tick on the result stack
_THEN = "then"  # schedule a node where the previous result ended
_JOIN = "join"  # replace the last two results with the later one


def compile_at(music: Music, start_tick: int, context: CompileContext) -> int:
    """
    Schedule music starting at start_tick.

    The tree is walked with an explicit stack, so arbitrarily long pieces
    compile without hitting the interpreter's recursion limit. Together
    schedules its whole top voice before its bottom voice.

    Args:
        music: The piece to schedule
        start_tick: Tick where the piece begins
        context: Sink and channel table for this compile pass

    Returns:
        The tick where the piece ends
    """
    ends: list[int] = []
    work: list[tuple[str, Music | None, int]] = [(_VISIT, music, start_tick)]
    while work:
        action, node, tick = work.pop()

        if action == _THEN:
            work.append((_VISIT, node, ends.pop()))
            continue
        if action == _JOIN:
            bottom_end = ends.pop()
            top_end = ends.pop()
            ends.append(max(top_end, bottom_end))
            continue

        if isinstance(node, Note):
            channel = context.channel_for(node.instrument)
            note = node.pitch.to_midi()
            end_tick = tick + context.ticks(node.duration)
            context.emit(EventType.NOTE_ON, channel, note, tick)
            context.emit(EventType.NOTE_OFF, channel, note, end_tick)
            ends.append(end_tick)
        elif isinstance(node, Rest):
            ends.append(tick + context.ticks(node.duration))
        elif isinstance(node, Concat):
            work.append((_THEN, node.second, 0))
            work.append((_VISIT, node.first, tick))
        elif isinstance(node, Together):
            work.append((_JOIN, None, 0))
            work.append((_VISIT, node.bottom, tick))
            work.append((_VISIT, node.top, tick))
        elif isinstance(node, Forever):
            ends.append(_compile_forever(node, tick, context))
        else:
            raise PreconditionViolation(ErrorMessages.NOT_MUSIC.format(name="music", value=node))

    return ends.pop()


def _compile_forever(music: Forever, start_tick: int, context: CompileContext) -> int:
    """
    Unroll a Forever until the playback cap, returning its end tick.

    Like every variant this returns an absolute end tick, not the number
    of ticks elapsed: a body with zero duration is skipped and the result
    is start_tick itself (0 only when the Forever starts the piece).
    Nested Forevers recurse once per nesting level.
    """
    if duration(music.body) == 0:
        return start_tick

    cap = context.max_playback_ticks
    elapsed = 0
    repetitions = 0
    while elapsed < cap:
        end_tick = compile_at(music.body, start_tick + elapsed, context)
        repetitions += 1
        if end_tick == start_tick + elapsed:
            # body is shorter than one tick at this resolution
            break
        elapsed = end_tick - start_tick

    logger.debug(f"Unrolled forever(...) {repetitions} times over {elapsed} ticks")
    return start_tick + elapsed


class MusicCompiler:
    """
    Compiles Music to a Schedule.

    Each call to compile() uses a fresh context, so one compiler can be
    shared freely.
    """

    def __init__(self, settings: CompileSettings | None = None):
        """
        Initialize the compiler.

        Args:
            settings: Resolution, tempo and device limits (defaults if omitted)
        """
        self.settings = settings or CompileSettings()

    def compile(self, music: Music, start_tick: int = 0) -> Schedule:
        """
        Compile a piece of music.

        Args:
            music: The piece to compile
            start_tick: Tick where the piece begins

        Returns:
            The finished schedule

        Raises:
            ChannelCapacityExceeded: If the piece uses more instruments than channels
        """
        if start_tick < 0:
            raise PreconditionViolation(f"Start tick must be >= 0, got {start_tick}")

        context = CompileContext(settings=self.settings)
        end_tick = compile_at(music, start_tick, context)
        schedule = context.schedule(end_tick)
        logger.debug(
            f"Compiled {schedule.note_count()} notes on {len(schedule.channels)} channels, "
            f"ending at tick {end_tick}"
        )
        return schedule


def compile_music(
    music: Music,
    settings: CompileSettings | None = None,
    start_tick: int = 0,
) -> Schedule:
    """Compile music with the given (or default) settings."""
    return MusicCompiler(settings).compile(music, start_tick)
