"""
Tests for the music compiler.

Tests cover:
- Scheduling of each variant
- Event ordering (concat, together)
- forever(...) unrolling, its cap and the zero-duration edge case
- Channel allocation and capacity
"""

from fractions import Fraction
from functools import reduce

import pytest

from music_language.compiler import (
    CompileContext,
    EventType,
    MusicCompiler,
    ScheduleEvent,
    compile_at,
    compile_music,
)
from music_language.constants import Instrument
from music_language.core import (
    MIDDLE_C,
    Concat,
    Forever,
    Note,
    Pitch,
    Rest,
    Together,
    duration,
)
from music_language.errors import ChannelCapacityExceeded, PreconditionViolation
from music_language.language import notes, round, transpose
from music_language.models import CompileSettings

PIANO = Instrument.PIANO
ON = EventType.NOTE_ON
OFF = EventType.NOTE_OFF
PROGRAM = EventType.PROGRAM_CHANGE


def event(event_type: EventType, channel: int, value: int, tick: int) -> ScheduleEvent:
    return ScheduleEvent(type=event_type, channel=channel, value=value, tick=tick)


class TestLeaves:
    """Tests for notes and rests."""

    def test_note(self, settings: CompileSettings) -> None:
        """A note is a note on at the start tick and a note off after its duration."""
        context = CompileContext(settings=settings)
        end = compile_at(Note(2, MIDDLE_C, PIANO), 10, context)

        assert end == 10 + 128
        assert context.events == [
            event(PROGRAM, 0, 0, 0),
            event(ON, 0, 60, 10),
            event(OFF, 0, 60, 138),
        ]
        assert context.channels == {PIANO: 0}

    def test_rest(self, settings: CompileSettings) -> None:
        """A rest only advances time."""
        context = CompileContext(settings=settings)
        assert compile_at(Rest(3), 5, context) == 5 + 192
        assert context.events == []
        assert context.channels == {}

    def test_ticks_truncate(self) -> None:
        """Durations that fall between ticks are truncated."""
        context = CompileContext(settings=CompileSettings(ticks_per_beat=4))
        assert context.ticks(Fraction(1, 3)) == 1
        assert context.ticks(Fraction(7, 8)) == 3
        assert compile_at(Rest(Fraction(1, 3)), 0, context) == 1

    def test_zero_length_note(self, compiler: MusicCompiler) -> None:
        """A zero-length note still turns on and off."""
        schedule = compiler.compile(Note(0, MIDDLE_C, PIANO))
        assert [(e.type, e.tick) for e in schedule.events] == [(PROGRAM, 0), (ON, 0), (OFF, 0)]
        assert schedule.end_tick == 0


class TestComposition:
    """Tests for concat and together."""

    def test_concat(self, compiler: MusicCompiler) -> None:
        """The second piece starts where the first ends."""
        schedule = compiler.compile(notes("C D"))
        assert schedule.events == [
            event(PROGRAM, 0, 0, 0),
            event(ON, 0, 60, 0),
            event(OFF, 0, 60, 64),
            event(ON, 0, 62, 64),
            event(OFF, 0, 62, 128),
        ]
        assert schedule.end_tick == 128

    def test_concat_with_rests(self, compiler: MusicCompiler) -> None:
        """Rests leave gaps."""
        schedule = compiler.compile(notes(". C/2 .2 D"))
        ons = [e.tick for e in schedule.events if e.type == ON]
        assert ons == [64, 64 + 32 + 128]
        assert schedule.end_tick == 64 + 32 + 128 + 64

    def test_together_interleaves_by_tick(self, compiler: MusicCompiler) -> None:
        """Both voices start together; ties keep top before bottom."""
        top = Note(2, MIDDLE_C, PIANO)
        bottom = Concat(Note(1, Pitch(4), Instrument.VIOLIN), Note(1, Pitch(5), Instrument.VIOLIN))
        schedule = compiler.compile(Together(top, bottom))

        assert schedule.events == [
            event(PROGRAM, 0, 0, 0),
            event(ON, 0, 60, 0),
            event(PROGRAM, 1, 40, 0),
            event(ON, 1, 64, 0),
            event(OFF, 1, 64, 64),
            event(ON, 1, 65, 64),
            event(OFF, 0, 60, 128),
            event(OFF, 1, 65, 128),
        ]
        assert schedule.end_tick == 128

    def test_together_returns_later_end(self, settings: CompileSettings) -> None:
        """Together ends when its longer voice ends."""
        context = CompileContext(settings=settings)
        end = compile_at(Together(Rest(1), Rest(3)), 0, context)
        assert end == 192
        end = compile_at(Together(Rest(3), Rest(1)), 0, context)
        assert end == 192

    def test_ticks_non_decreasing(self, compiler: MusicCompiler) -> None:
        """A multi-voice schedule is ordered by tick."""
        melody = notes("C C C3/4 D/4 E | E3/4 D/4 E3/4 F/4 G2")
        schedule = compiler.compile(round(melody, 2, 3))
        ticks = [e.tick for e in schedule.events]
        assert ticks == sorted(ticks)
        assert schedule.note_count() == 3 * 10

    def test_start_tick_offsets_everything(self) -> None:
        """Compiling later shifts every note but not program changes."""
        schedule = compile_music(notes("C D"), start_tick=100)
        assert [e.tick for e in schedule.events] == [0, 100, 164, 164, 228]
        assert schedule.end_tick == 228

    def test_negative_start_tick(self, compiler: MusicCompiler) -> None:
        """Pieces cannot start before tick 0."""
        with pytest.raises(PreconditionViolation):
            compiler.compile(notes("C"), start_tick=-1)

    def test_pitch_out_of_midi_range(self, compiler: MusicCompiler) -> None:
        """Notes transposed past the MIDI range cannot be scheduled."""
        with pytest.raises(ValueError, match="Note must be 0-127"):
            compiler.compile(transpose(notes("C"), 100))


class TestForever:
    """Tests for forever(...) unrolling."""

    def test_zero_duration_body(self, settings: CompileSettings) -> None:
        """An empty body is skipped instead of looping."""
        context = CompileContext(settings=settings)
        assert compile_at(Forever(Rest(0)), 0, context) == 0
        assert context.events == []

    def test_zero_duration_body_later(self, settings: CompileSettings) -> None:
        """Skipping an empty body leaves the cursor where it was."""
        context = CompileContext(settings=settings)
        assert compile_at(Forever(Concat(Rest(0), Note(0, MIDDLE_C, PIANO))), 40, context) == 40
        assert context.events == []

    def test_cap(self, small_settings: CompileSettings) -> None:
        """The body repeats until the cap is reached."""
        assert small_settings.max_playback_ticks == 8
        schedule = MusicCompiler(small_settings).compile(Forever(Note(1, MIDDLE_C, PIANO)))
        assert [e.tick for e in schedule.events if e.type == ON] == [0, 4]
        assert schedule.end_tick == 8

    def test_cap_overshoot(self, small_settings: CompileSettings) -> None:
        """The last repetition is played whole, even past the cap."""
        body = Note(Fraction(3, 4), MIDDLE_C, PIANO)  # 3 ticks
        schedule = MusicCompiler(small_settings).compile(Forever(body))
        assert [e.tick for e in schedule.events if e.type == ON] == [0, 3, 6]
        assert schedule.end_tick == 9

    def test_sub_tick_body_terminates(self, small_settings: CompileSettings) -> None:
        """A body shorter than one tick is played once, not forever."""
        body = Note(Fraction(1, 8), MIDDLE_C, PIANO)  # 0 ticks at 4 per beat
        schedule = MusicCompiler(small_settings).compile(Forever(body))
        assert schedule.note_count() == 1
        assert schedule.end_tick == 0

    def test_continues_after_forever(self, small_settings: CompileSettings) -> None:
        """Music after a forever starts where the cap cut it off."""
        music = Concat(Forever(Note(1, MIDDLE_C, PIANO)), Note(1, Pitch(2), PIANO))
        schedule = MusicCompiler(small_settings).compile(music)
        assert [(e.value, e.tick) for e in schedule.events if e.type == ON] == [
            (60, 0),
            (60, 4),
            (62, 8),
        ]
        assert schedule.end_tick == 12

    def test_cap_relative_to_start(self, small_settings: CompileSettings) -> None:
        """The cap counts ticks from where the forever starts."""
        context = CompileContext(settings=small_settings)
        assert compile_at(Forever(Rest(1)), 100, context) == 108

    def test_default_cap_is_ten_minutes(self, compiler: MusicCompiler) -> None:
        """By default forever plays ten minutes' worth of ticks."""
        schedule = compiler.compile(Forever(notes("C D E F")))
        assert schedule.end_tick == 64 * 120 * 10
        assert schedule.seconds() == 600


class TestChannels:
    """Tests for channel allocation."""

    def test_one_channel_per_instrument(self, compiler: MusicCompiler) -> None:
        """Reusing an instrument reuses its channel."""
        music = Concat(
            notes("C D", PIANO), Together(notes("E", Instrument.FLUTE), notes("F", PIANO))
        )
        schedule = compiler.compile(music)
        assert schedule.channels == {PIANO: 0, Instrument.FLUTE: 1}
        programs = [e for e in schedule.events if e.type == PROGRAM]
        assert programs == [event(PROGRAM, 0, 0, 0), event(PROGRAM, 1, 73, 0)]

    def test_program_change_precedes_first_note(self, compiler: MusicCompiler) -> None:
        """Each channel's program change comes before its first note."""
        music = Concat(notes("C D"), notes("E", Instrument.TRUMPET))
        schedule = compiler.compile(music)
        for channel in schedule.channels.values():
            channel_events = schedule.events_on(channel)
            assert channel_events[0].type == PROGRAM

    def test_capacity_filled(self) -> None:
        """Exactly capacity instruments get channels in first-use order."""
        instruments = list(Instrument)[:16]
        music = reduce(Together, [Note(1, MIDDLE_C, instr) for instr in instruments])
        schedule = compile_music(music, CompileSettings(channel_capacity=16))
        assert schedule.channels == {instr: i for i, instr in enumerate(instruments)}

    def test_capacity_exceeded(self) -> None:
        """One instrument too many is fatal."""
        instruments = list(Instrument)[:17]
        music = reduce(Together, [Note(1, MIDDLE_C, instr) for instr in instruments])
        with pytest.raises(ChannelCapacityExceeded, match="limited to 16") as exc_info:
            compile_music(music, CompileSettings(channel_capacity=16))
        assert exc_info.value.capacity == 16

    def test_small_capacity(self) -> None:
        """Capacity comes from the settings."""
        music = Together(notes("C"), notes("C", Instrument.CELLO))
        with pytest.raises(ChannelCapacityExceeded):
            compile_music(music, CompileSettings(channel_capacity=1))

    def test_fresh_context_per_compile(self, compiler: MusicCompiler) -> None:
        """Channel tables do not leak between compiles."""
        first = compiler.compile(notes("C", Instrument.CELLO))
        second = compiler.compile(notes("C", Instrument.OBOE))
        assert first.channels == {Instrument.CELLO: 0}
        assert second.channels == {Instrument.OBOE: 0}


class TestLongPieces:
    """Pieces nested deeper than the interpreter's recursion limit."""

    def test_long_line(self, compiler: MusicCompiler) -> None:
        """A 1200-note line compiles in order."""
        schedule = compiler.compile(notes(" ".join(["C/4"] * 1200)))
        assert schedule.note_count() == 1200
        assert schedule.end_tick == 1200 * 16
        ons = [e.tick for e in schedule.events if e.type == ON]
        assert ons == [i * 16 for i in range(1200)]

    def test_many_voices(self, compiler: MusicCompiler) -> None:
        """A deep stack of simultaneous voices ends with its longest voice."""
        music = Rest(0)
        for i in range(1500):
            music = Together(Note(1, MIDDLE_C, PIANO), Concat(Rest(i % 3), music))
        schedule = compiler.compile(music)
        assert schedule.note_count() == 1500
        assert schedule.end_tick == duration(music) * 64

    def test_together_order_in_long_pieces(self, settings: CompileSettings) -> None:
        """The whole top voice is emitted before the bottom voice starts."""
        top = notes(" ".join(["C/4"] * 1200))
        bottom = notes("D", Instrument.CELLO)
        context = CompileContext(settings=settings)
        end = compile_at(Together(top, bottom), 0, context)

        assert end == 1200 * 16
        cello_on = [i for i, e in enumerate(context.events) if e.type == ON and e.channel == 1]
        assert cello_on == [len(context.events) - 2]

    def test_forever_with_long_body(self, small_settings: CompileSettings) -> None:
        """A long body inside forever(...) still unrolls to the cap."""
        body = notes(" ".join(["C"] * 1200))
        schedule = MusicCompiler(small_settings).compile(Forever(body))
        assert schedule.note_count() == 1200
        assert schedule.end_tick == 1200 * 4
