"""
Schedule - the compiled form of a piece of music.

This is the finished artifact handed to a player:
- Deterministic: same music and settings → same schedule
- Ordered: events are sorted by tick, ties kept in emission order
- Inspectable: renders to text and to plain dictionaries
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from music_language.constants import Instrument


class EventType(str, Enum):
    """Kinds of scheduled event."""

    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"
    PROGRAM_CHANGE = "program_change"


@dataclass(frozen=True)
class ScheduleEvent:
    """
    A single timestamped event.

    value is the MIDI note number for note events and the program
    number for program changes. tick is absolute from the start.
    """

    type: EventType
    channel: int
    value: int
    tick: int

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.value <= 127:
            kind = "Program" if self.type == EventType.PROGRAM_CHANGE else "Note"
            raise ValueError(f"{kind} must be 0-127, got {self.value}")
        if self.channel < 0:
            raise ValueError(f"Channel must be >= 0, got {self.channel}")
        if self.tick < 0:
            raise ValueError(f"Tick must be >= 0, got {self.tick}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for inspection."""
        return {
            "type": self.type.value,
            "channel": self.channel,
            "value": self.value,
            "tick": self.tick,
        }

    def render(self) -> str:
        """One line of the textual schedule."""
        if self.type == EventType.PROGRAM_CHANGE:
            return f"Event: PROGRAM_CHANGE Program: {self.value} Tick: {self.tick}"
        kind = "NOTE_ON " if self.type == EventType.NOTE_ON else "NOTE_OFF"
        return f"Event: {kind} Pitch: {self.value} Tick: {self.tick}"


@dataclass
class Schedule:
    """
    A compiled piece: ordered events plus the channel each instrument uses.

    end_tick is where the piece stops; for pieces containing forever(...)
    that is where the compile-time loop cap cut the repetition off.
    """

    events: list[ScheduleEvent] = field(default_factory=list)
    channels: dict[Instrument, int] = field(default_factory=dict)
    ticks_per_beat: int = 64
    beats_per_minute: int = 120
    end_tick: int = 0

    def note_count(self) -> int:
        """Number of notes (note-on events) in the schedule."""
        return sum(1 for e in self.events if e.type == EventType.NOTE_ON)

    def events_on(self, channel: int) -> list[ScheduleEvent]:
        """All events for one channel, in schedule order."""
        return [e for e in self.events if e.channel == channel]

    def render(self) -> str:
        """
        Text listing of every event, one per line.

        Useful for debugging a piece without a synthesizer.
        """
        return "".join(f"{event.render()}\n" for event in self.events)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for inspection."""
        return {
            "ticks_per_beat": self.ticks_per_beat,
            "beats_per_minute": self.beats_per_minute,
            "end_tick": self.end_tick,
            "channels": {instr.name: channel for instr, channel in self.channels.items()},
            "events": [e.to_dict() for e in self.events],
        }

    def summary(self) -> dict[str, Any]:
        """Generate a summary for quick inspection."""
        note_values = [e.value for e in self.events if e.type == EventType.NOTE_ON]
        return {
            "total_events": len(self.events),
            "total_notes": len(note_values),
            "end_tick": self.end_tick,
            "seconds": self.seconds(),
            "instruments": [instr.name for instr in self.channels],
            "pitch_range": (
                min(note_values) if note_values else 0,
                max(note_values) if note_values else 0,
            ),
        }

    def seconds(self) -> float:
        """Playing time at the schedule's tempo."""
        return self.end_tick * 60 / (self.ticks_per_beat * self.beats_per_minute)

    def __str__(self) -> str:
        return self.render()
