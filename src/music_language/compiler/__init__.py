"""
Compilation pipeline - turns music into a playable schedule.

The pipeline:
    Music (tree)
    → CompileContext (event sink + channel table)
    → Schedule (ordered, tick-stamped events)
    → MidiFile (in memory, for a player)
"""

from music_language.compiler.midi import event_to_message, schedule_to_midi
from music_language.compiler.schedule import EventType, Schedule, ScheduleEvent
from music_language.compiler.scheduler import (
    CompileContext,
    MusicCompiler,
    compile_at,
    compile_music,
)

__all__ = [
    # Scheduler
    "CompileContext",
    "MusicCompiler",
    "compile_at",
    "compile_music",
    # Schedule
    "EventType",
    "Schedule",
    "ScheduleEvent",
    # MIDI
    "event_to_message",
    "schedule_to_midi",
]
