"""
MIDI hand-off - the end of the pipeline.

Converts a compiled Schedule into an in-memory mido MidiFile that a
sequencer or synthesizer port can play. All operations are
deterministic: same schedule → same messages.
"""

from __future__ import annotations

from mido import Message, MetaMessage, MidiFile, MidiTrack

from music_language.compiler.schedule import EventType, Schedule, ScheduleEvent
from music_language.constants import DEFAULT_VELOCITY


def event_to_message(event: ScheduleEvent, time: int = 0) -> Message:
    """
    Convert one scheduled event to a mido message.

    Args:
        event: The event to convert
        time: Delta time in ticks since the previous message

    Returns:
        A note_on, note_off or program_change message
    """
    if event.type == EventType.PROGRAM_CHANGE:
        return Message("program_change", channel=event.channel, program=event.value, time=time)
    if event.type == EventType.NOTE_ON:
        return Message(
            "note_on",
            channel=event.channel,
            note=event.value,
            velocity=DEFAULT_VELOCITY,
            time=time,
        )
    return Message("note_off", channel=event.channel, note=event.value, velocity=0, time=time)


def schedule_to_midi(schedule: Schedule) -> MidiFile:
    """
    Convert a Schedule to a single-track MidiFile.

    The schedule's order is kept as is, including the order of events
    that share a tick. Channels must fit the MIDI range (0-15).

    Args:
        schedule: A compiled schedule

    Returns:
        A mido MidiFile, held in memory
    """
    mid = MidiFile(ticks_per_beat=schedule.ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / schedule.beats_per_minute)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))

    # Convert absolute ticks to delta times
    current_tick = 0
    for event in schedule.events:
        track.append(event_to_message(event, time=event.tick - current_tick))
        current_tick = event.tick

    track.append(MetaMessage("end_of_track", time=max(0, schedule.end_tick - current_tick)))

    return mid
