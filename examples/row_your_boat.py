#!/usr/bin/env python3
"""
Example: Row, Row, Row Your Boat as a three-voice round.

Demonstrates:
- Writing a melody in notation
- round() to layer delayed copies of it
- Compiling to a schedule and handing it to mido

Usage:
    python examples/row_your_boat.py
"""

from music_language import Instrument, compile_music
from music_language.compiler import schedule_to_midi
from music_language.core import duration
from music_language.language import notes, round

ROW_YOUR_BOAT = notes(
    "C C C3/4 D/4 E | E3/4 D/4 E3/4 F/4 G2 | "
    "C'/3 C'/3 C'/3 G/3 G/3 G/3 E/3 E/3 E/3 C/3 C/3 C/3 | "
    "G3/4 F/4 E3/4 D/4 C2",
    Instrument.PIANO,
)


def main() -> None:
    """Compile the round and show the schedule."""
    piece = round(ROW_YOUR_BOAT, 4, 3)
    print(f"Melody: {duration(ROW_YOUR_BOAT)} beats, round: {duration(piece)} beats")

    schedule = compile_music(piece)
    print(schedule.render())

    mid = schedule_to_midi(schedule)
    print(f"MIDI track: {len(mid.tracks[0])} messages, {mid.length:.1f} seconds")


if __name__ == "__main__":
    main()
