#!/usr/bin/env python3
"""
Example: Pachelbel's Canon as a three-voice canon over a ground bass.

The bass plays once on its own, then the melody enters in canon (a new
voice every four measures) while the bass keeps repeating underneath.
The melody loops forever, so the schedule is cut off at the compile
settings' playback limit.

Usage:
    python examples/pachelbel_canon.py
"""

from music_language import CompileSettings, Instrument, compile_music
from music_language.language import IDENTITY, accompany, canon, concat, forever, notes

PACHELBEL_BASS = notes("D,2 A,,2 | B,,2 ^F,,2 | G,,2 D,,2 | G,,2 A,,2", Instrument.CELLO)

PACHELBEL_MELODY = notes(
    "^F'2 E'2 | D'2 ^C'2 | B2 A2 | B2 ^C'2 |"
    "D'2 ^C'2 | B2 A2 | G2 ^F2 | G2 E2 |"
    "D ^F A G | ^F D ^F E | D B, D A | G B A G |"
    "^F D E ^C' | D' ^F' A' A | B G A ^F | D D' D3/2 .1/2 |",
    Instrument.VIOLIN,
)


def main() -> None:
    """Compile the canon and print a summary of the schedule."""
    melody_canon = canon(
        forever(PACHELBEL_MELODY),
        16,  # each new voice enters after four 4-beat measures
        IDENTITY,
        3,  # voices
    )
    pachelbel = concat(PACHELBEL_BASS, accompany(melody_canon, PACHELBEL_BASS))

    settings = CompileSettings(max_playback_minutes=2)
    schedule = compile_music(pachelbel, settings)

    summary = schedule.summary()
    print(f"Notes: {summary['total_notes']}")
    print(f"Length: {summary['seconds']:.1f} seconds")
    print(f"Channels: { {instr.name: ch for instr, ch in schedule.channels.items()} }")
    print()
    print("First 20 events:")
    for event in schedule.events[:20]:
        print(f"  {event.render()}")


if __name__ == "__main__":
    main()
