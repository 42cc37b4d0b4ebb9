"""
Compilation tools - MCP tools for scheduling music.

Tools for compiling notation (and rounds and accompaniments built from
it) into tick-stamped event schedules.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from music_language.compiler import MusicCompiler, Schedule
from music_language.constants import Instrument
from music_language.errors import ChannelCapacityExceeded
from music_language.language import accompany, forever, notes, round, transpose
from music_language.models.settings import CompileSettings

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _schedule_response(schedule: Schedule, include_events: bool) -> dict[str, Any]:
    """Build the success payload for a compiled schedule."""
    response: dict[str, Any] = {
        "status": "success",
        "summary": schedule.summary(),
        "channels": {instr.name: channel for instr, channel in schedule.channels.items()},
    }
    if include_events:
        response["events"] = [e.to_dict() for e in schedule.events]
        response["text"] = schedule.render()
    return response


def register_compilation_tools(
    mcp: ChukMCPServer,
    settings: CompileSettings | None = None,
) -> dict[str, Any]:
    """
    Register compilation tools with the MCP server.

    Args:
        mcp: The MCP server instance
        settings: Compile settings shared by every tool

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    compiler = MusicCompiler(settings)

    @mcp.tool  # type: ignore[arg-type]
    async def music_compile_notes(
        notes_text: str,
        instrument: str = "PIANO",
        semitones: int = 0,
        include_events: bool = True,
    ) -> str:
        """
        Compile a line of notation to a schedule of MIDI events.

        Args:
            notes_text: Notes and rests, e.g. "C D E F | G2 G2"
            instrument: Instrument name (default PIANO)
            semitones: Transpose the line by this many semitones
            include_events: Include every event and a text listing

        Returns:
            JSON string with the schedule summary, channels and events

        Example:
            music_compile_notes(notes_text="C E G C'", semitones=2)
        """
        try:
            music = transpose(notes(notes_text, Instrument.parse(instrument)), semitones)
            schedule = compiler.compile(music)
            return json.dumps(_schedule_response(schedule, include_events))
        except (ValueError, ChannelCapacityExceeded) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compile notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_compile_notes"] = music_compile_notes

    @mcp.tool  # type: ignore[arg-type]
    async def music_compile_round(
        notes_text: str,
        instrument: str = "PIANO",
        delay: int = 4,
        voices: int = 3,
        include_events: bool = True,
    ) -> str:
        """
        Compile a round: the same line sung by several voices, each entering later.

        Args:
            notes_text: The line every voice plays
            instrument: Instrument name (default PIANO)
            delay: Beats between voice entries
            voices: Number of voices

        Returns:
            JSON string with the schedule summary, channels and events

        Example:
            music_compile_round(notes_text="C C C3/4 D/4 E", delay=4, voices=3)
        """
        try:
            music = round(notes(notes_text, Instrument.parse(instrument)), delay, voices)
            schedule = compiler.compile(music)
            return json.dumps(_schedule_response(schedule, include_events))
        except (ValueError, ChannelCapacityExceeded) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compile round")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_compile_round"] = music_compile_round

    @mcp.tool  # type: ignore[arg-type]
    async def music_compile_accompaniment(
        melody: str,
        accompaniment: str,
        melody_instrument: str = "VIOLIN",
        accompaniment_instrument: str = "CELLO",
        loop_melody: bool = False,
        include_events: bool = False,
    ) -> str:
        """
        Compile a melody with an accompaniment repeated to fit under it.

        The shorter line repeats until the longer one finishes. With
        loop_melody the melody plays forever and the schedule is cut off
        at the configured playback limit.

        Args:
            melody: Melody notation
            accompaniment: Accompaniment notation
            melody_instrument: Instrument for the melody
            accompaniment_instrument: Instrument for the accompaniment
            loop_melody: Loop the melody forever
            include_events: Include every event and a text listing

        Returns:
            JSON string with the schedule summary, channels and events

        Example:
            music_compile_accompaniment(melody="^F'2 E'2 D'2 ^C'2", accompaniment="D,2 A,,2")
        """
        try:
            top = notes(melody, Instrument.parse(melody_instrument))
            if loop_melody:
                top = forever(top)
            bottom = notes(accompaniment, Instrument.parse(accompaniment_instrument))
            schedule = compiler.compile(accompany(top, bottom))
            return json.dumps(_schedule_response(schedule, include_events))
        except (ValueError, ChannelCapacityExceeded) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compile accompaniment")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_compile_accompaniment"] = music_compile_accompaniment

    return tools
