"""
Notation tools - MCP tools for reading music notation.

Tools for listing instruments and checking what a piece of notation means.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from music_language.constants import Instrument
from music_language.core import INFINITY, duration
from music_language.language import notes as parse_music

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def format_beats(beats: Any) -> str:
    """Render a duration in beats for JSON (Fraction or infinity)."""
    return "inf" if beats == INFINITY else str(beats)


def register_notation_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register notation tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_instruments() -> str:
        """
        List the instruments notes can be played on.

        Returns:
            JSON string with instrument names and program numbers
        """
        return json.dumps(
            {
                "status": "success",
                "instruments": [
                    {"name": instr.name, "program": instr.program} for instr in Instrument
                ],
                "count": len(Instrument),
            }
        )

    tools["music_list_instruments"] = music_list_instruments

    @mcp.tool  # type: ignore[arg-type]
    async def music_parse_notes(notes: str, instrument: str = "PIANO") -> str:
        """
        Parse a line of notation and describe it.

        Notation is a simplified abc: C is middle C for one beat,
        ^F sharp, _B flat, A' up an octave, G, down an octave,
        C2 two beats, C/2 half a beat, . a rest. Bars (|) are ignored.

        Args:
            notes: Notes and rests, e.g. "C D E F | G2 G2"
            instrument: Instrument name (default PIANO)

        Returns:
            JSON string with the parsed music and its duration in beats

        Example:
            music_parse_notes(notes="C C C3/4 D/4 E")
        """
        try:
            music = parse_music(notes, Instrument.parse(instrument))
            return json.dumps(
                {
                    "status": "success",
                    "music": str(music),
                    "duration": format_beats(duration(music)),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to parse notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_parse_notes"] = music_parse_notes

    return tools
