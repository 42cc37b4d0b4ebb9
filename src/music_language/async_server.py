#!/usr/bin/env python3
"""
Async Music Language MCP Server using chuk-mcp-server

This server exposes the music language over MCP. Pieces are written in a
simplified abc notation and compiled to tick-stamped MIDI event schedules.

The server provides tools for:
- Listing instruments
- Parsing notation and reporting durations
- Compiling lines, rounds and accompaniments to schedules
"""

import logging

from chuk_mcp_server import ChukMCPServer

from music_language.models import load_settings, settings_path
from music_language.tools import register_compilation_tools, register_notation_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("music-language")

# Optional settings file (MUSIC_LANGUAGE_CONFIG or ./music_language.yaml)
SETTINGS_PATH = settings_path()
settings = load_settings(SETTINGS_PATH)

# Register all tools
notation_tools = register_notation_tools(mcp)
compilation_tools = register_compilation_tools(mcp, settings)

# Export tool functions for direct access
music_list_instruments = notation_tools["music_list_instruments"]
music_parse_notes = notation_tools["music_parse_notes"]

music_compile_notes = compilation_tools["music_compile_notes"]
music_compile_round = compilation_tools["music_compile_round"]
music_compile_accompaniment = compilation_tools["music_compile_accompaniment"]

logger.info("Music Language MCP Server initialized")
logger.info(f"  Settings file: {SETTINGS_PATH if SETTINGS_PATH.exists() else '(defaults)'}")
logger.info(
    f"  Resolution: {settings.ticks_per_beat} ticks/beat at {settings.beats_per_minute} BPM, "
    f"{settings.channel_capacity} channels"
)
