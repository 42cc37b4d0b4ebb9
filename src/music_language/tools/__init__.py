"""
MCP tool implementations.

Tools are organized by domain:
- notation - Instruments and notation parsing
- compilation - Scheduling notes, rounds and accompaniments
"""

from music_language.tools.compilation import register_compilation_tools
from music_language.tools.notation import register_notation_tools

__all__ = [
    "register_compilation_tools",
    "register_notation_tools",
]
