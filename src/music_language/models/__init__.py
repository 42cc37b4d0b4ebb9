"""
Configuration models.
"""

from music_language.models.settings import CompileSettings, load_settings, settings_path

__all__ = [
    "CompileSettings",
    "load_settings",
    "settings_path",
]
