"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from music_language.compiler import MusicCompiler
from music_language.models import CompileSettings


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings() -> CompileSettings:
    """Default compile settings (64 ticks per beat, 120 BPM, 16 channels)."""
    return CompileSettings()


@pytest.fixture
def small_settings() -> CompileSettings:
    """Coarse settings with a tiny forever cap: 4 ticks per beat, cap of 8 ticks."""
    return CompileSettings(ticks_per_beat=4, beats_per_minute=2, max_playback_minutes=1)


@pytest.fixture
def compiler(settings: CompileSettings) -> MusicCompiler:
    """Compiler with default settings."""
    return MusicCompiler(settings)
