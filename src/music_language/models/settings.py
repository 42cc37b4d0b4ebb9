"""
Compile settings - resolution, tempo, and device limits.

Settings can be built in code or loaded from a YAML file:

    ticks_per_beat: 64
    beats_per_minute: 120
    channel_capacity: 16
    max_playback_minutes: 10
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from music_language.constants import (
    DEFAULT_BEATS_PER_MINUTE,
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_MAX_PLAYBACK_MINUTES,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_TICKS_PER_BEAT,
    SETTINGS_ENV_VAR,
)

logger = logging.getLogger(__name__)


class CompileSettings(BaseModel):
    """
    Configuration for one compile pass.

    beats_per_minute only bounds how far forever(...) is unrolled and
    is passed through to the player; it does not change tick positions.
    """

    ticks_per_beat: int = Field(
        DEFAULT_TICKS_PER_BEAT, gt=0, description="Tick resolution per beat"
    )
    beats_per_minute: int = Field(DEFAULT_BEATS_PER_MINUTE, gt=0, description="Tempo")
    channel_capacity: int = Field(
        DEFAULT_CHANNEL_CAPACITY, gt=0, description="Channels available on the device"
    )
    max_playback_minutes: int = Field(
        DEFAULT_MAX_PLAYBACK_MINUTES,
        gt=0,
        description="How long forever(...) plays before it is cut off",
    )

    model_config = {"frozen": True}

    @property
    def max_playback_ticks(self) -> int:
        """Tick cap for unrolling forever(...)."""
        return self.ticks_per_beat * self.beats_per_minute * self.max_playback_minutes

    @classmethod
    def from_yaml(cls, path: Path) -> CompileSettings:
        """Load settings from a YAML file. Missing keys keep their defaults."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_yaml(self) -> str:
        """Serialize to YAML text."""
        return yaml.safe_dump(self.model_dump(), default_flow_style=False, sort_keys=False)


def settings_path(base_path: Path | None = None) -> Path:
    """
    Where to look for a settings file.

    An explicit path in the MUSIC_LANGUAGE_CONFIG environment variable wins;
    otherwise music_language.yaml in base_path (the working directory by default).
    """
    explicit = os.environ.get(SETTINGS_ENV_VAR)
    if explicit:
        return Path(explicit)
    return (base_path or Path.cwd()) / DEFAULT_SETTINGS_FILE


def load_settings(path: Path | None = None) -> CompileSettings:
    """
    Load settings from path (or settings_path()), falling back to defaults.

    A missing file is not an error. A file that exists but holds invalid
    values raises pydantic's ValidationError.
    """
    path = path or settings_path()
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return CompileSettings()
    logger.info(f"Loading settings from {path}")
    return CompileSettings.from_yaml(path)
