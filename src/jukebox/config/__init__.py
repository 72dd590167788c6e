"""Configuration module for the jukebox.

This module provides a two-tier configuration system:
- constants: Pure constants that never change (chat markers, console commands, etc.)
- settings: Runtime settings loaded from environment variables
"""

# Re-export all constants
from jukebox.config.constants import (
    DISALLOWED_CHAT_CHARACTERS,
    LOG_LINE_DELIMITER,
    PLAY_COMMAND_MARKER,
    SAY_COMMAND,
    SAY_TEAM_COMMAND,
    SKIP_COMMAND_MARKER,
    VOICE_RECORD_START,
    VOICE_RECORD_STOP,
    VOICE_SETUP_COMMANDS,
)

# Re-export settings class
from jukebox.config.settings import JukeboxSettings

__all__ = [
    # Constants
    "DISALLOWED_CHAT_CHARACTERS",
    "LOG_LINE_DELIMITER",
    "PLAY_COMMAND_MARKER",
    "SAY_COMMAND",
    "SAY_TEAM_COMMAND",
    "SKIP_COMMAND_MARKER",
    "VOICE_RECORD_START",
    "VOICE_RECORD_STOP",
    "VOICE_SETUP_COMMANDS",
    # Settings class
    "JukeboxSettings",
]
