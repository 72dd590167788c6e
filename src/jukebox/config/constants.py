"""Constants for the jukebox.

These are true constants that never change - console command names, chat markers, etc.
"""

import re
from typing import Any, Final

# Chat command parsing
# Everything outside this set is stripped from a console log line before matching
DISALLOWED_CHAT_CHARACTERS: Final = re.compile(r"[^a-zA-Z0-9 ?:/&.=]")
PLAY_COMMAND_MARKER: Final = "?play "
SKIP_COMMAND_MARKER: Final = "?skip"
# Characters removed from the text preceding ?skip to form the voter's name
VOTER_NAME_STRIP_CHARACTERS: Final = re.compile(r"[ :]")

# The game writes console.log with Windows line endings
LOG_LINE_DELIMITER: Final = "\r\n"

# Seconds to wait on the RCON socket before giving up
RCON_TIMEOUT_SECS: Final = 5.0

# Console commands
SAY_COMMAND: Final = "say"
SAY_TEAM_COMMAND: Final = "say_team"
# Characters that would let announced text run a second console command
UNSAFE_SAY_CHARACTERS: Final = re.compile(r"[;\"\r\n]")
VOICE_RECORD_START: Final = "+voicerecord"
VOICE_RECORD_STOP: Final = "-voicerecord"
VOICE_SETUP_COMMANDS: Final = ("voice_loopback 1", "voice_buffer_ms 200")

# Steam / game layout
TF2_INSTALL_DIR_NAME: Final = "Team Fortress 2"
CONSOLE_LOG_RELATIVE_PATH: Final = ("tf", "console.log")

# yt-dlp
YTDLP_OPTIONS: Final[dict[str, Any]] = {
    "format": "bestaudio/best",
    "default_search": "ytsearch",
    "noplaylist": True,
    "nocheckcertificate": True,
    "prefer_free_formats": True,
    "youtube_include_dash_manifest": False,
    "http_headers": {"Referer": "https://google.com"},
    "quiet": True,
    "no_warnings": True,
}
