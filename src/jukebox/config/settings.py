"""Runtime settings for the jukebox.

Settings loaded from environment variables and provided to components via dependency injection.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from jukebox.config.discovery import find_console_log


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class JukeboxSettings:
    """Runtime settings for the jukebox."""

    # RCON connection
    rcon_host: str
    rcon_port: int
    rcon_password: str

    # Chat ingestion
    console_log_file: Path | None
    force_polling: bool
    poll_delay_ms: int

    # Queue behaviour
    skip_vote_threshold: int
    grace_period_secs: float

    # Session timers
    keep_alive_interval_secs: float
    connect_retry_interval_secs: float
    microphone_pulse_delay_secs: float

    # Audio routing
    nircmd_path: Path
    microphone_device: str

    # Playback
    mpv_path: str
    mpv_audio_device: str | None
    volume: int

    log_level: int

    @property
    def audio_routing_command(self) -> list[str]:
        """Command line that makes the virtual cable the default microphone."""
        return [
            str(self.nircmd_path),
            "setdefaultsounddevice",
            self.microphone_device,
            "1",
        ]

    @staticmethod
    def from_environment() -> "JukeboxSettings":
        """Load settings from environment variables.

        Returns:
            JukeboxSettings instance with values from environment variables.
        """
        console_log = os.environ.get("JUKEBOX_CONSOLE_LOG")
        console_log_file = Path(console_log) if console_log else find_console_log()

        log_level_name = os.environ.get("JUKEBOX_LOG_LEVEL", "INFO").upper()
        log_level = logging.getLevelNamesMapping().get(log_level_name, logging.INFO)

        return JukeboxSettings(
            rcon_host=os.environ.get("JUKEBOX_RCON_HOST", "127.0.0.1"),
            rcon_port=int(os.environ.get("JUKEBOX_RCON_PORT", "21770")),
            rcon_password=os.environ.get("JUKEBOX_RCON_PASSWORD", "nodejs"),
            console_log_file=console_log_file,
            force_polling=_env_bool("JUKEBOX_FORCE_POLLING", True),
            poll_delay_ms=int(os.environ.get("JUKEBOX_POLL_DELAY_MS", "500")),
            skip_vote_threshold=int(os.environ.get("JUKEBOX_SKIP_VOTES", "4")),
            grace_period_secs=float(os.environ.get("JUKEBOX_GRACE_PERIOD_SECS", "2")),
            keep_alive_interval_secs=float(
                os.environ.get("JUKEBOX_KEEP_ALIVE_SECS", "3")
            ),
            connect_retry_interval_secs=float(
                os.environ.get("JUKEBOX_CONNECT_RETRY_SECS", "5")
            ),
            microphone_pulse_delay_secs=float(
                os.environ.get("JUKEBOX_MICROPHONE_PULSE_SECS", "1")
            ),
            nircmd_path=Path(
                os.environ.get("JUKEBOX_NIRCMD_PATH", "nircmd/nircmd.exe")
            ),
            microphone_device=os.environ.get(
                "JUKEBOX_MICROPHONE_DEVICE", "CABLE Output"
            ),
            mpv_path=os.environ.get("JUKEBOX_MPV_PATH", "mpv"),
            mpv_audio_device=os.environ.get("JUKEBOX_MPV_AUDIO_DEVICE"),
            volume=int(os.environ.get("JUKEBOX_VOLUME", "50")),
            log_level=log_level,
        )

    def validate(self, logger: logging.Logger) -> None:
        """Log warnings for missing optional configuration.

        Args:
            logger: Logger instance to use for warnings.
        """
        if not self.nircmd_path.is_file():
            logger.warning(
                f"{self.nircmd_path} is not a valid file, fixing the microphone will fail "
                "until JUKEBOX_NIRCMD_PATH points at nircmd"
            )

        if self.mpv_audio_device is None:
            logger.warning(
                "JUKEBOX_MPV_AUDIO_DEVICE is not set, songs will play on the default output device"
            )

        if self.rcon_password == "nodejs":
            logger.info(
                "Using the default RCON password, launch the game with +rcon_password nodejs"
            )
