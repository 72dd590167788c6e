"""Playback hosts that turn queued songs into audio."""

from jukebox.playback.mpv import MpvPlaybackHost

__all__ = ["MpvPlaybackHost"]
