"""Shared test fixtures and utilities."""

import logging
from pathlib import Path

import pytest

from jukebox.config.settings import JukeboxSettings
from jukebox.player.controller import JukeboxController
from jukebox.song import Song
from tests.mocks.mock_output import MockMediaLookup, MockNotifier, MockPlaybackHost
from tests.mocks.mock_rcon import FakeRconServer


@pytest.fixture
def settings(tmp_path: Path) -> JukeboxSettings:
    """JukeboxSettings with fast timing for tests."""
    return JukeboxSettings(
        rcon_host="127.0.0.1",
        rcon_port=21770,
        rcon_password="test_password",
        console_log_file=tmp_path / "console.log",
        force_polling=True,
        poll_delay_ms=50,
        skip_vote_threshold=4,
        grace_period_secs=0,  # No grace period for tests
        keep_alive_interval_secs=0.01,
        connect_retry_interval_secs=0.01,
        microphone_pulse_delay_secs=0,
        nircmd_path=tmp_path / "nircmd.exe",
        microphone_device="CABLE Output",
        mpv_path="mpv",
        mpv_audio_device=None,
        volume=50,
        log_level=logging.INFO,
    )


def make_song(
    title: str,
    channel: str = "TestChannel",
    duration: float = 180.0,
) -> Song:
    """Helper to create test Song instances."""
    song_id = title.lower().replace(" ", "-")
    return Song(
        id=song_id,
        title=title,
        channel=channel,
        url=f"https://www.youtube.com/watch?v={song_id}",
        audio_url=f"https://audio.example.com/{song_id}.webm",
        duration_seconds=duration,
    )


@pytest.fixture
def sample_songs() -> list[Song]:
    """Sample song list for testing."""
    return [
        make_song("Song A", channel="Alice", duration=180.0),
        make_song("Song B", channel="Bob", duration=205.0),
        make_song("Song C", channel="Charlie", duration=3725.0),
    ]


@pytest.fixture
def mock_notifier() -> MockNotifier:
    """Fresh MockNotifier instance."""
    return MockNotifier()


@pytest.fixture
def mock_playback() -> MockPlaybackHost:
    """Fresh MockPlaybackHost instance."""
    return MockPlaybackHost()


@pytest.fixture
def mock_media(sample_songs) -> MockMediaLookup:
    """MockMediaLookup that finds each sample song by its title."""
    return MockMediaLookup({song.title: song for song in sample_songs})


@pytest.fixture
def controller(settings, mock_notifier, mock_playback, mock_media) -> JukeboxController:
    """JukeboxController wired to mocks."""
    return JukeboxController(settings, mock_notifier, mock_playback, mock_media)


@pytest.fixture
def rcon_server() -> FakeRconServer:
    """Fake game server accepting every connection."""
    return FakeRconServer()
