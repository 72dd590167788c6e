"""Tests for JukeboxController core logic."""

import asyncio
from dataclasses import replace

from jukebox.chat.commands import PlaySong, VoteSkip
from jukebox.player.controller import JukeboxController
from tests.conftest import make_song


async def queue_titles(controller: JukeboxController, *titles: str) -> None:
    for title in titles:
        await controller.enqueue(title)


class TestJukeboxController:
    """Tests for initial controller state."""

    def test_starts_empty(self, controller):
        """Controller starts with nothing queued or playing."""
        assert controller.current_song is None
        assert controller.queue == ()
        assert controller.tally.count == 0

    async def test_total_duration(self, controller):
        """Total duration sums every queued song."""
        await queue_titles(controller, "Song A", "Song B")
        assert controller.total_duration == 385.0


class TestEnqueue:
    """Tests for enqueue()."""

    async def test_first_song_starts_playing(
        self, controller, mock_playback, mock_notifier, sample_songs
    ):
        """A song added to an empty queue becomes current and is sent to the host once."""
        song = await controller.enqueue("Song A")

        assert song is sample_songs[0]
        assert controller.current_song is song
        assert controller.queue == (song,)
        assert mock_playback.events == [("change_song", song)]
        # Now playing is announced by the host's started event, not here
        assert mock_notifier.announcements == [('Searching for "Song A"...', True)]

    async def test_later_songs_are_queued(
        self, controller, mock_playback, mock_notifier, sample_songs
    ):
        """Songs added behind the current one are announced, not played."""
        await queue_titles(controller, "Song A", "Song B")

        assert controller.current_song is sample_songs[0]
        assert controller.queue == (sample_songs[0], sample_songs[1])
        assert mock_playback.changed_to == [sample_songs[0]]
        assert mock_notifier.announcements[-1] == ("Added Song B to queue", True)

    async def test_lookup_failure_adds_nothing(
        self, controller, mock_playback, mock_notifier, mock_media
    ):
        """A failed lookup queues nothing and stays quiet after the search notice."""
        song = await controller.enqueue("no such song")

        assert song is None
        assert controller.queue == ()
        assert controller.current_song is None
        assert mock_playback.events == []
        assert mock_notifier.texts == ['Searching for "no such song"...']
        assert mock_media.queries == ["no such song"]

    async def test_same_song_twice_is_queued_twice(
        self, controller, mock_media, mock_playback
    ):
        """Two requests for one video queue two entries."""
        mock_media.songs["dup"] = make_song("Dup")
        mock_media.songs["dup again"] = make_song("Dup")

        await queue_titles(controller, "dup", "dup again")

        assert len(controller.queue) == 2
        assert len(mock_playback.changed_to) == 1


class TestSkipVotes:
    """Tests for register_skip_vote()."""

    async def test_vote_without_current_song_is_ignored(self, controller, mock_notifier):
        """Votes do nothing when nothing is playing."""
        await controller.register_skip_vote("alice")

        assert controller.tally.count == 0
        assert mock_notifier.announcements == []

    async def test_progress_is_announced(self, controller, mock_notifier):
        """Each vote below the threshold announces progress in all chat."""
        await controller.enqueue("Song A")
        await controller.register_skip_vote("alice")
        await controller.register_skip_vote("bob")

        assert mock_notifier.announcements[-2:] == [
            ("alice wants to skip this song (1/4)", False),
            ("bob wants to skip this song (2/4)", False),
        ]

    async def test_repeat_votes_count_once(self, controller, mock_notifier):
        """The same player voting repeatedly adds one vote in total."""
        await controller.enqueue("Song A")
        for _ in range(5):
            await controller.register_skip_vote("alice")

        assert controller.tally.count == 1
        assert mock_notifier.texts[-1] == "alice wants to skip this song (1/4)"
        assert "Skipping song." not in mock_notifier.texts

    async def test_threshold_skips_song(
        self, controller, mock_notifier, mock_playback, sample_songs
    ):
        """Four distinct voters skip to the next song exactly once."""
        await queue_titles(controller, "Song A", "Song B")

        for voter in ("alice", "bob", "carol", "dave"):
            await controller.register_skip_vote(voter)

        # Tally is reset as soon as the vote passes
        assert controller.tally.count == 0
        assert mock_notifier.announcements[-1] == ("Skipping song.", True)

        await controller.wait_idle()

        assert controller.current_song is sample_songs[1]
        assert controller.queue == (sample_songs[1],)
        assert mock_playback.changed_to == [sample_songs[0], sample_songs[1]]

    async def test_skipping_last_song_stops_playback(
        self, controller, mock_playback
    ):
        """Skipping the only song empties the queue and stops the host."""
        await controller.enqueue("Song A")
        for voter in ("alice", "bob", "carol", "dave"):
            await controller.register_skip_vote(voter)
        await controller.wait_idle()

        assert controller.current_song is None
        assert controller.queue == ()
        assert mock_playback.events[-1] == ("stop",)
        assert len(mock_playback.changed_to) == 1

    async def test_votes_do_not_carry_over(self, controller, mock_notifier):
        """A new song starts with an empty tally."""
        await queue_titles(controller, "Song A", "Song B")
        await controller.register_skip_vote("alice")
        await controller.register_skip_vote("bob")

        await controller.on_playback_finished()
        await controller.wait_idle()

        assert controller.tally.count == 0
        await controller.register_skip_vote("alice")
        assert mock_notifier.texts[-1] == "alice wants to skip this song (1/4)"

    async def test_custom_threshold(
        self, settings, mock_notifier, mock_playback, mock_media
    ):
        """The threshold comes from settings."""
        controller = JukeboxController(
            replace(settings, skip_vote_threshold=2),
            mock_notifier,
            mock_playback,
            mock_media,
        )
        await controller.enqueue("Song A")
        await controller.register_skip_vote("alice")
        await controller.register_skip_vote("bob")

        assert mock_notifier.texts[-2:] == [
            "alice wants to skip this song (1/2)",
            "Skipping song.",
        ]


class TestAdvance:
    """Tests for advance() and the grace-period scheduling around it."""

    async def test_advance_without_current_song_is_noop(self, controller, mock_playback):
        """advance() on an empty queue changes nothing."""
        await controller.advance()
        await controller.advance()

        assert controller.current_song is None
        assert mock_playback.events == []

    async def test_finished_song_moves_to_next(
        self, controller, mock_notifier, mock_playback, sample_songs
    ):
        """A finished song is announced, then the next one plays."""
        await queue_titles(controller, "Song A", "Song B")

        await controller.on_playback_finished()
        assert mock_notifier.announcements[-1] == (
            "Song A has finished playing.",
            False,
        )
        # Still playing until the grace period is over
        assert controller.current_song is sample_songs[0]

        await controller.wait_idle()

        assert controller.current_song is sample_songs[1]
        assert controller.queue == (sample_songs[1],)
        assert mock_playback.events[-1] == ("change_song", sample_songs[1])

    async def test_double_scheduled_advance_skips_one_song(
        self, controller, sample_songs
    ):
        """Two advances scheduled for the same song only move the queue once."""
        await queue_titles(controller, "Song A", "Song B", "Song C")

        await controller.on_playback_finished()
        await controller.manual_skip()
        await controller.wait_idle()

        assert controller.current_song is sample_songs[1]
        assert controller.queue == (sample_songs[1], sample_songs[2])

    async def test_vote_and_finish_during_grace_period(
        self, settings, mock_notifier, mock_playback, mock_media, sample_songs
    ):
        """A song that finishes while a passed vote is pending is only skipped once."""
        controller = JukeboxController(
            replace(settings, grace_period_secs=0.05),
            mock_notifier,
            mock_playback,
            mock_media,
        )
        await queue_titles(controller, "Song A", "Song B", "Song C")
        for voter in ("alice", "bob", "carol", "dave"):
            await controller.register_skip_vote(voter)
        await controller.on_playback_finished()

        await controller.wait_idle()

        assert controller.current_song is sample_songs[1]

    async def test_play_during_grace_period_uses_current_state(
        self, settings, mock_notifier, mock_playback, mock_media, sample_songs
    ):
        """A song requested while a skip is pending plays next once the skip lands."""
        controller = JukeboxController(
            replace(settings, grace_period_secs=0.05),
            mock_notifier,
            mock_playback,
            mock_media,
        )
        await controller.enqueue("Song A")
        await controller.manual_skip()
        await controller.enqueue("Song B")

        # Still in the grace period: B is queued behind A
        assert mock_notifier.texts[-1] == "Added Song B to queue"

        await controller.wait_idle()

        assert controller.current_song is sample_songs[1]
        assert mock_playback.changed_to == [sample_songs[0], sample_songs[1]]

    async def test_advance_cancelled_on_close(
        self, settings, mock_notifier, mock_playback, mock_media, sample_songs
    ):
        """Closing the controller drops pending advances."""
        controller = JukeboxController(
            replace(settings, grace_period_secs=10),
            mock_notifier,
            mock_playback,
            mock_media,
        )
        await queue_titles(controller, "Song A", "Song B")
        await controller.on_playback_finished()
        await controller.close()
        await asyncio.sleep(0)

        assert controller.current_song is sample_songs[0]


class TestPlaybackEvents:
    """Tests for events reported by the playback host."""

    async def test_started_announces_now_playing(self, controller, mock_notifier):
        """The host's started event announces the current song to the team."""
        await controller.enqueue("Song B")
        await controller.on_playback_started()

        assert mock_notifier.announcements[-1] == (
            "Now playing: Song B - Bob (3 minutes, 25 seconds)",
            True,
        )

    async def test_events_without_current_song_are_ignored(
        self, controller, mock_notifier, mock_playback
    ):
        """Started, finished and skip events do nothing when nothing is playing."""
        await controller.on_playback_started()
        await controller.on_playback_finished()
        await controller.manual_skip()
        await controller.wait_idle()

        assert mock_notifier.announcements == []
        assert mock_playback.events == []

    async def test_manual_skip(self, controller, mock_notifier, sample_songs):
        """An operator skip ignores the tally and advances after the grace period."""
        await queue_titles(controller, "Song A", "Song B")
        await controller.register_skip_vote("alice")

        await controller.manual_skip()
        assert mock_notifier.announcements[-1] == ("Skipping song.", True)

        await controller.wait_idle()
        assert controller.current_song is sample_songs[1]
        assert controller.tally.count == 0


class TestHandleCommand:
    """Tests for dispatching parsed chat commands."""

    async def test_play_command_enqueues(self, controller, sample_songs):
        """PlaySong looks up and queues its query."""
        await controller.handle_command(PlaySong(query="Song C"))
        assert controller.current_song is sample_songs[2]

    async def test_skip_command_votes(self, controller):
        """VoteSkip counts a vote for its actor."""
        await controller.enqueue("Song A")
        await controller.handle_command(VoteSkip(actor="alice"))
        assert controller.tally.voters == {"alice"}
