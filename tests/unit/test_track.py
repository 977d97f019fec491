#!/usr/bin/env python3
"""
Unit tests for Track and Playlist models.
"""

import pytest
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.playlist import Playlist
from playlist_editor.models.track import Track

class TestTrack:
    """Unit tests for Track model."""

    def test_track_creation_minimal(self):
        """Test creating Track with minimal required fields."""
        track = Track(
            id="42",
            catalog_id="4uLU6hMCjMI75M1A2tKUQC",
            name="Test Song",
            artist="Test Artist",
            album="Test Album",
            duration_ms=180000
        )

        assert track.position == 0
        assert track.genres == []
        assert track.audio_features.is_empty
        assert track.energy is None
        assert track.release_year is None

    def test_track_duration_formatting(self, track_factory):
        track = track_factory("1", duration_ms=150000)

        assert track.duration_seconds == 150.0
        assert track.duration_formatted == "2:30"

    @pytest.mark.parametrize("release_date,year", [
        ("1999", 1999),
        ("1999-04", 1999),
        ("1999-04-12", 1999),
        ("", None),
        ("unknown", None),
    ])
    def test_release_year_precision(self, track_factory, release_date, year):
        """Catalog dates come with year, month or day precision."""
        track = track_factory("1", release_date=release_date)

        assert track.release_year == year

    def test_popularity_range(self, track_factory):
        with pytest.raises(ValueError):
            Track(id="1", catalog_id="1", name="n", artist="a", album="b",
                  duration_ms=1000, popularity=150)

    def test_from_dict_reads_flat_audio_attributes(self):
        """Track store rows carry audio attributes flat on the record."""
        track = Track.from_dict({
            "id": 7,
            "spotify_id": "abc",
            "name": "Flat",
            "artist": "Row",
            "album": "Store",
            "duration_ms": 200000,
            "position": 3,
            "energy": 0.7,
            "tempo": 124,
            "genres": ["house"]
        })

        assert track.id == "7"
        assert track.catalog_id == "abc"
        assert track.position == 3
        assert track.energy == 0.7
        assert track.tempo == 124.0
        assert track.genres == ["house"]

    def test_from_dict_without_identifier(self):
        with pytest.raises(ValueError, match="no id"):
            Track.from_dict({"name": "A", "artist": "B", "duration_ms": 1000})

    def test_to_dict_from_dict_keeps_fields(self, track_factory):
        track = track_factory("9", energy=0.3, release_date="2001-02-03", genres=["jazz"])

        restored = Track.from_dict(track.to_dict())

        assert restored == track

    def test_from_spotify_data(self):
        """Test creating Track from a Spotify API track object."""
        spotify_track = {
            "id": "spotify123",
            "name": "Spotify Song",
            "artists": [{"name": "Artist 1"}, {"name": "Artist 2"}],
            "album": {
                "name": "Spotify Album",
                "release_date": "2020-01-01",
                "images": [{"url": "https://i.scdn.co/image/cover"}]
            },
            "duration_ms": 210000,
            "popularity": 85,
            "preview_url": None
        }

        track = Track.from_spotify_data(spotify_track, position=4)

        assert track.catalog_id == "spotify123"
        assert track.artist == "Artist 1"
        assert track.album == "Spotify Album"
        assert track.position == 4
        assert track.release_year == 2020
        assert track.image_url == "https://i.scdn.co/image/cover"

class TestPlaylist:
    """Unit tests for the caller-side Playlist merge."""

    def test_apply_edit_renumbers_positions(self, track_factory):
        tracks = [track_factory(str(i), position=i) for i in range(4)]
        playlist = Playlist(id="p1", name="Mix", tracks=tracks)

        result = EditResult(
            tracks=[tracks[3], tracks[1]],
            explanation="Reordered",
            changes=["Dropped two"]
        )
        playlist.apply_edit(result)

        assert [t.id for t in playlist.tracks] == ["3", "1"]
        assert [t.position for t in playlist.tracks] == [0, 1]
        assert playlist.track_count == 2
        # merge does not mutate the result's tracks
        assert tracks[3].position == 3

    def test_ordered_tracks_uses_position(self, track_factory):
        playlist = Playlist(id="p1", name="Mix", tracks=[
            track_factory("b", position=1),
            track_factory("a", position=0),
        ])

        assert [t.id for t in playlist.ordered_tracks()] == ["a", "b"]

    def test_total_duration_formatted(self, track_factory):
        playlist = Playlist(id="p1", name="Long", tracks=[
            track_factory(str(i), duration_ms=1800000) for i in range(3)
        ])

        assert playlist.total_duration_formatted == "1:30:00"

    def test_from_dict_defaults(self):
        playlist = Playlist.from_dict({"tracks": []})

        assert playlist.name == "Untitled Playlist"
        assert playlist.track_count == 0

class TestEditResult:

    def test_explanation_required(self):
        with pytest.raises(ValueError):
            EditResult(tracks=[], explanation="")

    def test_changes_never_none(self):
        result = EditResult(tracks=[], explanation="Nothing to do", changes=None)

        assert result.changes == []
