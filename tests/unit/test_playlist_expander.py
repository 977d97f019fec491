#!/usr/bin/env python3
"""
Unit tests for the expand strategy.
"""

import pytest
from playlist_editor.exceptions import ExternalServiceError
from playlist_editor.models.edit_command import parse_edit_command
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.services.playlist_expander import PlaylistExpander

def expand_command(**parameters):
    return parse_edit_command("expand", "add_tracks", parameters)

class TestPlaylistExpander:
    """Unit tests for PlaylistExpander."""

    @pytest.mark.asyncio
    async def test_without_catalog_tracks_unchanged(self, sample_tracks):
        result = await PlaylistExpander().apply(sample_tracks, expand_command(expansion_type="similar"))

        assert result.tracks == sample_tracks
        assert result.explanation == "No catalog search is configured; no similar tracks were added"
        assert result.changes == ["Planned expansion: similar tracks up to 10 total"]

    @pytest.mark.asyncio
    async def test_target_already_reached(self, sample_tracks, fake_catalog):
        catalog = fake_catalog()

        result = await PlaylistExpander(catalog).apply(sample_tracks, expand_command(target_size=3))

        assert result.tracks == sample_tracks
        assert result.explanation == "Playlist already has 5 tracks; no expansion needed"
        assert catalog.queries == []

    @pytest.mark.asyncio
    async def test_appends_new_tracks_up_to_target(self, sample_tracks, fake_catalog, track_factory):
        found = [
            track_factory("t1"),  # already in the playlist
            track_factory("n1"),
            track_factory("n2"),
            track_factory("n3"),
        ]
        catalog = fake_catalog(default=found)

        result = await PlaylistExpander(catalog).apply(sample_tracks, expand_command(target_size=7))

        assert [t.id for t in result.tracks] == ["t1", "t2", "t3", "t4", "t5", "n1", "n2"]
        assert [t.position for t in result.tracks[5:]] == [5, 6]
        assert result.tracks[:5] == sample_tracks
        assert result.explanation == "Expanded playlist with 2 similar tracks"
        assert result.changes[1] == "Added 2 tracks (target 7)"
        assert len(catalog.queries) == 1

    @pytest.mark.asyncio
    async def test_catalog_failure_keeps_tracks(self, sample_tracks, fake_catalog):
        catalog = fake_catalog(error=ExternalServiceError("unavailable"))

        result = await PlaylistExpander(catalog).apply(sample_tracks, expand_command(expansion_type="genre"))

        assert result.tracks == sample_tracks
        assert result.changes == []
        assert result.explanation == "Could not search the catalog for genre tracks; no changes were made"

    @pytest.mark.asyncio
    async def test_oracle_queries_come_first(self, sample_tracks, fake_catalog, fake_completion):
        completion = fake_completion({"queries": ["trip hop 1998", " ", 3]})
        catalog = fake_catalog()
        expander = PlaylistExpander(catalog, completion)

        queries = await expander.build_queries(sample_tracks, "similar")

        assert queries[0] == "trip hop 1998"
        assert 'artist:"Test Artist"' in queries

    @pytest.mark.asyncio
    async def test_oracle_failure_falls_back_to_derived_queries(
        self, sample_tracks, fake_catalog, fake_completion, track_factory
    ):
        completion = fake_completion(ExternalServiceError("timed out"))
        catalog = fake_catalog(default=[track_factory("n1")])
        expander = PlaylistExpander(catalog, completion)

        result = await expander.apply(sample_tracks, expand_command(target_size=6))

        assert [t.id for t in result.tracks] == ["t1", "t2", "t3", "t4", "t5", "n1"]
        assert result.explanation == "Expanded playlist with 1 similar tracks"
        assert catalog.queries[0][0] == 'artist:"Test Artist"'

    def test_derive_genre_queries(self, sample_tracks):
        queries = PlaylistExpander().derive_queries(sample_tracks, "genre")

        assert queries[0] == 'genre:"ambient"'
        assert len(queries) == 5

    def test_derive_era_queries(self, sample_tracks):
        queries = PlaylistExpander().derive_queries(sample_tracks, "same_era")

        assert queries[0] == 'year:1994-2020 genre:"ambient"'

    def test_derive_similar_uses_preferences(self, sample_tracks):
        preferences = UserPreferences(favoriteArtists=["Bonobo"], preferredGenres=["downtempo"])

        queries = PlaylistExpander().derive_queries(sample_tracks, "similar", preferences)

        assert queries[0] == 'artist:"Bonobo"'
        assert 'genre:"downtempo"' in queries

    def test_derive_free_form_type(self, sample_tracks):
        queries = PlaylistExpander().derive_queries(sample_tracks, "80s synthpop")

        assert queries[0] == "80s synthpop"
