#!/usr/bin/env python3
"""
Unit tests for the sort strategy.
"""

import pytest
from playlist_editor.models.edit_command import parse_edit_command
from playlist_editor.services.track_sorter import TrackSorter

def sort_command(action, **parameters):
    return parse_edit_command("sort", action, parameters)

@pytest.fixture
def sorter():
    return TrackSorter()

class TestTrackSorter:
    """Unit tests for TrackSorter."""

    def test_energy_curve(self, sorter, sample_tracks):
        """Chill lead-in, energetic peak, mid plateau, chill tail."""
        result = sorter.run(sample_tracks, sort_command("energy_curve"))

        assert [t.energy for t in result.tracks] == [0.9, 0.95, 0.5, 0.1, 0.2]
        assert result.changes == [
            "Created energy curve: chill lead-in, energetic peak, mid plateau, chill tail"
        ]

    def test_energy_curve_splits_chill_at_a_third(self, sorter, track_factory):
        tracks = [track_factory(f"c{i}", energy=0.1) for i in range(6)] + [track_factory("peak", energy=0.8)]

        ordered = sorter.energy_curve(tracks)

        assert [t.id for t in ordered] == ["c0", "c1", "peak", "c2", "c3", "c4", "c5"]

    def test_sort_by_bpm_ascending_default(self, sorter, sample_tracks):
        result = sorter.run(sample_tracks, sort_command("sort_by_bpm"))

        assert [t.tempo for t in result.tracks] == [70.0, 80.0, 110.0, 140.0, 170.0]
        assert result.changes == ["Sorted by BPM ascending"]
        assert result.explanation == "Reordered playlist using sort_by_bpm"

    def test_sort_by_bpm_descending(self, sorter, sample_tracks):
        result = sorter.run(sample_tracks, sort_command("sort_by_bpm", ascending=False))

        assert [t.tempo for t in result.tracks] == [170.0, 140.0, 110.0, 80.0, 70.0]
        assert result.changes == ["Sorted by BPM descending"]

    def test_missing_tempo_sorts_as_120(self, sorter, track_factory):
        tracks = [track_factory("fast", tempo=150), track_factory("unknown"), track_factory("slow", tempo=100)]

        result = sorter.run(tracks, sort_command("sort_by_bpm"))

        assert [t.id for t in result.tracks] == ["slow", "unknown", "fast"]

    def test_sort_by_energy_high_to_low(self, sorter, sample_tracks):
        result = sorter.run(sample_tracks, sort_command("sort_by_energy"))

        assert [t.id for t in result.tracks] == ["t5", "t2", "t3", "t4", "t1"]
        assert result.changes == ["Sorted by energy level (high to low)"]

    def test_sort_by_valence(self, sorter, track_factory):
        tracks = [track_factory("a", valence=0.2), track_factory("b", valence=0.9), track_factory("c")]

        result = sorter.run(tracks, sort_command("sort_by_valence"))

        assert [t.id for t in result.tracks] == ["b", "c", "a"]
        assert result.changes == ["Sorted by mood (valence high to low)"]

    def test_sort_by_year_newest_first(self, sorter, sample_tracks):
        result = sorter.run(sample_tracks, sort_command("sort_by_year"))

        assert [t.id for t in result.tracks] == ["t5", "t4", "t3", "t2", "t1"]

    def test_ties_keep_original_order(self, sorter, track_factory):
        tracks = [track_factory(str(i), energy=0.5) for i in range(4)]

        result = sorter.run(tracks, sort_command("sort_by_energy"))

        assert [t.id for t in result.tracks] == ["0", "1", "2", "3"]

    @pytest.mark.parametrize("action", ["sort_by_bpm", "sort_by_energy", "sort_by_valence", "sort_by_year", "energy_curve"])
    def test_sort_is_a_permutation(self, sorter, sample_tracks, action):
        result = sorter.run(sample_tracks, sort_command(action))

        assert sorted(t.id for t in result.tracks) == sorted(t.id for t in sample_tracks)

    @pytest.mark.parametrize("action", ["sort_by_bpm", "sort_by_energy", "sort_by_valence", "sort_by_year"])
    def test_sort_is_idempotent(self, sorter, sample_tracks, action):
        once = sorter.run(sample_tracks, sort_command(action)).tracks
        twice = sorter.run(once, sort_command(action)).tracks

        assert twice == once

    def test_input_not_mutated(self, sorter, sample_tracks):
        original = list(sample_tracks)

        sorter.run(sample_tracks, sort_command("sort_by_energy"))

        assert sample_tracks == original
