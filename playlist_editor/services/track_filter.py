"""
Filter strategy: removes tracks failing a predicate.

Filtering never reorders and never adds tracks; the result is always an
order-preserving subsequence of the input. Missing audio attributes are not
a removal reason on their own: energy and valence fall back to the
EditorDefaults values and tracks without a tempo survive BPM filters.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple
from playlist_editor.exceptions import UnknownActionError
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import PureEditStrategy
from playlist_editor.utils.track_utils import (
    contains_any,
    format_duration,
    is_mostly_english,
    value_or_default,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[Track], bool]

class TrackFilter(PureEditStrategy):
    """Implements the `filter` command type."""

    command_type = CommandType.FILTER

    def run(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)

        builders: Dict[str, Callable[[EditCommand], Tuple[Predicate, str]]] = {
            "remove_short_tracks": self._short_tracks,
            "remove_by_year": self._year_window,
            "remove_by_genre": self._genres,
            "remove_low_energy": self._low_energy,
            "remove_low_valence": self._low_valence,
            "remove_by_bpm": self._bpm_window,
            "remove_by_artist": self._artists,
            "remove_duplicates": self._duplicates,
            "remove_title_keywords": self._title_keywords,
            "remove_non_english": self._non_english,
        }
        if command.action not in builders:
            raise UnknownActionError(self.command_type.value, command.action)

        keep, description = builders[command.action](command)
        kept = [track for track in tracks if keep(track)]
        removed = len(tracks) - len(kept)
        logger.debug(f"{command.action}: kept {len(kept)} of {len(tracks)} tracks")

        return EditResult(
            tracks=kept,
            explanation=f"Applied {command.action} filter to your playlist",
            changes=[description.replace("{count}", str(removed))]
        )

    def _short_tracks(self, command):
        min_seconds = command.get("min_duration", self.defaults.min_duration_seconds)
        min_ms = min_seconds * 1000

        def keep(track):
            # exactly min_duration is not "shorter than" it
            return track.duration_ms >= min_ms

        return keep, f"Removed {{count}} tracks shorter than {format_duration(min_seconds)}"

    def _year_window(self, command):
        # after_year is the lower bound, before_year the upper bound, both inclusive
        after_year = command.get("after_year")
        before_year = command.get("before_year")

        def keep(track):
            year = track.release_year or 0
            if after_year is not None and year < after_year:
                return False
            if before_year is not None and year > before_year:
                return False
            return True

        if after_year is not None and before_year is not None:
            window = f"{after_year} to {before_year}"
        elif after_year is not None:
            window = f"{after_year} onward"
        elif before_year is not None:
            window = f"up to {before_year}"
        else:
            window = "any year"
        return keep, f"Removed {{count}} tracks released outside {window}"

    def _genres(self, command):
        excluded = command.get("exclude_genres", [])

        def keep(track):
            return not any(contains_any(genre, excluded) for genre in track.genres)

        return keep, f"Removed {{count}} tracks from excluded genres: {', '.join(excluded) or 'none'}"

    def _low_energy(self, command):
        min_energy = command.get("min_energy", self.defaults.min_energy)

        def keep(track):
            return value_or_default(track.energy, self.defaults.missing_energy) >= min_energy

        return keep, f"Removed {{count}} tracks with energy below {min_energy:g}"

    def _low_valence(self, command):
        min_valence = command.get("min_valence", self.defaults.min_valence)

        def keep(track):
            return value_or_default(track.valence, self.defaults.missing_valence) >= min_valence

        return keep, f"Removed {{count}} tracks with valence below {min_valence:g}"

    def _bpm_window(self, command):
        min_bpm = command.get("min_bpm")
        max_bpm = command.get("max_bpm")

        def keep(track):
            if track.tempo is None:
                return True
            if min_bpm is not None and track.tempo < min_bpm:
                return False
            if max_bpm is not None and track.tempo > max_bpm:
                return False
            return True

        low = f"{min_bpm:g}" if min_bpm is not None else "0"
        high = f"{max_bpm:g}" if max_bpm is not None else "any"
        return keep, f"Removed {{count}} tracks outside {low}-{high} BPM"

    def _artists(self, command):
        excluded = command.get("exclude_artists", [])

        def keep(track):
            return not contains_any(track.artist, excluded)

        return keep, f"Removed {{count}} tracks by excluded artists: {', '.join(excluded) or 'none'}"

    def _duplicates(self, command):
        seen = set()

        def keep(track):
            key = (track.name.strip().lower(), track.artist.strip().lower())
            if key in seen:
                return False
            seen.add(key)
            return True

        return keep, "Removed {count} duplicate tracks"

    def _title_keywords(self, command):
        keywords = command.get("keywords") or list(self.defaults.title_keywords)

        def keep(track):
            return not contains_any(track.name, keywords)

        return keep, f"Removed {{count}} tracks with unwanted title keywords: {', '.join(keywords)}"

    def _non_english(self, command):
        ratio = self.defaults.english_ascii_ratio

        def keep(track):
            return is_mostly_english(track.name, ratio)

        return keep, "Removed {count} non-English tracks"
