"""
Sort strategy: permutes track order without adding or removing tracks.

All orderings use Python's stable sort, so equal keys keep their original
relative order and sorting already-sorted input is a no-op.
"""

import logging
from typing import List, Optional
from playlist_editor.exceptions import UnknownActionError
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import PureEditStrategy
from playlist_editor.utils.track_utils import value_or_default

logger = logging.getLogger(__name__)

class TrackSorter(PureEditStrategy):
    """Implements the `sort` command type."""

    command_type = CommandType.SORT

    def run(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)

        if command.action == "sort_by_bpm":
            ascending = command.get("ascending", True)
            ordered = sorted(tracks, key=self._tempo, reverse=not ascending)
            change = f"Sorted by BPM {'ascending' if ascending else 'descending'}"
        elif command.action == "sort_by_energy":
            ordered = sorted(tracks, key=self._energy, reverse=True)
            change = "Sorted by energy level (high to low)"
        elif command.action == "sort_by_valence":
            ordered = sorted(tracks, key=self._valence, reverse=True)
            change = "Sorted by mood (valence high to low)"
        elif command.action == "sort_by_year":
            ordered = sorted(tracks, key=lambda track: track.release_year or 0, reverse=True)
            change = "Sorted by release year (newest first)"
        elif command.action == "energy_curve":
            ordered = self.energy_curve(tracks)
            change = "Created energy curve: chill lead-in, energetic peak, mid plateau, chill tail"
        else:
            raise UnknownActionError(self.command_type.value, command.action)

        logger.debug(f"{command.action}: reordered {len(ordered)} tracks")
        return EditResult(
            tracks=ordered,
            explanation=f"Reordered playlist using {command.action}",
            changes=[change]
        )

    def energy_curve(self, tracks: List[Track]) -> List[Track]:
        """
        Order tracks as chill lead-in, energetic peak, mid plateau, chill tail.

        Chill tracks (energy below the chill threshold) are split at a third
        of the chill group's own size: the first third opens the playlist and
        the rest closes it. Energetic tracks (above the energetic threshold)
        and the mid tracks in between keep their original relative order.
        """
        chill, energetic, mid = [], [], []
        for track in tracks:
            energy = self._energy(track)
            if energy < self.defaults.chill_energy_below:
                chill.append(track)
            elif energy > self.defaults.energetic_energy_above:
                energetic.append(track)
            else:
                mid.append(track)

        third = len(chill) // 3
        return chill[:third] + energetic + mid + chill[third:]

    def _tempo(self, track: Track) -> float:
        return value_or_default(track.tempo, self.defaults.missing_tempo)

    def _energy(self, track: Track) -> float:
        return value_or_default(track.energy, self.defaults.missing_energy)

    def _valence(self, track: Track) -> float:
        return value_or_default(track.valence, self.defaults.missing_valence)
