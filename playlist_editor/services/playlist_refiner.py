"""
Refine strategy: preference-driven exclusion.
"""

import logging
from typing import List, Optional
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import PureEditStrategy
from playlist_editor.utils.track_utils import contains_any

logger = logging.getLogger(__name__)

class PlaylistRefiner(PureEditStrategy):
    """Drops banned songs and avoided artists. Without preferences it is a no-op."""

    command_type = CommandType.REFINE

    def run(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)
        refined = list(tracks)
        changes = []

        if preferences and preferences.banned_songs:
            banned = preferences.banned_songs
            before = len(refined)
            refined = [
                track for track in refined
                if not (contains_any(track.name, banned) or contains_any(track.artist, banned))
            ]
            changes.append(f"Removed {before - len(refined)} banned tracks")

        if preferences and preferences.avoid_artists:
            before = len(refined)
            refined = [
                track for track in refined
                if not contains_any(track.artist, preferences.avoid_artists)
            ]
            changes.append(f"Removed {before - len(refined)} tracks by avoided artists")

        if not changes:
            logger.debug("Refine requested without banned songs or avoided artists")
            return EditResult(
                tracks=refined,
                explanation="No banned songs or avoided artists are set; playlist left unchanged",
                changes=[]
            )

        return EditResult(
            tracks=refined,
            explanation="Refined playlist quality",
            changes=changes
        )
