"""
Common interface of the edit strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from config.settings import EditorDefaults
from playlist_editor.exceptions import UnknownActionError
from playlist_editor.models.edit_command import CommandType, EditCommand
from playlist_editor.models.edit_result import EditResult
from playlist_editor.models.preferences import UserPreferences
from playlist_editor.models.track import Track

class EditStrategy(ABC):
    """Turns (tracks, command, preferences) into an EditResult for one command type."""

    command_type: CommandType = None

    def __init__(self, defaults: Optional[EditorDefaults] = None):
        self.defaults = defaults or EditorDefaults()

    @abstractmethod
    async def apply(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        """Apply the command. The input list is never mutated."""

    def _check_command(self, command: EditCommand):
        if command.type is not self.command_type:
            raise UnknownActionError(self.command_type.value, command.action)

class PureEditStrategy(EditStrategy):
    """Strategy without external calls; `run` can be used synchronously."""

    async def apply(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        return self.run(tracks, command, preferences)

    @abstractmethod
    def run(
        self,
        tracks: List[Track],
        command: EditCommand,
        preferences: Optional[UserPreferences] = None
    ) -> EditResult:
        """Apply the command without suspending."""
