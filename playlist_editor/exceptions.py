"""
Error taxonomy for the playlist edit engine.
Every error raised by the classifier, the strategies or the external clients
derives from PlaylistEditError so callers can surface one failure type.
"""

class PlaylistEditError(Exception):
    """Base exception for playlist edit failures."""
    pass

class ClassificationError(PlaylistEditError):
    """Raised when a free-text command cannot be turned into an EditCommand."""
    pass

class UnknownCommandTypeError(PlaylistEditError):
    """Raised when a command type is outside the known taxonomy."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(f"Unknown command type: {command_type!r}")

class UnknownActionError(PlaylistEditError):
    """Raised when an action is not part of its command type's vocabulary."""

    def __init__(self, command_type: str, action: str):
        self.command_type = command_type
        self.action = action
        super().__init__(f"Unknown action {action!r} for command type {command_type!r}")

class InvalidParameterError(PlaylistEditError, ValueError):
    """Raised when a command parameter has the wrong shape or range."""
    pass

class ExternalServiceError(PlaylistEditError):
    """Raised when the completion oracle or the music catalog fails."""
    pass
