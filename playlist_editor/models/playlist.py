"""
Playlist data model: the caller-side view that edit results are merged into.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from .track import Track
from .edit_result import EditResult

@dataclass
class Playlist:
    """Represents a user's playlist with its ordered tracks."""
    id: str
    name: str
    description: Optional[str] = None
    tracks: List[Track] = field(default_factory=list)
    owner: Optional[str] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize default values after creation."""
        if self.tracks is None:
            self.tracks = []
        if self.updated_at is None:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def track_count(self) -> int:
        """Get number of tracks in playlist."""
        return len(self.tracks)

    @property
    def total_duration_ms(self) -> int:
        return sum(track.duration_ms for track in self.tracks)

    @property
    def total_duration_formatted(self) -> str:
        """Get formatted total duration string (H:MM:SS or M:SS)."""
        total_seconds = self.total_duration_ms // 1000
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        else:
            return f"{minutes}:{seconds:02d}"

    def ordered_tracks(self) -> List[Track]:
        """Tracks in stored position order."""
        return sorted(self.tracks, key=lambda track: track.position)

    def apply_edit(self, result: EditResult) -> 'Playlist':
        """
        Merge an edit result into the playlist.

        Index in the result's track list is the new position, so positions
        are renumbered contiguously from zero.
        """
        self.tracks = [
            replace(track, position=index)
            for index, track in enumerate(result.tracks)
        ]
        self.updated_at = datetime.now(timezone.utc)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert playlist to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "owner": self.owner,
            "tracks": [track.to_dict() for track in self.tracks],
            "track_count": self.track_count,
            "total_duration_formatted": self.total_duration_formatted,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Playlist':
        """Create Playlist from dictionary representation."""
        tracks = [Track.from_dict(track_data) for track_data in data.get("tracks", [])]

        updated_at = None
        if data.get("updated_at"):
            updated_at = datetime.fromisoformat(data["updated_at"])

        return cls(
            id=str(data.get("id", "local")),
            name=data.get("name", "Untitled Playlist"),
            description=data.get("description"),
            tracks=tracks,
            owner=data.get("owner"),
            updated_at=updated_at
        )
