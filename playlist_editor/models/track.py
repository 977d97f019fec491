"""
Track data model representing one song instance inside one playlist.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List
from .audio_features import AudioFeatures
from playlist_editor.utils.track_utils import format_duration, release_year

@dataclass
class Track:
    """Represents a playlist entry with catalog metadata and audio features."""
    id: str                                   # Stable identifier within the track store
    catalog_id: str                           # External catalog ID (e.g. Spotify track ID)
    name: str                                 # Track name
    artist: str                               # Primary artist name
    album: str                                # Album name
    duration_ms: int                          # Track duration in milliseconds
    position: int = 0                         # Zero-based order index in the playlist
    audio_features: AudioFeatures = field(default_factory=AudioFeatures)
    popularity: Optional[int] = None          # Popularity score (0-100)
    release_date: Optional[str] = None        # ISO release date, any precision
    genres: List[str] = field(default_factory=list)
    image_url: Optional[str] = None
    preview_url: Optional[str] = None

    def __post_init__(self):
        """Validate fields after creation."""
        if self.audio_features is None:
            self.audio_features = AudioFeatures()
        if self.genres is None:
            self.genres = []
        if self.popularity is not None and not 0 <= self.popularity <= 100:
            raise ValueError(f"Popularity must be between 0 and 100, got {self.popularity}")

    @property
    def duration_seconds(self) -> float:
        """Get track duration in seconds."""
        return self.duration_ms / 1000.0

    @property
    def duration_formatted(self) -> str:
        """Get formatted duration string (M:SS)."""
        return format_duration(self.duration_seconds)

    @property
    def display_name(self) -> str:
        """Get display name for the track."""
        return f"{self.name} - {self.artist}"

    @property
    def release_year(self) -> Optional[int]:
        """Year derived from the release date, if known."""
        return release_year(self.release_date)

    @property
    def energy(self) -> Optional[float]:
        return self.audio_features.energy

    @property
    def valence(self) -> Optional[float]:
        return self.audio_features.valence

    @property
    def tempo(self) -> Optional[float]:
        return self.audio_features.tempo

    def to_dict(self) -> Dict[str, Any]:
        """Convert track to dictionary representation."""
        return {
            "id": self.id,
            "catalog_id": self.catalog_id,
            "name": self.name,
            "artist": self.artist,
            "album": self.album,
            "duration_ms": self.duration_ms,
            "duration_formatted": self.duration_formatted,
            "position": self.position,
            "audio_features": self.audio_features.to_dict(),
            "popularity": self.popularity,
            "release_date": self.release_date,
            "genres": list(self.genres),
            "image_url": self.image_url,
            "preview_url": self.preview_url
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Track':
        """
        Create Track from dictionary representation.

        Audio attributes are read from a nested "audio_features" object or,
        as the track store exports them, flat on the track record.
        """
        feature_data = dict(data.get("audio_features") or {})
        for name in ("energy", "danceability", "acousticness", "instrumentalness",
                     "liveness", "speechiness", "valence", "tempo", "loudness"):
            if name in data and name not in feature_data:
                feature_data[name] = data[name]

        catalog_id = data.get("catalog_id") or data.get("spotify_id") or data.get("id")
        if catalog_id in (None, ""):
            raise ValueError("Track record has no id, catalog_id or spotify_id")

        return cls(
            id=str(data["id"]) if "id" in data else str(catalog_id),
            catalog_id=str(catalog_id),
            name=data["name"],
            artist=data["artist"],
            album=data.get("album", ""),
            duration_ms=int(data.get("duration_ms", 0)),
            position=int(data.get("position", 0)),
            audio_features=AudioFeatures.from_dict(feature_data),
            popularity=data.get("popularity"),
            release_date=data.get("release_date"),
            genres=list(data.get("genres") or []),
            image_url=data.get("image_url"),
            preview_url=data.get("preview_url")
        )

    @classmethod
    def from_spotify_data(cls, spotify_track: Dict[str, Any], position: int = 0) -> 'Track':
        """Create Track from a Spotify Web API track object."""
        artists = [artist["name"] for artist in spotify_track.get("artists", [])]
        album = spotify_track.get("album", {})
        images = album.get("images") or []

        return cls(
            id=spotify_track["id"],
            catalog_id=spotify_track["id"],
            name=spotify_track["name"],
            artist=artists[0] if artists else "Unknown Artist",
            album=album.get("name", "Unknown Album"),
            duration_ms=spotify_track.get("duration_ms", 0),
            position=position,
            popularity=spotify_track.get("popularity"),
            release_date=album.get("release_date"),
            image_url=images[0].get("url") if images else None,
            preview_url=spotify_track.get("preview_url")
        )
