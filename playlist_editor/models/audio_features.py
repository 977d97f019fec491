"""
Audio features data model for playlist tracks.
Every attribute is optional: catalogs do not analyse every track, and the edit
strategies apply documented defaults where a value is missing.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, Optional

# Attributes measured on a 0.0-1.0 scale
UNIT_FEATURES = (
    "energy",
    "danceability",
    "acousticness",
    "instrumentalness",
    "liveness",
    "speechiness",
    "valence",
)

@dataclass
class AudioFeatures:
    """Numeric descriptors of a track's sonic character."""
    energy: Optional[float] = None           # Musical intensity (0.0-1.0)
    danceability: Optional[float] = None     # Rhythm and beat strength (0.0-1.0)
    acousticness: Optional[float] = None     # Acoustic vs electronic (0.0-1.0)
    instrumentalness: Optional[float] = None # Vocal vs instrumental (0.0-1.0)
    liveness: Optional[float] = None         # Live performance detection (0.0-1.0)
    speechiness: Optional[float] = None      # Speech-like qualities (0.0-1.0)
    valence: Optional[float] = None          # Musical positivity (0.0-1.0)
    tempo: Optional[float] = None            # Beats per minute, practically 40-250
    loudness: Optional[float] = None         # Overall loudness in dB, negative

    def __post_init__(self):
        """Validate feature ranges after initialization."""
        self._validate_ranges()

    def _validate_ranges(self):
        """Validate that all present features are within expected ranges."""
        for name in UNIT_FEATURES:
            value = getattr(self, name)
            if value is not None and not 0.0 <= value <= 1.0:
                raise ValueError(f"{name.title()} must be between 0.0 and 1.0, got {value}")
        if self.tempo is not None and self.tempo <= 0:
            raise ValueError(f"Tempo must be a positive BPM value, got {self.tempo}")

    @property
    def is_empty(self) -> bool:
        """True when no attribute has been measured."""
        return all(getattr(self, field.name) is None for field in fields(self))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation, omitting missing values."""
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AudioFeatures':
        """Create AudioFeatures from a dictionary, ignoring unknown keys."""
        values = {}
        for field in fields(cls):
            value = data.get(field.name)
            if value is not None:
                values[field.name] = float(value)
        return cls(**values)
