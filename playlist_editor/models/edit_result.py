"""
Result of a playlist edit.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List
from .track import Track

@dataclass
class EditResult:
    """New track order plus a one-line explanation and a change log."""
    tracks: List[Track]
    explanation: str
    changes: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.explanation:
            raise ValueError("An edit result always carries an explanation")
        if self.changes is None:
            self.changes = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tracks": [track.to_dict() for track in self.tracks],
            "explanation": self.explanation,
            "changes": list(self.changes)
        }
