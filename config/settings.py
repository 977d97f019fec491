"""
Application settings and configuration management.
Handles environment variables, external service configuration and the
default-value policy of the edit strategies.
"""

import os
from typing import Optional, Tuple
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

@dataclass
class APIConfig:
    """Configuration for external API services."""
    base_url: str
    timeout: int = 30
    max_retries: int = 3
    rate_limit_per_minute: int = 100

@dataclass
class CacheConfig:
    """Configuration for caching system."""
    redis_url: Optional[str] = None
    search_ttl: int = 86400  # 24 hours

@dataclass(frozen=True)
class EditorDefaults:
    """Thresholds and missing-value defaults applied by the edit strategies."""
    min_duration_seconds: float = 150.0          # remove_short_tracks, 2:30
    min_energy: float = 0.5                      # remove_low_energy
    min_valence: float = 0.3                     # remove_low_valence
    missing_energy: float = 0.5                  # energy when not measured
    missing_valence: float = 0.5                 # valence when not measured
    missing_tempo: float = 120.0                 # BPM when not measured
    chill_energy_below: float = 0.4              # energy_curve chill segment
    energetic_energy_above: float = 0.7          # energy_curve peak segment
    title_keywords: Tuple[str, ...] = ("remix", "live", "slowed", "sped up")
    english_ascii_ratio: float = 0.8             # remove_non_english
    expansion_results_per_query: int = 5
    replacement_results_per_query: int = 1
    default_expansion_type: str = "similar"

class Settings:
    """Main application settings."""

    def __init__(self):
        # OpenAI text-completion configuration
        self.openai = APIConfig(
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            timeout=int(os.getenv("OPENAI_TIMEOUT", "30")),
            max_retries=0
        )
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
        self.OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.2"))

        # Spotify catalog search configuration
        self.spotify = APIConfig(
            base_url="https://api.spotify.com/v1",
            rate_limit_per_minute=100
        )
        self.SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
        self.SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
        self.SPOTIFY_MARKET = os.getenv("SPOTIFY_MARKET", "US")

        # Cache Configuration
        self.REDIS_URL = os.getenv("REDIS_URL")
        self.cache = CacheConfig(redis_url=self.REDIS_URL)

        # Edit engine behaviour
        self.editor = EditorDefaults()
        self.APPLY_MOOD_REPLACEMENTS = _env_flag("APPLY_MOOD_REPLACEMENTS")

        # Logging Configuration
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def spotify_configured(self) -> bool:
        return bool(self.SPOTIFY_CLIENT_ID and self.SPOTIFY_CLIENT_SECRET)

    def validate(self, require_openai: bool = True, require_spotify: bool = False) -> bool:
        """Validate that required configuration is present."""
        required_vars = []

        if require_openai and not self.OPENAI_API_KEY:
            required_vars.append("OPENAI_API_KEY")
        if require_spotify and not self.SPOTIFY_CLIENT_ID:
            required_vars.append("SPOTIFY_CLIENT_ID")
        if require_spotify and not self.SPOTIFY_CLIENT_SECRET:
            required_vars.append("SPOTIFY_CLIENT_SECRET")

        if required_vars:
            raise ValueError(f"Missing required environment variables: {', '.join(required_vars)}")

        return True
