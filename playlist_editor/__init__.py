"""Natural-language playlist edit engine."""

__version__ = "1.0.0"
