"""Version information for hashed-store."""

__version__ = "0.1.0"
