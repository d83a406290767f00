"""
decisiondash configuration.

Pydantic-based settings read from environment variables (DECISIONDASH_*)
and an optional .env file.
"""

from decisiondash.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
