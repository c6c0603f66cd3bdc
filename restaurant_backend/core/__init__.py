"""Core: settings and environment.

Single place for configuration shared by services and scripts.
"""

from restaurant_backend.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
