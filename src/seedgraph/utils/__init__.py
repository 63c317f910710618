"""Utility modules for seedgraph."""

from .settings import Settings, get_settings, save_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "save_settings",
    "reset_settings",
]
