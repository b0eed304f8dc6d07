"""Configuration management for the listing search service."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
