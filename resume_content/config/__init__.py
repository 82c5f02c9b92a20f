"""Configuration package."""

from .settings import Settings, ValidationBounds, get_settings

__all__ = ["Settings", "ValidationBounds", "get_settings"]
